"""
Mises à jour partielles de profils

Une mise à jour est un mapping nom de champ -> valeur. Seuls les champs
présents sont modifiés :
- une valeur None est ignorée (le champ n'est pas touché) ;
- la valeur DEFAULT demande la valeur par défaut définie par le store ;
- toute autre valeur est écrite telle quelle.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Type, TypeVar

from domain.exceptions import ValidationError

DEFAULT = "DEFAULT"


class UserProfileField(str, Enum):
    """Champs modifiables d'un profil utilisateur"""
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    EMAIL = "email"
    PHONE = "phone"
    LAST_LOGIN = "last_login"


class OrgProfileField(str, Enum):
    """Champs modifiables d'un profil d'organisation"""
    PHONE = "phone"
    ADDRESS = "address"
    TIMEZONE = "timezone"
    WEBSITE = "website"


# Colonnes qui ne peuvent pas être vidées
REQUIRED_FIELDS: FrozenSet[Enum] = frozenset({
    UserProfileField.FIRST_NAME,
    UserProfileField.LAST_NAME,
})

F = TypeVar("F", bound=Enum)


def normalize_updates(updates: Mapping[str, Any], fields: Type[F]) -> Dict[F, Any]:
    """
    Convertit un mapping brut en mapping champ -> valeur.

    Args:
        updates: Mapping nom de champ -> nouvelle valeur
        fields: Enum des champs autorisés

    Returns:
        Les champs à modifier, sans ceux dont la valeur est None

    Raises:
        ValidationError: Si un champ est inconnu ou si un champ requis est vidé
    """
    normalized: Dict[F, Any] = {}
    for name, value in updates.items():
        try:
            field = fields(name)
        except ValueError:
            raise ValidationError(
                f"Unknown profile field '{name}'",
                details={"field": name}
            )

        if value is None:
            continue
        if field in REQUIRED_FIELDS and value == "":
            raise ValidationError(
                f"Profile field '{name}' cannot be empty",
                details={"field": name}
            )
        normalized[field] = value
    return normalized
