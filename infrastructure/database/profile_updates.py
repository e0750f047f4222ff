"""
Compilateur de mises à jour partielles

Transforme un mapping champ -> valeur en requête UPDATE qui ne modifie que
les colonnes nommées. Les valeurs sont toujours passées en paramètres liés ;
le sentinel DEFAULT est remplacé par l'expression par défaut de la colonne.
"""

from typing import Any, Dict, Mapping, Optional, Type

from sqlalchemy import Column, Table, literal, null, update
from sqlalchemy.sql.dml import Update

from domain.entities import DEFAULT, UserProfileField, OrgProfileField, normalize_updates
from infrastructure.database.models import UserProfileModel, OrgProfileModel

_user_profiles: Table = UserProfileModel.__table__
_org_profiles: Table = OrgProfileModel.__table__

USER_PROFILE_COLUMNS: Dict[UserProfileField, Column] = {
    UserProfileField.FIRST_NAME: _user_profiles.c.first_name,
    UserProfileField.LAST_NAME: _user_profiles.c.last_name,
    UserProfileField.EMAIL: _user_profiles.c.email,
    UserProfileField.PHONE: _user_profiles.c.phone,
    UserProfileField.LAST_LOGIN: _user_profiles.c.last_login,
}

ORG_PROFILE_COLUMNS: Dict[OrgProfileField, Column] = {
    OrgProfileField.PHONE: _org_profiles.c.phone,
    OrgProfileField.ADDRESS: _org_profiles.c.address,
    OrgProfileField.TIMEZONE: _org_profiles.c.timezone,
    OrgProfileField.WEBSITE: _org_profiles.c.website,
}


def default_expression(column: Column):
    """Expression SQL de la valeur par défaut d'une colonne (NULL si elle n'en a pas)"""
    server_default = column.server_default
    if server_default is None:
        return null()
    arg = server_default.arg
    if isinstance(arg, str):
        return literal(arg)
    return arg


def _is_default(value: Any) -> bool:
    return isinstance(value, str) and value == DEFAULT


def compile_update(
    table: Table,
    key_column: Column,
    key: str,
    updates: Mapping[str, Any],
    fields: Type,
    columns: Mapping[Any, Column]
) -> Optional[Update]:
    """
    Construit la requête UPDATE pour les champs présents dans updates.

    Returns:
        La requête, ou None si aucun champ n'est à modifier
    """
    normalized = normalize_updates(updates, fields)
    if not normalized:
        return None

    values = {}
    for field, value in normalized.items():
        column = columns[field]
        values[column.name] = default_expression(column) if _is_default(value) else value

    return update(table).where(key_column == key).values(**values)


def compile_user_profile_update(account_id: str, updates: Mapping[str, Any]) -> Optional[Update]:
    """UPDATE user_profiles pour un compte"""
    return compile_update(
        _user_profiles, _user_profiles.c.account_id, account_id,
        updates, UserProfileField, USER_PROFILE_COLUMNS
    )


def compile_org_profile_update(org_id: str, updates: Mapping[str, Any]) -> Optional[Update]:
    """UPDATE org_profiles pour une organisation"""
    return compile_update(
        _org_profiles, _org_profiles.c.account_id, org_id,
        updates, OrgProfileField, ORG_PROFILE_COLUMNS
    )
