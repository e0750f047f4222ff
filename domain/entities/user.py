"""
Entités User - Compte, profil et vue détaillée d'un utilisateur
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from dataclasses import dataclass

from domain.exceptions import ValidationError

if TYPE_CHECKING:
    from domain.entities.organization import OrgAccount


@dataclass
class UserAccount:
    """Compte utilisateur (identité)"""
    id: str
    username: str
    hashed_password: str
    org_type: Optional[str] = None
    joined_on: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.id:
            raise ValidationError("Account id cannot be empty")
        if not self.username or not self.hashed_password:
            raise ValidationError("username and password are required")


@dataclass
class UserProfile:
    """Profil 1:1 d'un compte utilisateur"""
    account_id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    last_login: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.first_name or not self.last_name:
            raise ValidationError("first name and last name are required")


@dataclass
class DetailedUser:
    """Vue composée renvoyée par le login (non stockée)"""
    account: UserAccount
    profile: UserProfile
    org: Optional["OrgAccount"] = None


@dataclass
class UserOrgAssociation:
    """Lien entre un compte utilisateur et une organisation"""
    user_id: str
    org_id: str
