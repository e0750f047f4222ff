"""
Entités Organization - Compte et profil d'une organisation
"""

from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from domain.exceptions import ValidationError


@dataclass
class OrgAccount:
    """Compte organisation (identité)"""
    id: str
    name: str
    type: Optional[str] = None
    joined_on: Optional[datetime] = None

    def __post_init__(self):
        """Validation de l'entité"""
        if not self.id:
            raise ValidationError("Organization id cannot be empty")
        if not self.name:
            raise ValidationError("organization name is required")


@dataclass
class OrgProfile:
    """Profil 1:1 d'une organisation"""
    account_id: str
    phone: Optional[str] = None
    address: Optional[str] = None
    timezone: Optional[str] = None
    website: Optional[str] = None


@dataclass
class DetailedOrg:
    """Vue composée compte + profil d'une organisation"""
    account: OrgAccount
    profile: OrgProfile
