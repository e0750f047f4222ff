"""
Entités du domaine
"""

from domain.entities.user import UserAccount, UserProfile, DetailedUser, UserOrgAssociation
from domain.entities.organization import OrgAccount, OrgProfile, DetailedOrg
from domain.entities.profile_update import (
    DEFAULT, REQUIRED_FIELDS, UserProfileField, OrgProfileField, normalize_updates
)

__all__ = [
    "UserAccount",
    "UserProfile",
    "DetailedUser",
    "UserOrgAssociation",
    "OrgAccount",
    "OrgProfile",
    "DetailedOrg",
    "DEFAULT",
    "REQUIRED_FIELDS",
    "UserProfileField",
    "OrgProfileField",
    "normalize_updates"
]
