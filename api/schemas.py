"""
accounts-api/api/schemas.py
Schémas Pydantic pour la validation et la sérialisation
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, field_serializer
from datetime import datetime

# ============================================================================
# RÉPONSES GÉNÉRIQUES
# ============================================================================

class IdResponse(BaseModel):
    """Identifiant d'une ressource créée"""
    id: str

class OkResponse(BaseModel):
    ok: str = "ok"

# ============================================================================
# UTILISATEURS
# ============================================================================

class UserCreate(BaseModel):
    """Schéma pour créer un utilisateur dans une organisation"""
    username: str
    password: str
    org_type: Optional[str] = None
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None

class UserAccountResponse(BaseModel):
    """Compte utilisateur (sans le mot de passe)"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    org_type: Optional[str] = None
    joined_on: Optional[datetime] = None

    @field_serializer('joined_on')
    def serialize_joined_on(self, dt: Optional[datetime], _info):
        if dt is None:
            return None
        return dt.isoformat()

class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    last_login: Optional[datetime] = None

    @field_serializer('last_login')
    def serialize_last_login(self, dt: Optional[datetime], _info):
        if dt is None:
            return None
        return dt.isoformat()

class ProfileUpdates(BaseModel):
    """Champs modifiables par l'utilisateur (last_login est réservé au login)"""
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class UpdateProfileRequest(BaseModel):
    profile_updates: ProfileUpdates

# ============================================================================
# ORGANISATIONS
# ============================================================================

class OrgCreate(BaseModel):
    """Schéma pour créer une organisation"""
    name: str
    type: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    timezone: Optional[str] = None
    website: Optional[str] = None

class OrgAccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: Optional[str] = None
    joined_on: Optional[datetime] = None

class OrgProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    phone: Optional[str] = None
    address: Optional[str] = None
    timezone: Optional[str] = None
    website: Optional[str] = None

class OrgResponse(BaseModel):
    """Organisation avec son profil"""
    account: OrgAccountResponse
    profile: OrgProfileResponse

class OrgProfileUpdates(BaseModel):
    model_config = ConfigDict(extra="forbid")

    phone: Optional[str] = None
    address: Optional[str] = None
    timezone: Optional[str] = None
    website: Optional[str] = None

class UpdateOrgProfileRequest(BaseModel):
    profile_updates: OrgProfileUpdates

# ============================================================================
# AUTHENTIFICATION
# ============================================================================

class LoginRequest(BaseModel):
    username: str
    password: str

class LoginResponse(BaseModel):
    """Compte, profil et organisation de l'utilisateur connecté"""
    user_account: UserAccountResponse
    user_profile: UserProfileResponse
    org_account: Optional[OrgAccountResponse] = None
