"""
accounts-api/api/endpoints.py
Routes de l'API : chaque route décode la requête, appelle une opération
de l'AccountService et sérialise le résultat.

Les erreurs du domaine sont converties en réponses HTTP par les handlers
déclarés dans app.py.
"""

import logging
from fastapi import APIRouter, Depends, Response, status

from api import schemas
from application.services.account_service import AccountService
from infrastructure.dependencies import get_account_service

logger = logging.getLogger(__name__)

router = APIRouter()

# ============================================================================
# UTILISATEURS
# ============================================================================

@router.post(
    "/orgs/{org_id}/users",
    response_model=schemas.IdResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Users"]
)
def create_user(
    org_id: str,
    user_in: schemas.UserCreate,
    service: AccountService = Depends(get_account_service)
):
    """Crée un utilisateur (compte + profil) associé à l'organisation"""
    account_id = service.create_user(
        org_id=org_id,
        username=user_in.username,
        password=user_in.password,
        org_type=user_in.org_type,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        email=user_in.email,
        phone=user_in.phone
    )
    return schemas.IdResponse(id=account_id)


@router.get("/users/{account_id}", response_model=schemas.UserAccountResponse, tags=["Users"])
def get_user(account_id: str, service: AccountService = Depends(get_account_service)):
    """Récupère un compte utilisateur"""
    return service.get_user_account(account_id)


@router.delete("/users/{account_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Users"])
def delete_user(account_id: str, service: AccountService = Depends(get_account_service)):
    """Supprime un compte utilisateur"""
    service.delete_user_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/users/{account_id}/profile", response_model=schemas.OkResponse, tags=["Users"])
def update_user_profile(
    account_id: str,
    request: schemas.UpdateProfileRequest,
    service: AccountService = Depends(get_account_service)
):
    """Met à jour les champs envoyés du profil"""
    updates = request.profile_updates.model_dump(exclude_unset=True)
    service.update_user_profile(account_id, updates)
    return schemas.OkResponse()

# ============================================================================
# AUTHENTIFICATION
# ============================================================================

@router.post("/orgs/{org_id}/login", response_model=schemas.LoginResponse, tags=["Authentication"])
def login(
    org_id: str,
    credentials: schemas.LoginRequest,
    service: AccountService = Depends(get_account_service)
):
    """Vérifie les identifiants d'un utilisateur dans une organisation"""
    detailed_user = service.login(org_id, credentials.username, credentials.password)
    return schemas.LoginResponse(
        user_account=schemas.UserAccountResponse.model_validate(detailed_user.account),
        user_profile=schemas.UserProfileResponse.model_validate(detailed_user.profile),
        org_account=(
            schemas.OrgAccountResponse.model_validate(detailed_user.org)
            if detailed_user.org else None
        )
    )

# ============================================================================
# ORGANISATIONS
# ============================================================================

@router.post(
    "/orgs",
    response_model=schemas.IdResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Organizations"]
)
def create_org(org_in: schemas.OrgCreate, service: AccountService = Depends(get_account_service)):
    """Crée une organisation et son profil"""
    org_id = service.create_org(
        name=org_in.name,
        org_type=org_in.type,
        phone=org_in.phone,
        address=org_in.address,
        timezone=org_in.timezone,
        website=org_in.website
    )
    return schemas.IdResponse(id=org_id)


@router.get("/orgs/{org_id}", response_model=schemas.OrgResponse, tags=["Organizations"])
def get_org(org_id: str, service: AccountService = Depends(get_account_service)):
    """Récupère une organisation avec son profil"""
    detailed_org = service.get_org(org_id)
    return schemas.OrgResponse(
        account=schemas.OrgAccountResponse.model_validate(detailed_org.account),
        profile=schemas.OrgProfileResponse.model_validate(detailed_org.profile)
    )


@router.put("/orgs/{org_id}/profile", response_model=schemas.OkResponse, tags=["Organizations"])
def update_org_profile(
    org_id: str,
    request: schemas.UpdateOrgProfileRequest,
    service: AccountService = Depends(get_account_service)
):
    """Met à jour les champs envoyés du profil de l'organisation"""
    updates = request.profile_updates.model_dump(exclude_unset=True)
    service.update_org_profile(org_id, updates)
    return schemas.OkResponse()
