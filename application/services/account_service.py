"""
AccountService - Service applicatif pour les comptes utilisateurs et les organisations

Orchestre les opérations du repository en workflows multi-étapes. Les
créations (utilisateur, organisation) sont des workflows compensés : si une
étape échoue après la création du compte, le compte est supprimé puis
l'erreur d'origine est relancée.
"""

import logging
import threading
import uuid
from typing import Any, Mapping, Optional

from domain.entities import (
    DEFAULT, UserAccount, UserProfile, DetailedUser,
    OrgAccount, OrgProfile, DetailedOrg
)
from domain.exceptions import ValidationError
from domain.repositories.account_repository import AccountRepository
from application.workflow import CompensatingWorkflow, WorkflowStep, WorkflowState
from infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


class AccountService:
    """Service pour la gestion des comptes et des organisations"""

    def __init__(self, account_repository: AccountRepository, password_hasher: PasswordHasher):
        self.account_repository = account_repository
        self.password_hasher = password_hasher

    @staticmethod
    def generate_id() -> str:
        """Génère un identifiant unique de compte"""
        return str(uuid.uuid4())

    def create_user(
        self,
        org_id: str,
        username: str,
        password: str,
        org_type: Optional[str],
        first_name: str,
        last_name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> str:
        """
        Crée un compte, son profil et son association à une organisation.

        Returns:
            L'ID du compte créé

        Raises:
            ValidationError: Si une entrée requise est vide (avant toute écriture)
            PersistenceError: Si une écriture échoue (le compte est alors supprimé)
        """
        if not org_id:
            raise ValidationError("organization id is required")
        if not username or not password:
            raise ValidationError("username and password are required")

        account_id = self.generate_id()
        account = UserAccount(
            id=account_id,
            username=username,
            hashed_password=self.password_hasher.hash(password),
            org_type=org_type
        )
        profile = UserProfile(
            account_id=account_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone
        )

        workflow = CompensatingWorkflow("create_user", [
            WorkflowStep(
                name="create_user_account",
                action=lambda: self.account_repository.create_user_account(account),
                reached=WorkflowState.ACCOUNT_CREATED,
                compensation=lambda: self.account_repository.delete_user_account(account_id)
            ),
            WorkflowStep(
                name="create_user_profile",
                action=lambda: self.account_repository.create_user_profile(profile),
                reached=WorkflowState.PROFILE_CREATED
            ),
            WorkflowStep(
                name="associate_user_to_org",
                action=lambda: self.account_repository.associate_user_to_org(account_id, org_id),
                reached=WorkflowState.ASSOCIATED
            ),
        ])
        workflow.run(cancel_event)

        logger.info(f"User '{username}' created with account '{account_id}' in org '{org_id}'")
        return account_id

    def delete_user_account(self, account_id: str) -> None:
        """Supprime un compte utilisateur"""
        self.account_repository.delete_user_account(account_id)
        logger.info(f"User account '{account_id}' deleted")

    def get_user_account(self, account_id: str) -> UserAccount:
        """Récupère un compte utilisateur par son ID"""
        return self.account_repository.get_user_account(account_id)

    def update_user_profile(self, account_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour partiellement le profil d'un utilisateur"""
        self.account_repository.update_user_profile(account_id, updates)
        logger.info(f"User profile '{account_id}' updated")

    def login(self, org_id: str, username: str, password: str) -> DetailedUser:
        """
        Authentifie un utilisateur dans une organisation.

        Raises:
            AuthError: Nom d'utilisateur inconnu ou mot de passe incorrect
            AuthorizationError: L'utilisateur n'est pas associé à l'organisation
            PersistenceError: Échec de la mise à jour de last_login ou de la lecture du profil
        """
        account = self.account_repository.get_account_by_credentials(username, password)
        self.account_repository.confirm_user_to_org_association(account.id, org_id)
        self.account_repository.update_user_profile(account.id, {"last_login": DEFAULT})
        profile = self.account_repository.get_user_profile(account.id)
        org = self.account_repository.get_org_account(org_id)

        logger.info(f"Login success: User '{username}' logged into org '{org_id}'")
        return DetailedUser(account=account, profile=profile, org=org)

    def create_org(
        self,
        name: str,
        org_type: Optional[str],
        phone: Optional[str] = None,
        address: Optional[str] = None,
        timezone: Optional[str] = None,
        website: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> str:
        """Crée une organisation et son profil, retourne l'ID de l'organisation"""
        org_id = self.generate_id()
        org = OrgAccount(id=org_id, name=name, type=org_type)
        profile = OrgProfile(
            account_id=org_id,
            phone=phone,
            address=address,
            timezone=timezone,
            website=website
        )

        workflow = CompensatingWorkflow("create_org", [
            WorkflowStep(
                name="create_org_account",
                action=lambda: self.account_repository.create_org_account(org),
                reached=WorkflowState.ACCOUNT_CREATED,
                compensation=lambda: self.account_repository.delete_org_account(org_id)
            ),
            WorkflowStep(
                name="create_org_profile",
                action=lambda: self.account_repository.create_org_profile(profile),
                reached=WorkflowState.PROFILE_CREATED
            ),
        ])
        workflow.run(cancel_event)

        logger.info(f"Organization '{name}' created with id '{org_id}'")
        return org_id

    def get_org_account(self, org_id: str) -> OrgAccount:
        """Récupère le compte d'une organisation"""
        return self.account_repository.get_org_account(org_id)

    def get_org(self, org_id: str) -> DetailedOrg:
        """Récupère une organisation avec son profil"""
        account = self.account_repository.get_org_account(org_id)
        profile = self.account_repository.get_org_profile(org_id)
        return DetailedOrg(account=account, profile=profile)

    def update_org_profile(self, org_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour partiellement le profil d'une organisation"""
        self.account_repository.update_org_profile(org_id, updates)
        logger.info(f"Organization profile '{org_id}' updated")
