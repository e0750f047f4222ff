"""
Implémentation SQLAlchemy de l'AccountRepository

Chaque méthode exécute une seule action de persistance. Les erreurs du
store sont converties en erreurs du domaine (PersistenceError et sous-types)
après rollback de la session.
"""

import logging
from contextlib import contextmanager
from typing import Any, Mapping, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from domain.entities import UserAccount, UserProfile, OrgAccount, OrgProfile
from domain.exceptions import (
    AuthError, AuthorizationError, NotFoundError, PersistenceError,
    PersistenceTimeoutError, ValidationError
)
from domain.repositories import AccountRepository
from infrastructure.database.models import (
    UserAccountModel, UserProfileModel, OrgAccountModel, OrgProfileModel, OrgUserModel
)
from infrastructure.database.mappers import (
    UserAccountMapper, UserProfileMapper, OrgAccountMapper, OrgProfileMapper
)
from infrastructure.database.profile_updates import (
    compile_user_profile_update, compile_org_profile_update
)
from infrastructure.security.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

# Code SQLSTATE de PostgreSQL pour "canceling statement due to statement timeout"
QUERY_CANCELED = "57014"
# SQLite abandonne après busy_timeout avec ce message
SQLITE_BUSY_MESSAGE = "database is locked"


def _is_statement_timeout(error: OperationalError) -> bool:
    """Timeout de requête PostgreSQL ou verrou SQLite non obtenu à temps"""
    if getattr(error.orig, "pgcode", None) == QUERY_CANCELED:
        return True
    return SQLITE_BUSY_MESSAGE in str(error.orig)


class SQLAlchemyAccountRepository(AccountRepository):
    """Implémentation SQLAlchemy de l'AccountRepository"""

    def __init__(self, session: Session, password_hasher: Optional[PasswordHasher] = None):
        self.session = session
        self.password_hasher = password_hasher or PasswordHasher()

    @contextmanager
    def _persistence_errors(self, message: str):
        """Convertit les erreurs SQLAlchemy en PersistenceError"""
        try:
            yield
        except PoolTimeoutError as e:
            self.session.rollback()
            logger.error(f"{message}: timed out waiting for a connection ({e})")
            raise PersistenceTimeoutError(f"{message}: timed out") from e
        except OperationalError as e:
            self.session.rollback()
            if _is_statement_timeout(e):
                logger.error(f"{message}: statement timeout")
                raise PersistenceTimeoutError(f"{message}: timed out") from e
            logger.error(f"{message}: {e}")
            raise PersistenceError(message) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"{message}: {e}")
            raise PersistenceError(message) from e

    def _add(self, model: Any, message: str) -> None:
        with self._persistence_errors(message):
            self.session.add(model)
            self.session.commit()

    # --- Comptes utilisateurs ---

    def create_user_account(self, account: UserAccount) -> None:
        """Insère un compte utilisateur"""
        if not account.username or not account.hashed_password:
            raise ValidationError("username and password are required")
        self._add(UserAccountMapper.to_model(account), "error saving user account")

    def delete_user_account(self, account_id: str) -> None:
        """Supprime un compte utilisateur ; le profil et les associations suivent en cascade"""
        with self._persistence_errors("error deleting user account"):
            self.session.execute(
                delete(UserAccountModel).where(UserAccountModel.id == account_id)
            )
            self.session.commit()

    def get_user_account(self, account_id: str) -> UserAccount:
        """Trouve un compte utilisateur par son ID"""
        with self._persistence_errors("error getting user account"):
            model = self.session.query(UserAccountModel).filter(UserAccountModel.id == account_id).first()
        if not model:
            raise NotFoundError("User account", account_id)
        return UserAccountMapper.to_domain(model)

    def get_account_by_credentials(self, username: str, password: str) -> UserAccount:
        """Trouve un compte par nom d'utilisateur puis vérifie le mot de passe"""
        with self._persistence_errors("error getting user account"):
            model = self.session.query(UserAccountModel).filter(UserAccountModel.username == username).first()

        if not model:
            logger.warning(f"Authentication failed: User '{username}' not found")
            raise AuthError("Invalid credentials")

        if not self.password_hasher.verify(password, model.hashed_password):
            logger.warning(f"Authentication failed: Invalid password for user '{username}'")
            raise AuthError("Invalid credentials")

        return UserAccountMapper.to_domain(model)

    # --- Profils utilisateurs ---

    def create_user_profile(self, profile: UserProfile) -> None:
        """Insère le profil d'un compte"""
        if not profile.first_name or not profile.last_name:
            raise ValidationError("first name and last name are required")
        self._add(UserProfileMapper.to_model(profile), "error saving user profile")

    def get_user_profile(self, account_id: str) -> UserProfile:
        """Trouve le profil d'un compte"""
        with self._persistence_errors("error getting user profile"):
            model = self.session.query(UserProfileModel).filter(UserProfileModel.account_id == account_id).first()
        if not model:
            raise NotFoundError("User profile", account_id)
        return UserProfileMapper.to_domain(model)

    def update_user_profile(self, account_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour uniquement les champs présents dans updates"""
        statement = compile_user_profile_update(account_id, updates)
        if statement is None:
            return

        with self._persistence_errors("unable to update user profile"):
            result = self.session.execute(statement)
            self.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("User profile", account_id)

    # --- Organisations ---

    def create_org_account(self, org: OrgAccount) -> None:
        """Insère un compte organisation"""
        self._add(OrgAccountMapper.to_model(org), "error saving organization account")

    def delete_org_account(self, org_id: str) -> None:
        """Supprime une organisation ; son profil et ses associations suivent en cascade"""
        with self._persistence_errors("error deleting organization account"):
            self.session.execute(
                delete(OrgAccountModel).where(OrgAccountModel.id == org_id)
            )
            self.session.commit()

    def get_org_account(self, org_id: str) -> OrgAccount:
        """Trouve une organisation par son ID"""
        with self._persistence_errors("error getting organization account"):
            model = self.session.query(OrgAccountModel).filter(OrgAccountModel.id == org_id).first()
        if not model:
            raise NotFoundError("Organization account", org_id)
        return OrgAccountMapper.to_domain(model)

    def create_org_profile(self, profile: OrgProfile) -> None:
        """Insère le profil d'une organisation"""
        self._add(OrgProfileMapper.to_model(profile), "error saving organization profile")

    def get_org_profile(self, org_id: str) -> OrgProfile:
        """Trouve le profil d'une organisation"""
        with self._persistence_errors("error getting organization profile"):
            model = self.session.query(OrgProfileModel).filter(OrgProfileModel.account_id == org_id).first()
        if not model:
            raise NotFoundError("Organization profile", org_id)
        return OrgProfileMapper.to_domain(model)

    def update_org_profile(self, org_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour uniquement les champs présents dans updates"""
        statement = compile_org_profile_update(org_id, updates)
        if statement is None:
            return

        with self._persistence_errors("unable to update organization profile"):
            result = self.session.execute(statement)
            self.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Organization profile", org_id)

    # --- Associations ---

    def associate_user_to_org(self, user_id: str, org_id: str) -> None:
        """Associe un utilisateur à une organisation"""
        self._add(
            OrgUserModel(user_id=user_id, org_id=org_id),
            "error associating user to organization"
        )

    def confirm_user_to_org_association(self, user_id: str, org_id: str) -> None:
        """Vérifie qu'au moins une association existe"""
        with self._persistence_errors("error confirming user association to organization"):
            count = (
                self.session.query(func.count(OrgUserModel.id))
                .filter(OrgUserModel.user_id == user_id, OrgUserModel.org_id == org_id)
                .scalar()
            )
        if not count:
            logger.warning(f"Authorization failed: User '{user_id}' not associated to org '{org_id}'")
            raise AuthorizationError(
                "user not associated to organization",
                details={"user_id": user_id, "org_id": org_id}
            )
