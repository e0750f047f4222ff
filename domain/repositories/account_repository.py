"""
Interface AccountRepository - Définit les opérations d'accès aux données
pour les comptes utilisateurs, les organisations et leurs associations

Chaque méthode correspond à une seule action de persistance.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from domain.entities import (
    UserAccount, UserProfile, OrgAccount, OrgProfile
)


class AccountRepository(ABC):
    """Interface pour le repository des comptes"""

    # --- Comptes utilisateurs ---

    @abstractmethod
    def create_user_account(self, account: UserAccount) -> None:
        """Insère un compte utilisateur"""
        pass

    @abstractmethod
    def delete_user_account(self, account_id: str) -> None:
        """Supprime un compte utilisateur (sans erreur s'il n'existe pas)"""
        pass

    @abstractmethod
    def get_user_account(self, account_id: str) -> UserAccount:
        """Trouve un compte par son ID, lève NotFoundError sinon"""
        pass

    @abstractmethod
    def get_account_by_credentials(self, username: str, password: str) -> UserAccount:
        """Trouve un compte par nom d'utilisateur et vérifie le mot de passe, lève AuthError sinon"""
        pass

    # --- Profils utilisateurs ---

    @abstractmethod
    def create_user_profile(self, profile: UserProfile) -> None:
        """Insère le profil d'un compte"""
        pass

    @abstractmethod
    def get_user_profile(self, account_id: str) -> UserProfile:
        """Trouve le profil d'un compte, lève NotFoundError sinon"""
        pass

    @abstractmethod
    def update_user_profile(self, account_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour uniquement les champs présents dans updates"""
        pass

    # --- Organisations ---

    @abstractmethod
    def create_org_account(self, org: OrgAccount) -> None:
        """Insère un compte organisation"""
        pass

    @abstractmethod
    def delete_org_account(self, org_id: str) -> None:
        """Supprime un compte organisation (sans erreur s'il n'existe pas)"""
        pass

    @abstractmethod
    def get_org_account(self, org_id: str) -> OrgAccount:
        """Trouve une organisation par son ID, lève NotFoundError sinon"""
        pass

    @abstractmethod
    def create_org_profile(self, profile: OrgProfile) -> None:
        """Insère le profil d'une organisation"""
        pass

    @abstractmethod
    def get_org_profile(self, org_id: str) -> OrgProfile:
        """Trouve le profil d'une organisation, lève NotFoundError sinon"""
        pass

    @abstractmethod
    def update_org_profile(self, org_id: str, updates: Mapping[str, Any]) -> None:
        """Met à jour uniquement les champs présents dans updates"""
        pass

    # --- Associations ---

    @abstractmethod
    def associate_user_to_org(self, user_id: str, org_id: str) -> None:
        """Associe un utilisateur à une organisation"""
        pass

    @abstractmethod
    def confirm_user_to_org_association(self, user_id: str, org_id: str) -> None:
        """Vérifie l'association, lève AuthorizationError si elle n'existe pas"""
        pass
