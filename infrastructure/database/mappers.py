"""
Mappers - Conversion entre modèles SQLAlchemy et entités de domaine
"""

from typing import Optional
from infrastructure.database.models import (
    UserAccountModel, UserProfileModel, OrgAccountModel, OrgProfileModel
)
from domain.entities import UserAccount, UserProfile, OrgAccount, OrgProfile


class UserAccountMapper:
    """Mapper entre UserAccountModel et UserAccount"""

    @staticmethod
    def to_domain(model: UserAccountModel) -> UserAccount:
        """Convertit un UserAccountModel en entité UserAccount"""
        return UserAccount(
            id=model.id,
            username=model.username,
            hashed_password=model.hashed_password,
            org_type=model.org_type,
            joined_on=model.joined_on
        )

    @staticmethod
    def to_model(account: UserAccount, model: Optional[UserAccountModel] = None) -> UserAccountModel:
        """Convertit une entité UserAccount en UserAccountModel"""
        if model is None:
            model = UserAccountModel()

        model.id = account.id
        model.username = account.username
        model.hashed_password = account.hashed_password
        model.org_type = account.org_type
        # joined_on est attribué par le store à la création
        if account.joined_on is not None:
            model.joined_on = account.joined_on

        return model


class UserProfileMapper:
    """Mapper entre UserProfileModel et UserProfile"""

    @staticmethod
    def to_domain(model: UserProfileModel) -> UserProfile:
        """Convertit un UserProfileModel en entité UserProfile"""
        return UserProfile(
            account_id=model.account_id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            phone=model.phone,
            last_login=model.last_login
        )

    @staticmethod
    def to_model(profile: UserProfile, model: Optional[UserProfileModel] = None) -> UserProfileModel:
        """Convertit une entité UserProfile en UserProfileModel"""
        if model is None:
            model = UserProfileModel()

        model.account_id = profile.account_id
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.email = profile.email
        model.phone = profile.phone
        # NULL explicite : seul le login renseigne last_login
        model.last_login = profile.last_login

        return model


class OrgAccountMapper:
    """Mapper entre OrgAccountModel et OrgAccount"""

    @staticmethod
    def to_domain(model: OrgAccountModel) -> OrgAccount:
        """Convertit un OrgAccountModel en entité OrgAccount"""
        return OrgAccount(
            id=model.id,
            name=model.name,
            type=model.type,
            joined_on=model.joined_on
        )

    @staticmethod
    def to_model(org: OrgAccount, model: Optional[OrgAccountModel] = None) -> OrgAccountModel:
        """Convertit une entité OrgAccount en OrgAccountModel"""
        if model is None:
            model = OrgAccountModel()

        model.id = org.id
        model.name = org.name
        model.type = org.type
        if org.joined_on is not None:
            model.joined_on = org.joined_on

        return model


class OrgProfileMapper:
    """Mapper entre OrgProfileModel et OrgProfile"""

    @staticmethod
    def to_domain(model: OrgProfileModel) -> OrgProfile:
        return OrgProfile(
            account_id=model.account_id,
            phone=model.phone,
            address=model.address,
            timezone=model.timezone,
            website=model.website
        )

    @staticmethod
    def to_model(profile: OrgProfile, model: Optional[OrgProfileModel] = None) -> OrgProfileModel:
        if model is None:
            model = OrgProfileModel()

        model.account_id = profile.account_id
        model.phone = profile.phone
        model.address = profile.address
        model.timezone = profile.timezone
        model.website = profile.website

        return model
