"""
Infrastructure Database - Configuration et repositories SQLAlchemy
"""

from infrastructure.database.session import SessionLocal, engine, create_db_engine
from infrastructure.database.models import (
    Base, UserAccountModel, UserProfileModel, OrgAccountModel, OrgProfileModel, OrgUserModel
)
from infrastructure.database.repositories import SQLAlchemyAccountRepository

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "create_db_engine",
    "UserAccountModel",
    "UserProfileModel",
    "OrgAccountModel",
    "OrgProfileModel",
    "OrgUserModel",
    "SQLAlchemyAccountRepository"
]
