"""
Modèles SQLAlchemy - Tables des comptes, profils et associations
"""

from sqlalchemy import (
    Column, String, DateTime, Integer, ForeignKey, func
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class UserAccountModel(Base):
    """Modèle SQLAlchemy pour les comptes utilisateurs"""
    __tablename__ = "user_accounts"

    id = Column(String, primary_key=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    org_type = Column(String, nullable=True)
    joined_on = Column(DateTime, server_default=func.now(), nullable=False)

    profile = relationship("UserProfileModel", back_populates="account", uselist=False, passive_deletes=True)


class UserProfileModel(Base):
    """Modèle SQLAlchemy pour les profils utilisateurs (1:1 avec le compte)"""
    __tablename__ = "user_profiles"

    account_id = Column(String, ForeignKey("user_accounts.id", ondelete="CASCADE"), primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    last_login = Column(DateTime, server_default=func.now(), nullable=True)

    account = relationship("UserAccountModel", back_populates="profile")


class OrgAccountModel(Base):
    """Modèle SQLAlchemy pour les organisations"""
    __tablename__ = "org_accounts"

    id = Column(String, primary_key=True)
    name = Column(String, index=True, nullable=False)
    type = Column(String, nullable=True)
    joined_on = Column(DateTime, server_default=func.now(), nullable=False)

    profile = relationship("OrgProfileModel", back_populates="account", uselist=False, passive_deletes=True)


class OrgProfileModel(Base):
    """Modèle SQLAlchemy pour les profils d'organisation (1:1 avec le compte)"""
    __tablename__ = "org_profiles"

    account_id = Column(String, ForeignKey("org_accounts.id", ondelete="CASCADE"), primary_key=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    timezone = Column(String, nullable=True)
    website = Column(String, nullable=True)

    account = relationship("OrgAccountModel", back_populates="profile")


class OrgUserModel(Base):
    """Association utilisateur <-> organisation (doublons tolérés)"""
    __tablename__ = "org_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("user_accounts.id", ondelete="CASCADE"), index=True, nullable=False)
    org_id = Column(String, ForeignKey("org_accounts.id", ondelete="CASCADE"), index=True, nullable=False)
