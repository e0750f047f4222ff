"""
Dépendances FastAPI pour l'injection de services
"""

from typing import Generator
from sqlalchemy.orm import Session
from fastapi import Depends

from infrastructure.database.session import SessionLocal
from infrastructure.database.repositories import SQLAlchemyAccountRepository
from infrastructure.security.password_hasher import PasswordHasher
from application.services.account_service import AccountService

_password_hasher = PasswordHasher()


def get_db() -> Generator[Session, None, None]:
    """Dépendance pour obtenir une session de base de données"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_password_hasher() -> PasswordHasher:
    """Dépendance pour obtenir le PasswordHasher"""
    return _password_hasher


def get_account_repository(
    db: Session = Depends(get_db),
    password_hasher: PasswordHasher = Depends(get_password_hasher)
) -> SQLAlchemyAccountRepository:
    """Dépendance pour obtenir l'AccountRepository"""
    return SQLAlchemyAccountRepository(db, password_hasher)


def get_account_service(
    account_repository: SQLAlchemyAccountRepository = Depends(get_account_repository),
    password_hasher: PasswordHasher = Depends(get_password_hasher)
) -> AccountService:
    """Dépendance pour obtenir l'AccountService"""
    return AccountService(account_repository, password_hasher)
