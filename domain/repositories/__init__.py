"""
Repositories - Interfaces pour l'accès aux données
"""

from domain.repositories.account_repository import AccountRepository

__all__ = [
    "AccountRepository"
]
