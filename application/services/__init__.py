"""
Services applicatifs
"""

from application.services.account_service import AccountService

__all__ = [
    "AccountService"
]
