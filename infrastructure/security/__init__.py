"""
Services de sécurité
"""

from infrastructure.security.password_hasher import PasswordHasher

__all__ = [
    "PasswordHasher"
]
