from abc import ABC, abstractmethod

from pydantic import SecretStr


class IPasswordHasher(ABC):
    """
    One-way hashing for account passwords.

    Sign-up hashes once through UserEntity.set_password; login only verifies.
    Plain passwords travel as SecretStr so @Logger.io never prints them.
    """

    @abstractmethod
    def hash_password(self, *, plain_password: SecretStr) -> str:
        """Salted hash, safe to store in user.hashed_password"""

    @abstractmethod
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        """False for a wrong password and for a malformed stored hash"""
