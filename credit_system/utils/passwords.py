"""Password hashing with bcrypt"""

import bcrypt

from credit_system.config import settings


def hash_password(password: str) -> str:
    """Hash a plain text password, returning the bcrypt hash as text"""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
