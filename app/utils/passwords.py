# app/utils/passwords.py
"""
Password hashing with Argon2id. Stored credentials are always hashes; the
plaintext only exists for the duration of a register/login request.
"""

from argon2 import PasswordHasher, exceptions as argon2_exceptions

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(stored_hash: str, password: str) -> bool:
    """True if `password` matches `stored_hash`. Malformed hashes never match."""
    try:
        return _hasher.verify(stored_hash, password)
    except (argon2_exceptions.VerificationError, argon2_exceptions.InvalidHashError):
        return False
