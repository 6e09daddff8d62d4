"""Password Hasher — bcrypt salted hashing behind a tiny two-method surface.

Invariants:
    - Plain passwords are never stored, logged, or returned
    - Inputs longer than bcrypt's 72-byte limit are truncated identically on hash and verify
    - verify() never raises for a malformed stored hash; it returns False
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


class PasswordHasher:
    """bcrypt wrapper configured with a fixed cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_to_bytes(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_to_bytes(password), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Stored password hash rejected by bcrypt: {e}")
            return False
