# passguard/utils/security.py
"""Digest utilities for password history
History entries are stored as salted digests and compared in constant time.
Two schemes are available: PBKDF2-HMAC-SHA512 and bcrypt.
"""
import base64
import hashlib
import hmac
import secrets
from typing import Optional

import bcrypt

HASH_ALGORITHM = 'sha512'
KEY_LENGTH = 64  # 512 bits
DEFAULT_PBKDF2_ITERATIONS = 600000
DEFAULT_BCRYPT_ROUNDS = 12

SCHEMES = ('pbkdf2', 'bcrypt')


def generate_salt() -> str:
    """Generate cryptographically secure random salt (hex)"""
    return secrets.token_hex(32)


def hash_password(password: str, salt: str, iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> str:
    """
    Hash password using PBKDF2-HMAC-SHA512

    Args:
        password: Plain text password
        salt: Hex-encoded salt string
        iterations: PBKDF2 iteration count

    Returns:
        Hex-encoded password hash
    """
    dk = hashlib.pbkdf2_hmac(
        HASH_ALGORITHM,
        password.encode('utf-8'),
        bytes.fromhex(salt),
        iterations,
        dklen=KEY_LENGTH
    )
    return dk.hex()


def verify_password(password: str, salt: str, stored_hash: str,
                    iterations: int = DEFAULT_PBKDF2_ITERATIONS) -> bool:
    """
    Verify password against stored PBKDF2 hash using constant-time comparison

    Args:
        password: Plain text password to verify
        salt: Hex-encoded salt string
        stored_hash: Hex-encoded stored password hash
        iterations: PBKDF2 iteration count used when the hash was created

    Returns:
        True if password matches, False otherwise
    """
    computed_hash = hash_password(password, salt, iterations)
    return hmac.compare_digest(computed_hash, stored_hash)


def _bcrypt_input(password: str) -> bytes:
    # bcrypt only reads 72 bytes; pre-digest so long passwords stay distinct
    return base64.b64encode(hashlib.sha256(password.encode('utf-8')).digest())


def bcrypt_hash(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash password with bcrypt; the salt is embedded in the returned string"""
    return bcrypt.hashpw(_bcrypt_input(password), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def bcrypt_verify(password: str, stored_hash: str) -> bool:
    """Verify password against a bcrypt hash"""
    return bcrypt.checkpw(_bcrypt_input(password), stored_hash.encode('utf-8'))


class DigestHasher:
    """Creates and checks history digests for one configured scheme"""

    def __init__(self, scheme: str = 'pbkdf2',
                 iterations: int = DEFAULT_PBKDF2_ITERATIONS,
                 rounds: int = DEFAULT_BCRYPT_ROUNDS):
        if scheme not in SCHEMES:
            raise ValueError(f'Unsupported history hash scheme: {scheme}')
        self.scheme = scheme
        self.iterations = iterations
        self.rounds = rounds

    def digest(self, password: str):
        """Return (digest, salt, iterations) for a new history entry

        iterations is None for bcrypt, whose cost is part of the digest.
        """
        if self.scheme == 'bcrypt':
            hashed = bcrypt_hash(password, self.rounds)
            # bcrypt salt is the 29-char prefix of the hash
            return hashed, hashed[:29], None
        salt = generate_salt()
        return hash_password(password, salt, self.iterations), salt, self.iterations

    def matches(self, password: str, digest: str, salt: str, scheme: str,
                iterations: Optional[int] = None) -> bool:
        """Check a candidate against a stored digest of any supported scheme

        PBKDF2 digests are recomputed with the iteration count they were
        created with; entries without one fall back to the configured count.
        """
        if scheme == 'bcrypt':
            return bcrypt_verify(password, digest)
        return verify_password(password, salt, digest, iterations or self.iterations)
