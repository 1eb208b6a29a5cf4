"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from fittrack.domain.users.repositories import PasswordHasher

SALT_BYTES = 16
KEY_LENGTH = 64

# scrypt cost parameters (N, r, p); N * r * 128 bytes of memory per hash.
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


class ScryptPasswordHasher(PasswordHasher):
    """Stores credentials as ``<hex salt>:<hex scrypt key>``."""

    def __init__(
        self,
        *,
        n: int = SCRYPT_N,
        r: int = SCRYPT_R,
        p: int = SCRYPT_P,
        key_length: int = KEY_LENGTH,
    ) -> None:
        self._n = n
        self._r = r
        self._p = p
        self._key_length = key_length

    def _derive(self, password: str, salt: str) -> bytes:
        return hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt.encode("utf-8"),
            n=self._n,
            r=self._r,
            p=self._p,
            maxmem=256 * self._n * self._r,
            dklen=self._key_length,
        )

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(SALT_BYTES)
        return f"{salt}:{self._derive(password, salt).hex()}"

    def verify(self, hashed: str, password: str) -> bool:
        salt, sep, stored_key = (hashed or "").partition(":")
        if not sep or not salt or not stored_key:
            return False
        try:
            expected = bytes.fromhex(stored_key)
        except ValueError:
            return False
        candidate = self._derive(password, salt)
        return hmac.compare_digest(candidate, expected)
