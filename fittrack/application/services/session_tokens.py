# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session token generation, lookup-id derivation and cookie signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

TOKEN_BYTES = 20
COOKIE_DELIMITER = "."


class SessionTokenCodec:
    """Encodes session tokens for transport in a signed cookie.

    The raw token only ever lives in the client's cookie. The server stores
    ``derive_id(token)`` and authenticates the cookie by recomputing
    ``sign(token)`` with the process-wide secret.
    """

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("session cookie secret must be configured")
        self._secret = secret

    @staticmethod
    def generate_token() -> str:
        raw = secrets.token_bytes(TOKEN_BYTES)
        return base64.b32encode(raw).decode("ascii").rstrip("=")

    @staticmethod
    def derive_id(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def sign(self, token: str) -> str:
        return hashlib.sha256(f"{token}{self._secret}".encode()).hexdigest()

    def cookie_value(self, token: str) -> str:
        return f"{token}{COOKIE_DELIMITER}{self.sign(token)}"

    def verify_cookie(self, raw: str | None) -> str | None:
        """Return the token carried by ``raw`` or ``None`` when it is not authentic."""

        if not raw:
            return None
        token, sep, signature = raw.rpartition(COOKIE_DELIMITER)
        if not sep or not token or not signature:
            return None
        if not hmac.compare_digest(self.sign(token).encode(), signature.encode("utf-8")):
            return None
        return token


__all__ = ["COOKIE_DELIMITER", "SessionTokenCodec", "TOKEN_BYTES"]
