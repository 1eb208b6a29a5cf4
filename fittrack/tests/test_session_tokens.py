from __future__ import annotations

import base64
import hashlib

import pytest

from fittrack.application.services.session_tokens import SessionTokenCodec


def test_generated_tokens_are_base32_without_padding(codec: SessionTokenCodec) -> None:
    token = codec.generate_token()

    assert "=" not in token
    assert len(token) == 32
    assert len(base64.b32decode(token)) == 20


def test_generated_tokens_are_unique(codec: SessionTokenCodec) -> None:
    assert len({codec.generate_token() for _ in range(200)}) == 200


def test_derive_id_is_sha256_hex_and_deterministic(codec: SessionTokenCodec) -> None:
    token = codec.generate_token()

    assert codec.derive_id(token) == codec.derive_id(token)
    assert codec.derive_id(token) == hashlib.sha256(token.encode()).hexdigest()
    assert codec.derive_id(token) != codec.derive_id(codec.generate_token())


def test_cookie_value_verifies_back_to_token(codec: SessionTokenCodec) -> None:
    token = codec.generate_token()
    cookie = codec.cookie_value(token)

    assert cookie == f"{token}.{codec.sign(token)}"
    assert codec.verify_cookie(cookie) == token


def test_signature_depends_on_secret(codec: SessionTokenCodec) -> None:
    token = codec.generate_token()
    other = SessionTokenCodec("another-secret")

    assert other.verify_cookie(codec.cookie_value(token)) is None


def test_any_tampered_character_is_rejected(codec: SessionTokenCodec) -> None:
    token = codec.generate_token()
    cookie = codec.cookie_value(token)

    for index, char in enumerate(cookie):
        if char == ".":
            continue
        swapped = "A" if char != "A" else "B"
        tampered = cookie[:index] + swapped + cookie[index + 1 :]
        assert codec.verify_cookie(tampered) is None, index


@pytest.mark.parametrize(
    "raw",
    [None, "", "no-delimiter", ".signature-only", "token-only.", "a.b", "tok.én"],
)
def test_malformed_cookies_are_invalid(codec: SessionTokenCodec, raw: str | None) -> None:
    assert codec.verify_cookie(raw) is None


def test_split_uses_last_delimiter() -> None:
    codec = SessionTokenCodec("s3cret")
    token = "part.one"

    assert codec.verify_cookie(codec.cookie_value(token)) == token


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        SessionTokenCodec("")
