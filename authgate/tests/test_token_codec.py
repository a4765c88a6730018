from __future__ import annotations

import string
from datetime import timedelta

import jwt
import pytest

from authgate.application.services.token_codec import JwtTokenCodec
from authgate.domain.tokens.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
)
from authgate.domain.users.entities import ROLE_ADMIN
from conftest import T0, TEST_SECRET, FrozenClock

TEN_HOURS_MS = 10 * 60 * 60 * 1000

_B64URL = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"


def _swap_with_neighbour(segment: str, i: int) -> str:
    # flips the lowest bit of the sextet; on the last character that bit may be padding
    replacement = _B64URL[_B64URL.index(segment[i]) ^ 1]
    return segment[:i] + replacement + segment[i + 1 :]


@pytest.fixture()
def codec(clock: FrozenClock) -> JwtTokenCodec:
    return JwtTokenCodec(TEST_SECRET, clock=clock)


def test_encode_produces_three_segment_hs256_token(codec: JwtTokenCodec) -> None:
    token = codec.encode("alice", ROLE_ADMIN, TEN_HOURS_MS)

    assert token.count(".") == 2
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_payload_carries_username_role_and_timestamps_only(codec: JwtTokenCodec) -> None:
    token = codec.encode("alice", ROLE_ADMIN, TEN_HOURS_MS)

    payload = jwt.decode(token, options={"verify_signature": False})

    assert set(payload) == {"username", "role", "iat", "exp"}
    assert payload["username"] == "alice"
    assert payload["role"] == ROLE_ADMIN


def test_decode_round_trips_username_and_role(codec: JwtTokenCodec) -> None:
    token = codec.encode("alice", "ROLE_USER", TEN_HOURS_MS)

    assert codec.decode_username(token) == "alice"
    assert codec.decode_role(token) == "ROLE_USER"


def test_expiry_is_embedded_at_issuance(codec: JwtTokenCodec) -> None:
    token = codec.encode("alice", ROLE_ADMIN, TEN_HOURS_MS)

    claims = codec.decode(token)

    assert claims.issued_at == T0
    assert claims.expires_at == T0 + timedelta(milliseconds=TEN_HOURS_MS)


def test_token_not_expired_at_exact_boundary(codec: JwtTokenCodec) -> None:
    token = codec.encode("alice", ROLE_ADMIN, 1000)

    assert codec.is_expired(token, now=T0) is False
    assert codec.is_expired(token, now=T0 + timedelta(milliseconds=1000)) is False
    assert codec.is_expired(token, now=T0 + timedelta(milliseconds=1001)) is True


def test_is_expired_uses_codec_clock(codec: JwtTokenCodec, clock: FrozenClock) -> None:
    token = codec.encode("alice", ROLE_ADMIN, 1000)

    clock.advance(seconds=1)
    assert codec.is_expired(token) is False

    clock.advance(milliseconds=1)
    assert codec.is_expired(token) is True


def test_verify_rejects_expired_token(codec: JwtTokenCodec, clock: FrozenClock) -> None:
    token = codec.encode("alice", ROLE_ADMIN, TEN_HOURS_MS)
    clock.advance(hours=10, milliseconds=1)

    with pytest.raises(TokenExpiredError):
        codec.verify(token)


def test_decode_still_reads_claims_of_expired_token(
    codec: JwtTokenCodec, clock: FrozenClock
) -> None:
    token = codec.encode("alice", ROLE_ADMIN, 1000)
    clock.advance(days=1)

    assert codec.decode_username(token) == "alice"


@pytest.mark.parametrize("username", ["alice", "bob", "carol", "dave", "eve"])
@pytest.mark.parametrize("segment_index", [1, 2])
def test_every_tampered_character_fails_signature(
    codec: JwtTokenCodec, username: str, segment_index: int
) -> None:
    parts = codec.encode(username, "ROLE_USER", TEN_HOURS_MS).split(".")
    segment = parts[segment_index]

    for i in range(len(segment)):
        tampered = list(parts)
        tampered[segment_index] = _swap_with_neighbour(segment, i)

        with pytest.raises(InvalidSignatureError):
            codec.decode(".".join(tampered))


def test_tampered_last_character_is_rejected_by_every_accessor(codec: JwtTokenCodec) -> None:
    header, payload, signature = codec.encode("alice", ROLE_ADMIN, TEN_HOURS_MS).split(".")
    tampered = f"{header}.{payload}.{_swap_with_neighbour(signature, len(signature) - 1)}"

    with pytest.raises(InvalidSignatureError):
        codec.decode_username(tampered)
    with pytest.raises(InvalidSignatureError):
        codec.is_expired(tampered)
    with pytest.raises(InvalidSignatureError):
        codec.verify(tampered)


def test_unparseable_header_stays_malformed(codec: JwtTokenCodec) -> None:
    _, payload, signature = codec.encode("alice", ROLE_ADMIN, TEN_HOURS_MS).split(".")

    with pytest.raises(MalformedTokenError):
        codec.decode(f"!!!.{payload}.{signature}")


def test_forged_role_is_rejected(codec: JwtTokenCodec) -> None:
    header, _, signature = codec.encode("bob", "ROLE_USER", TEN_HOURS_MS).split(".")
    forged_payload = jwt.encode(
        {"username": "bob", "role": ROLE_ADMIN, "iat": 0, "exp": 9999999999},
        "another-secret-of-sufficient-length-0123456789",
        algorithm="HS256",
    ).split(".")[1]

    with pytest.raises(InvalidSignatureError):
        codec.decode_role(f"{header}.{forged_payload}.{signature}")


def test_token_signed_with_other_secret_is_rejected(clock: FrozenClock) -> None:
    other = JwtTokenCodec("another-secret-of-sufficient-length-0123456789", clock=clock)
    token = other.encode("alice", ROLE_ADMIN, TEN_HOURS_MS)

    with pytest.raises(InvalidSignatureError):
        JwtTokenCodec(TEST_SECRET, clock=clock).decode(token)


def test_unsigned_token_is_rejected(codec: JwtTokenCodec) -> None:
    token = jwt.encode(
        {"username": "alice", "role": ROLE_ADMIN, "iat": 0, "exp": 9999999999},
        "",
        algorithm="none",
    )

    with pytest.raises(InvalidSignatureError):
        codec.decode(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "only.two"])
def test_unparseable_token_is_malformed(codec: JwtTokenCodec, token: str) -> None:
    with pytest.raises(MalformedTokenError):
        codec.decode(token)


def test_token_missing_role_claim_is_malformed(codec: JwtTokenCodec) -> None:
    token = jwt.encode({"username": "alice", "iat": 0, "exp": 9999999999}, TEST_SECRET)

    with pytest.raises(MalformedTokenError):
        codec.decode(token)


def test_non_string_claim_is_malformed(codec: JwtTokenCodec) -> None:
    token = jwt.encode(
        {"username": 42, "role": ROLE_ADMIN, "iat": 0, "exp": 9999999999}, TEST_SECRET
    )

    with pytest.raises(MalformedTokenError):
        codec.decode(token)


def test_token_errors_share_unauthorized_status(codec: JwtTokenCodec) -> None:
    with pytest.raises(TokenError) as excinfo:
        codec.decode("not-a-token")

    assert excinfo.value.status == 401
    assert excinfo.value.code == "invalid_token"


def test_rejects_empty_secret_and_non_positive_ttl(codec: JwtTokenCodec) -> None:
    with pytest.raises(ValueError):
        JwtTokenCodec("")
    with pytest.raises(ValueError):
        codec.encode("alice", ROLE_ADMIN, 0)
