"""Tests for the signed identity token codec."""

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from core.errors import InvalidToken, TokenExpired
from services.tokens import TokenCodec

from conftest import TEST_SECRET, FakeClock

USER_ID = "65f1c0ffee0123456789abcd"


class TestMintVerify:
    def test_round_trip_returns_same_identity(self, codec: TokenCodec) -> None:
        claims = codec.verify(codec.mint(USER_ID, "jane@example.com"))
        assert claims.user_id == USER_ID
        assert claims.email == "jane@example.com"

    def test_expiry_is_seven_days_after_issue(self, codec: TokenCodec, clock: FakeClock) -> None:
        claims = codec.verify(codec.mint(USER_ID, "jane@example.com"))
        assert claims.issued_at == clock.now
        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_payload_uses_wire_claim_names(self, codec: TokenCodec) -> None:
        token = codec.mint(USER_ID, "jane@example.com")
        payload = jwt.get_unverified_claims(token)
        assert set(payload) == {"userId", "email", "iat", "exp"}


class TestExpiry:
    def test_valid_right_up_to_expiry(self, codec: TokenCodec, clock: FakeClock) -> None:
        token = codec.mint(USER_ID, "jane@example.com")
        clock.now += timedelta(days=7)
        assert codec.verify(token).user_id == USER_ID

    def test_expired_one_second_after(self, codec: TokenCodec, clock: FakeClock) -> None:
        token = codec.mint(USER_ID, "jane@example.com")
        clock.now += timedelta(days=7, seconds=1)
        with pytest.raises(TokenExpired):
            codec.verify(token)

    def test_custom_ttl(self, clock: FakeClock) -> None:
        short = TokenCodec(TEST_SECRET, ttl=timedelta(minutes=5), clock=clock)
        token = short.mint(USER_ID, "jane@example.com")
        clock.now += timedelta(minutes=6)
        with pytest.raises(TokenExpired):
            short.verify(token)


class TestTampering:
    def test_wrong_secret_is_invalid(self, codec: TokenCodec, clock: FakeClock) -> None:
        other = TokenCodec("some-other-secret", clock=clock)
        with pytest.raises(InvalidToken):
            codec.verify(other.mint(USER_ID, "jane@example.com"))

    def test_altered_signature_is_invalid(self, codec: TokenCodec) -> None:
        header, payload, signature = codec.mint(USER_ID, "jane@example.com").split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with pytest.raises(InvalidToken):
            codec.verify(".".join([header, payload, flipped]))

    def test_swapped_payload_is_invalid(self, codec: TokenCodec) -> None:
        header, _, signature = codec.mint(USER_ID, "jane@example.com").split(".")
        _, forged_payload, _ = codec.mint("ffffffffffffffffffffffff", "evil@example.com").split(".")
        with pytest.raises(InvalidToken):
            codec.verify(".".join([header, forged_payload, signature]))

    def test_tampered_expired_token_reports_invalid(self, codec: TokenCodec, clock: FakeClock) -> None:
        header, payload, signature = codec.mint(USER_ID, "jane@example.com").split(".")
        clock.now += timedelta(days=30)
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with pytest.raises(InvalidToken):
            codec.verify(".".join([header, payload, flipped]))

    def test_garbage_is_invalid(self, codec: TokenCodec) -> None:
        with pytest.raises(InvalidToken):
            codec.verify("not.a.jwt")

    def test_missing_user_id_claim_is_invalid(self, codec: TokenCodec, clock: FakeClock) -> None:
        issued = int(clock.now.timestamp())
        token = jwt.encode({"email": "x@example.com", "iat": issued, "exp": issued + 60}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(InvalidToken):
            codec.verify(token)
