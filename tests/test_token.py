from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.auth.token import TokenIssuer
from app.core.exceptions import InvalidToken


@pytest.fixture
def issuer():
    return TokenIssuer(secret_key="unit-test-secret", algorithm="HS256", ttl_ms=3600000)


def test_token_carries_username_roles_and_expiry(issuer):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    token = issuer.generate_token("alice", ["STAFF"], now=now)

    claims = issuer.decode(token)
    assert claims.username == "alice"
    assert claims.roles == ("STAFF",)
    assert claims.issued_at == now
    assert claims.expires_at == now + timedelta(milliseconds=issuer.ttl_ms)


def test_ttl_is_exposed_in_ms_and_seconds(issuer):
    assert issuer.ttl_ms == 3600000
    assert issuer.ttl_seconds == 3600


def test_expired_token_is_rejected(issuer):
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = issuer.generate_token("alice", now=issued)

    with pytest.raises(InvalidToken):
        issuer.decode(token)


def test_token_signed_with_other_key_is_rejected(issuer):
    other = TokenIssuer(secret_key="someone-else", ttl_ms=3600000)
    token = other.generate_token("mallory", ["ADMIN"])

    with pytest.raises(InvalidToken):
        issuer.decode(token)


def test_token_without_subject_is_rejected(issuer):
    exp = int(datetime.now(timezone.utc).timestamp()) + 60
    token = jwt.encode({"exp": exp}, "unit-test-secret", algorithm="HS256")

    with pytest.raises(InvalidToken):
        issuer.decode(token)


def test_garbage_is_rejected(issuer):
    with pytest.raises(InvalidToken):
        issuer.decode("not-a-jwt")
