import time

from assessment_builder.core.security import (
    ANONYMOUS,
    create_session_token,
    identity_from_token,
    verify_session_token,
)


def test_token_round_trip() -> None:
    token = create_session_token("owner-42")
    assert verify_session_token(token) == "owner-42"
    identity = identity_from_token(token)
    assert identity.owner_id == "owner-42"
    assert identity.present


def test_owner_id_may_contain_colons() -> None:
    token = create_session_token("auth0:abc")
    assert verify_session_token(token) == "auth0:abc"


def test_tampered_or_missing_token_is_anonymous() -> None:
    token = create_session_token("owner-42")
    encoded, sig = token.rsplit(".", 1)
    assert verify_session_token(f"{encoded}.{'0' * len(sig)}") is None
    assert verify_session_token("") is None
    assert verify_session_token(None) is None
    assert verify_session_token("no-dot") is None
    assert identity_from_token("garbage.sig") is ANONYMOUS
    assert not ANONYMOUS.present


def test_expired_token_is_rejected() -> None:
    old = create_session_token("owner-42", issued_at=int(time.time()) - 60 * 60 * 24 * 30)
    assert verify_session_token(old) is None
