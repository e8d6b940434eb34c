"""Signed owner tokens: the only contact point with the external identity provider."""
import base64
import hmac
import hashlib
import time
from dataclasses import dataclass

from assessment_builder.core.config import get_settings


@dataclass(frozen=True)
class Identity:
    """Acting owner as seen by the editor. `owner_id` is opaque."""

    owner_id: str | None = None
    authenticated: bool = False

    @property
    def present(self) -> bool:
        return self.authenticated and bool(self.owner_id)


ANONYMOUS = Identity()


# Token: base64(owner_id:timestamp).hmac
def _sign_payload(payload: bytes) -> str:
    settings = get_settings()
    sig = hmac.new(settings.secret_key.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=") + "." + sig


def _verify_sig(payload: bytes, sig: str) -> bool:
    settings = get_settings()
    expected = hmac.new(settings.secret_key.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, sig)


def create_session_token(owner_id: str, issued_at: int | None = None) -> str:
    """Create a signed token for the owner (for the auth cookie)."""
    ts = int(time.time()) if issued_at is None else issued_at
    payload = f"{owner_id}:{ts}".encode("utf-8")
    return _sign_payload(payload)


def verify_session_token(token: str | None) -> str | None:
    """Verify signed token and return owner_id if valid; None otherwise."""
    if not token or "." not in token:
        return None
    try:
        encoded, sig = token.rsplit(".", 1)
        pad = 4 - len(encoded) % 4
        if pad != 4:
            encoded += "=" * pad
        payload = base64.urlsafe_b64decode(encoded)
        if not _verify_sig(payload, sig):
            return None
        owner_id, ts = payload.decode("utf-8").rsplit(":", 1)
        if abs(time.time() - int(ts)) > get_settings().auth_token_max_age:
            return None
        return owner_id or None
    except (ValueError, UnicodeDecodeError):
        return None


def identity_from_token(token: str | None) -> Identity:
    owner_id = verify_session_token(token)
    if owner_id is None:
        return ANONYMOUS
    return Identity(owner_id=owner_id, authenticated=True)
