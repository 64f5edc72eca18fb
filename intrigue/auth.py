"""Caller authorization.

Every identity owns a key derived from the server secret:

    key = HMAC-SHA256(secret, identity)

and authorizes an operation by presenting

    signature = hex(HMAC-SHA256(key, canonical(identity, bound_args)))

Session creation binds (session_id, stake); admin setters bind the new
value; commit and verify bind nothing beyond the identity.
"""

import hashlib
import hmac
import logging
from typing import Any, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


class AuthGate(Protocol):
    """Decides whether ``identity`` authorized a call with ``bound_args``."""

    def require(
        self, identity: str, bound_args: Sequence[Any], signature: Optional[str]
    ) -> bool: ...


def canonical(identity: str, bound_args: Sequence[Any]) -> bytes:
    """Unambiguous byte encoding of an identity and its bound arguments."""
    parts = [identity] + [str(arg) for arg in bound_args]
    return "\x1f".join(parts).encode()


def identity_key(secret: str, identity: str) -> bytes:
    return hmac.new(secret.encode(), identity.encode(), hashlib.sha256).digest()


def sign(secret: str, identity: str, bound_args: Sequence[Any] = ()) -> str:
    """Produce the signature ``identity`` presents for ``bound_args``."""
    key = identity_key(secret, identity)
    return hmac.new(key, canonical(identity, bound_args), hashlib.sha256).hexdigest()


class SignatureAuthGate:
    """HMAC signature check against a shared server secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("SignatureAuthGate needs a non-empty secret")
        self._secret = secret

    def require(
        self, identity: str, bound_args: Sequence[Any], signature: Optional[str]
    ) -> bool:
        if not signature:
            return False
        expected = sign(self._secret, identity, bound_args)
        return hmac.compare_digest(expected, signature.lower())


class AllowAllAuthGate:
    """Approves every call. Debug and tests only.

    Approvals are recorded so tests can assert what was bound.
    """

    def __init__(self):
        self.approvals: list[tuple[str, tuple]] = []

    def require(
        self, identity: str, bound_args: Sequence[Any], signature: Optional[str]
    ) -> bool:
        self.approvals.append((identity, tuple(bound_args)))
        return True


def build_auth_gate(secret: str, debug: bool) -> AuthGate:
    """Pick the gate for the configured secret."""
    if secret:
        return SignatureAuthGate(secret)
    if not debug:
        raise RuntimeError("INTRIGUE_AUTH_SECRET must be set when debug is off")
    logger.warning("No auth secret configured: every call will be authorized")
    return AllowAllAuthGate()
