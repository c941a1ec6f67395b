"""Session tokens: signed JWTs carrying the caller's identity claims.

Tokens are stateless. Validity is decided by the signature and the ``exp``
claim alone; there is no refresh mechanism, so an expired token means a new
login.
"""

import binascii
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError
from jose.utils import base64url_decode, base64url_encode

from care_api.exceptions import InvalidSignature, MalformedToken, TokenExpired

ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=2)
REQUIRED_CLAIMS = ("sub", "email", "exp")


@dataclass(frozen=True)
class TokenClaims:
    """Identity embedded in a session token."""
    user_id: int
    email: str
    role: str = "staff"
    is_admin: bool = False
    expires_at: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def for_user(cls, user) -> "TokenClaims":
        return cls(user_id=user.id, email=user.email, role=user.role, is_admin=bool(user.is_admin))


def _check_structure(token: str) -> None:
    parts = token.split(".")
    if len(parts) != 3 or not all(parts[:2]):
        raise MalformedToken()
    try:
        decoded = [base64url_decode(part.encode("ascii")) for part in parts]
    except (binascii.Error, ValueError, UnicodeEncodeError) as e:
        raise MalformedToken() from e
    # Decoding ignores the unused low bits of a segment's last character, so
    # an altered segment can decode to the original bytes
    for part, raw in zip(parts, decoded):
        if base64url_encode(raw).decode("ascii") != part:
            raise InvalidSignature()


class TokenService:
    """Issues and verifies HMAC-signed JWTs."""

    def __init__(self, secret_key: str, default_ttl: timedelta = DEFAULT_TTL, algorithm: str = ALGORITHM):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self.default_ttl = default_ttl
        self.algorithm = algorithm

    def issue(self, claims: TokenClaims, ttl: Optional[timedelta] = None) -> str:
        """Create a signed token for the given claims, valid for ``ttl`` (default lifetime otherwise)."""
        now = int(time.time())
        lifetime = self.default_ttl if ttl is None else ttl
        payload = {
            "sub": str(claims.user_id),
            "email": claims.email,
            "role": claims.role,
            "is_admin": claims.is_admin,
            "iat": now,
            "exp": now + int(lifetime.total_seconds()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a token.

        Raises:
            MalformedToken: the token is not a decodable JWT or lacks identity claims.
            InvalidSignature: the signature does not match (any byte was altered).
            TokenExpired: the token's expiry has passed.
        """
        if not token:
            raise MalformedToken()
        _check_structure(token)
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpired() from e
        except JWTClaimsError as e:
            raise MalformedToken() from e
        except JWTError as e:
            raise InvalidSignature() from e

        if any(name not in payload for name in REQUIRED_CLAIMS):
            raise MalformedToken()
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise MalformedToken() from e

        return TokenClaims(
            user_id=user_id,
            email=payload["email"],
            role=payload.get("role", "staff"),
            is_admin=bool(payload.get("is_admin", False)),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
