"""
JWT creation and verification.

Tokens are HS256-signed JWTs carrying the account's identity claims plus
issuer, audience, issued-at, expiry and a random per-token ``jti``.
Every validation failure surfaces as the same ``InvalidToken`` error.

There is no revocation: a leaked token stays valid until it expires.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from auth.errors import InvalidToken
from config.settings import Settings
from database.models import Account

logger = logging.getLogger(__name__)


class Claims(BaseModel):
    """Typed view of a validated token payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    sub: str
    email: str
    jti: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    iat: int
    exp: int
    iss: str
    aud: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and validates tokens for one signing configuration."""

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        expiry_minutes: int,
        leeway_seconds: int = 0,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        if expiry_minutes <= 0:
            raise ValueError("token lifetime must be positive")
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.expiry = timedelta(minutes=expiry_minutes)
        self.leeway_seconds = leeway_seconds
        self.algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiry_minutes=settings.jwt_expiry_minutes,
            leeway_seconds=settings.jwt_leeway_seconds,
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, account: Account) -> str:
        """Create a signed token for ``account``."""
        now = self._clock()
        payload = {
            "sub": str(account.id),
            "email": account.email,
            "jti": str(uuid.uuid4()),
            "firstName": account.first_name,
            "lastName": account.last_name,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expiry).timestamp()),
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: Optional[str]) -> Claims:
        """
        Verify signature, issuer, audience and expiry and return the claims.

        Raises ``InvalidToken`` on any failure.
        """
        if not token:
            raise InvalidToken()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={
                    "require_exp": True,
                    "require_iat": True,
                    "require_iss": True,
                    "require_aud": True,
                    "require_sub": True,
                    "require_jti": True,
                    "leeway": self.leeway_seconds,
                },
            )
            return Claims.model_validate(payload)
        except (JWTError, ValidationError) as exc:
            logger.debug("Token rejected: %s", exc.__class__.__name__)
            raise InvalidToken() from None

    def extract_identity(self, claims: Claims) -> uuid.UUID:
        """Return the account id carried in the ``sub`` claim."""
        try:
            return uuid.UUID(claims.sub)
        except (TypeError, ValueError, AttributeError):
            raise InvalidToken() from None
