"""Verification of Firebase-style ID tokens sent as bearer tokens."""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Optional

import jwt
from jwt import PyJWKClient

from postsmith.exceptions import InvalidTokenError, MissingTokenError
from postsmith.utils.logger import get_logger

log = get_logger(__name__)

# Allowed clock skew between us and the identity provider, in seconds
CLOCK_SKEW_SECONDS = 30


@dataclass
class AuthenticatedUser:
    """Caller identity taken from a verified ID token."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None


def _bearer_token(authorization_header: Optional[str]) -> str:
    if not authorization_header:
        raise MissingTokenError()
    scheme, _, token = authorization_header.partition(" ")
    if scheme.lower() != "bearer" or not token or " " in token.strip():
        raise InvalidTokenError("Invalid authorization header format")
    return token.strip()


def _user_from_claims(claims: dict[str, Any]) -> AuthenticatedUser:
    # Firebase mirrors the uid in 'user_id'
    uid = claims.get("sub") or claims.get("user_id")
    if not uid:
        raise InvalidTokenError("Token missing user identifier")

    auth_time = claims.get("auth_time")
    if auth_time is not None and auth_time > time.time() + CLOCK_SKEW_SECONDS:
        raise InvalidTokenError("Token auth_time is in the future")

    return AuthenticatedUser(uid=uid, email=claims.get("email"), name=claims.get("name"))


class AuthService:
    """Checks RS256 signature, expiry, issuer and audience against the provider's JWKS."""

    def __init__(self, issuer: str, audience: str, jwks_url: str) -> None:
        self.issuer = issuer
        self.audience = audience
        # PyJWKClient caches fetched keys between calls
        self._jwks_client = PyJWKClient(jwks_url)

    async def verify_token(self, authorization_header: Optional[str]) -> AuthenticatedUser:
        """
        Verify the ``Authorization`` header and return the caller.

        Raises:
            MissingTokenError: No header
            InvalidTokenError: Bad scheme, unknown key, bad signature, expired,
                wrong issuer or audience, or no subject
        """
        token = _bearer_token(authorization_header)

        try:
            # Key lookup may hit the network on a cache miss
            signing_key = await asyncio.to_thread(self._jwks_client.get_signing_key_from_jwt, token)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                issuer=self.issuer,
                audience=self.audience,
                leeway=CLOCK_SKEW_SECONDS,
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            log.info("token rejected", reason="expired")
            raise InvalidTokenError("Token has expired")
        except jwt.PyJWKClientError as e:
            log.warning("token rejected", reason="unknown signing key", error=str(e))
            raise InvalidTokenError("Token signing key not recognized")
        except jwt.InvalidTokenError as e:
            log.info("token rejected", reason=type(e).__name__, error=str(e))
            raise InvalidTokenError(f"Token validation failed: {e}")

        user = _user_from_claims(claims)
        log.debug("token verified", uid=user.uid)
        return user


_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Process-wide AuthService built from settings on first use."""
    global _auth_service
    if _auth_service is None:
        from postsmith.config import get_settings

        settings = get_settings()
        _auth_service = AuthService(
            issuer=settings.auth_issuer,
            audience=settings.auth_audience,
            jwks_url=settings.auth_jwks_url,
        )
    return _auth_service
