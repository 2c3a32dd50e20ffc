"""Bearer-token verification against the identity provider's JWKS."""

import asyncio
import logging
from typing import Any, Protocol

import jwt

from fleet_api.application.interfaces import IdentityVerifier
from fleet_api.config import Settings
from fleet_api.domain.exceptions import InvalidTokenError, MissingCredentialsError

logger = logging.getLogger(__name__)


class SigningKeySource(Protocol):
    """The part of ``jwt.PyJWKClient`` the verifier relies on."""

    def get_signing_key_from_jwt(self, token: str) -> Any: ...


class JwtIdentityVerifier(IdentityVerifier):
    """Verifies RS256 (or configured) JWTs and returns the ``sub`` claim.

    Signing keys come from the provider's JWKS endpoint and are cached by
    ``PyJWKClient``. The lookup may hit the network, so it runs in a worker
    thread.
    """

    def __init__(
        self,
        key_source: SigningKeySource,
        issuer: str,
        algorithms: list[str],
        audience: str | None = None,
    ):
        self._key_source = key_source
        self._issuer = issuer
        self._algorithms = algorithms
        self._audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtIdentityVerifier":
        return cls(
            key_source=jwt.PyJWKClient(settings.jwks_uri, cache_keys=True),
            issuer=settings.auth_issuer,
            algorithms=settings.auth_algorithms,
            audience=settings.auth_audience,
        )

    async def verify(self, token: str | None) -> str:
        if not token:
            raise MissingCredentialsError()

        try:
            signing_key = await asyncio.to_thread(self._key_source.get_signing_key_from_jwt, token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=self._algorithms,
                issuer=self._issuer,
                audience=self._audience,
                options={"verify_aud": self._audience is not None},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Token has expired") from None
        except jwt.PyJWTError as e:
            logger.info("Rejected bearer token: %s", e)
            raise InvalidTokenError() from None

        subject = payload.get("sub")
        if not subject:
            raise InvalidTokenError("Token missing subject (sub claim)")
        return str(subject)
