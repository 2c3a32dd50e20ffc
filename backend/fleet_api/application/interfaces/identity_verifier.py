"""Abstract identity verification interface (port)."""

from abc import ABC, abstractmethod


class IdentityVerifier(ABC):
    """Turns a bearer credential into the identity provider's subject id."""

    @abstractmethod
    async def verify(self, token: str | None) -> str:
        """Return the subject id of a valid token.

        Raises MissingCredentialsError when ``token`` is empty and
        InvalidTokenError when verification fails.
        """
        ...
