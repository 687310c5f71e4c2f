"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """The signed-in user as asserted by the identity provider.

    Satisfies ``domain.ports.Identity``: controllers only read ``id`` and
    ``email``. Invitations are matched against ``email``.
    """

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's user, or None if the token is invalid or expired."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a token for a user (local development and tests)."""
        ...
