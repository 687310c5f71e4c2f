"""JWT authentication provider implementation.

Supports both Supabase-issued JWTs (ES256 via JWKS) and
locally-created tokens (HS256 for tests).

Supabase JWT payload structure:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "aud": "authenticated",
        "user_metadata": { "display_name": "Ada" },
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JwksKeyStore:
    """Caches the identity provider's public signing keys by ``kid``."""

    def __init__(self, jwks_url: str | None = None, timeout: float = 10.0) -> None:
        self._jwks_url = jwks_url
        self._timeout = timeout
        self._keys: dict[str, dict[str, Any]] | None = None

    @property
    def jwks_url(self) -> str:
        if self._jwks_url is not None:
            return self._jwks_url
        return settings.supabase_jwks_url

    def invalidate(self) -> None:
        self._keys = None

    async def get_keys(self) -> dict[str, dict[str, Any]]:
        """Return the kid -> JWK mapping, fetching it on first use.

        A failed fetch returns an empty mapping and is retried next call.
        """
        if self._keys is not None:
            return self._keys

        url = self.jwks_url
        if not url:
            return {}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=self._timeout)
                response.raise_for_status()
                jwks_data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Failed to fetch JWKS from %s", url)
            return {}

        self._keys = {
            key_data["kid"]: key_data
            for key_data in jwks_data.get("keys", [])
            if key_data.get("kid")
        }
        logger.info("Fetched %d JWKS keys", len(self._keys))
        return self._keys

    async def find(self, kid: str) -> dict[str, Any] | None:
        """Look up a key, refetching once in case the keys were rotated."""
        key_data = (await self.get_keys()).get(kid)
        if key_data is None:
            self.invalidate()
            key_data = (await self.get_keys()).get(kid)
        return key_data


class JWTAuthProvider:
    """JWT-based authentication provider.

    Handles validation of both Supabase-issued (ES256) and
    locally-created (HS256) JWTs.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        key_store: JwksKeyStore | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._key_store = key_store or JwksKeyStore()

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT token and extract user info.

        Detects the signing algorithm from the token header:
        - ES256 (Supabase): validates via JWKS public key
        - HS256 (local/test): validates via shared secret

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            alg = header.get("alg", self._algorithm)

            if alg == "ES256":
                payload = await self._validate_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None
        return self._to_user(payload)

    async def _validate_es256(self, token: str, header: dict) -> Optional[dict]:
        """Validate an ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        key_data = await self._key_store.find(kid)
        if not key_data:
            logger.warning("JWKS key not found for kid=%s", kid)
            return None

        ec_key = ECKey(key_data, algorithm="ES256")
        return jwt.decode(
            token,
            ec_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    @staticmethod
    def _to_user(payload: dict) -> Optional[TokenUser]:
        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            return None

        try:
            parsed_id = UUID(user_id)
        except ValueError:
            return None

        # Supabase stores display name in user_metadata
        user_metadata = payload.get("user_metadata") or {}
        display_name = (
            user_metadata.get("display_name")
            or user_metadata.get("name")
            or user_metadata.get("full_name")
            or payload.get("name")
        )

        return TokenUser(
            id=parsed_id,
            email=email,
            display_name=display_name,
            role=payload.get("role"),
        )

    def create_token(self, user: TokenUser) -> str:
        """Create an HS256 JWT for a user (local development and tests)."""
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": expire,
            "user_metadata": {
                "display_name": user.display_name,
            },
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
