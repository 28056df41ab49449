"""
JWT token management for API authentication.

Access tokens are HS256-signed and may carry the caller's tenant claim, which
the tenant resolver treats as a hint.
"""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional

import jwt
from django.conf import settings
from django.utils import timezone

from ..multitenancy.settings import get_multitenancy_settings

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser

logger = logging.getLogger(__name__)


class JWTManager:
    """Generate and verify access tokens."""

    @staticmethod
    def get_jwt_secret() -> str:
        """Return the JWT signing secret, falling back to Django's SECRET_KEY."""
        return getattr(settings, "JWT_SECRET_KEY", settings.SECRET_KEY)

    @staticmethod
    def get_jwt_expiration() -> int:
        """Access token lifetime in seconds; 0 or less means non-expiring."""
        return int(getattr(settings, "JWT_ACCESS_TOKEN_LIFETIME", 3600))

    @classmethod
    def generate_token(
        cls, user: "AbstractUser", *, tenant_id: Optional[Any] = None
    ) -> dict[str, Any]:
        """
        Generate an access token for the user.

        Returns a dictionary with ``token`` and ``expires_at`` (None for a
        non-expiring token).
        """
        now = timezone.now()
        lifetime = cls.get_jwt_expiration()
        expiration = None if lifetime <= 0 else now + timedelta(seconds=lifetime)

        payload = {
            "user_id": user.id,
            "username": user.get_username(),
            "iat": now,
            "type": "access",
        }
        if expiration is not None:
            payload["exp"] = expiration
        if tenant_id is not None:
            payload[get_multitenancy_settings().tenant_claim] = str(tenant_id)

        token = jwt.encode(payload, cls.get_jwt_secret(), algorithm="HS256")
        return {"token": token, "expires_at": expiration}

    @classmethod
    def verify_token(
        cls, token: str, expected_type: Optional[str] = None
    ) -> Optional[dict[str, Any]]:
        """Decode a token; None when it is invalid, expired or of the wrong type."""
        try:
            payload = jwt.decode(token, cls.get_jwt_secret(), algorithms=["HS256"])
            if expected_type and payload.get("type") != expected_type:
                logger.warning(
                    "JWT refused: expected type '%s', got '%s'",
                    expected_type,
                    payload.get("type"),
                )
                return None
            return payload
        except jwt.ExpiredSignatureError:
            logger.warning("JWT expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid JWT: %s", e)
            return None
