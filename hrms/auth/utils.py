"""
Request authentication helpers.
"""

from typing import TYPE_CHECKING, Any, Optional

from django.contrib.auth import get_user_model
from django.http import HttpRequest

from .jwt import JWTManager

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractUser


def get_user_from_token(token: str) -> tuple[Optional["AbstractUser"], Optional[dict]]:
    """Return ``(user, payload)`` for a valid access token, else ``(None, None)``."""
    payload = JWTManager.verify_token(token, expected_type="access")
    if not payload:
        return None, None

    User = get_user_model()
    try:
        return User.objects.get(id=payload["user_id"]), payload
    except (User.DoesNotExist, KeyError):
        return None, None


def resolve_request_user(request: HttpRequest) -> Optional[Any]:
    """
    Retrieve the user from the session or the ``Authorization: Bearer`` header.

    A decoded token payload is attached as ``request.jwt_payload`` so the
    tenant resolver can read the tenant claim.
    """
    user = getattr(request, "user", None)
    if user is not None and getattr(user, "is_authenticated", False):
        return user

    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        return None

    token_user, payload = get_user_from_token(token)
    if token_user is None or not token_user.is_active:
        return None
    request.user = token_user
    request.jwt_payload = payload
    return token_user
