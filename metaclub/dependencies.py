from typing import Any, Dict

from fastapi import Request

from .config import ADMIN_COOKIE_NAME
from .auth import decode_admin_token
from .services.notifier import TicketNotifier
from .services.storage import UploadStore


async def require_admin(request: Request) -> Dict[str, Any]:
    """Require a valid admin session cookie. Raises 401 otherwise."""
    return decode_admin_token(request.cookies.get(ADMIN_COOKIE_NAME))


def get_upload_store() -> UploadStore:
    """Dependency for the screenshot store."""
    return UploadStore()


def get_notifier() -> TicketNotifier:
    """Dependency for the confirmation email sender."""
    return TicketNotifier()
