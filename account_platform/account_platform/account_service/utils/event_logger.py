"""
Event logger utility for authentication events.
"""
from typing import Optional
from fastapi import Request
import logging

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register_success",
    "login_success",
    "login_failure",
    "token_rejected",
}


def client_ip(request: Request) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For entry."""
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # Check for X-Forwarded-For header (proxy/load balancer scenarios)
    if not ip_address and request.headers.get("x-forwarded-for"):
        # X-Forwarded-For can contain multiple IPs, take the first one
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_auth_event(
    event_type: str,
    user_id: Optional[int],
    request: Request,
    metadata: dict = None
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: register_success, login_success, login_failure,
                    token_rejected
        user_id: The user's ID, or None when no user is resolved
        request: FastAPI Request object
        metadata: Optional dictionary of additional context. Must never hold
                  passwords, hashes or tokens.

    Raises:
        ValueError: If event_type is invalid
    """
    # Validate event type
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    logger.info(
        "AUTH %s user_id=%s ip=%s user_agent=%s metadata=%s",
        event_type, user_id, client_ip(request), request.headers.get("user-agent"), metadata or {}
    )
