#!/usr/bin/env python3
"""
Authentication utilities
Extracts the caller identity from request headers
"""

import logging
from typing import Annotated, Optional

from fastapi import Header, HTTPException, status

from rbac.permissions import CallerContext

logger = logging.getLogger(__name__)


def resolve_caller_id(x_user_id: Optional[str], authorization: Optional[str]) -> Optional[str]:
    """Pick the caller id from headers.

    Priority: X-User-Id header > Authorization Bearer token.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    if authorization and authorization.startswith("Bearer "):
        # Token validation happens upstream; the token carries the user id
        token = authorization[len("Bearer "):].strip()
        return token or None
    return None


async def get_current_caller(
    x_user_id: Annotated[Optional[str], Header()] = None,
    authorization: Annotated[Optional[str], Header()] = None,
) -> CallerContext:
    """FastAPI dependency returning the authenticated caller

    Raises:
        HTTPException: 401 when no identity is present
    """
    user_id = resolve_caller_id(x_user_id, authorization)
    if not user_id:
        logger.warning("Rejected request without caller identity")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return CallerContext(user_id=user_id)
