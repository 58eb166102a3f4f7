"""
Caller identity for the chatbot API

Resolves who is asking; every read is then scoped to that caller's records.
"""

from rbac.permissions import CallerContext

from rbac.auth import (
    get_current_caller,
    resolve_caller_id,
)

__all__ = [
    "CallerContext",
    "get_current_caller",
    "resolve_caller_id",
]
