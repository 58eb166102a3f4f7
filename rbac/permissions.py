#!/usr/bin/env python3
"""
Ownership-based access

There are no roles. A caller sees exactly the projects and employees whose
`userId` is theirs, and the tasks inside those projects.
"""

from dataclasses import dataclass


@dataclass
class CallerContext:
    """Authenticated caller used to scope every read."""
    user_id: str
