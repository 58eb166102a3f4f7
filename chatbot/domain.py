#!/usr/bin/env python3
"""
Read-only Domain Query Interface used by the chatbot handlers.

An instance is bound to one caller: every method only sees records owned by
(or reachable through) that caller. Implementations must never write.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from chatbot.models import Employee, Project, Task, TaskStatus


class DomainQueryInterface(ABC):
    """Caller-scoped accessors over tasks, projects and employees"""

    @abstractmethod
    async def find_tasks(
        self,
        created_between: Optional[Tuple[datetime, datetime]] = None,
        status: Optional[TaskStatus] = None,
        limit: Optional[int] = None,
        order_by_created_desc: bool = False,
    ) -> List[Task]:
        """Tasks in the caller's projects matching all given filters.

        `created_between` is an inclusive (start, end) pair.
        """

    @abstractmethod
    async def find_tasks_by_employee(self, employee_id: str) -> List[Task]:
        ...

    @abstractmethod
    async def find_project_by_name_contains(self, fragment: str) -> Optional[Project]:
        """First caller project whose name contains `fragment`, with its tasks loaded."""

    @abstractmethod
    async def find_employee_by_name_contains(self, fragment: str) -> Optional[Employee]:
        ...

    @abstractmethod
    async def count_projects(self) -> int:
        ...

    @abstractmethod
    async def count_employees(self) -> int:
        ...

    @abstractmethod
    async def group_task_counts_by_status(self) -> Dict[str, int]:
        """Map of raw status value -> number of caller tasks with that status."""


# Builds the query interface bound to a given caller id
QueryScope = Callable[[str], DomainQueryInterface]
