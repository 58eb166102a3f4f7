"""
Shared fixtures: an in-memory Domain Query Interface seeded per test.
"""

import os
import sys
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chatbot.domain import DomainQueryInterface
from chatbot.models import Employee, Project, Task


class InMemoryStore:
    """Plain lists of project/employee/task dicts shaped like the Mongo documents."""

    def __init__(self):
        self.projects: List[dict] = []
        self.employees: List[dict] = []
        self.tasks: List[dict] = []

    def add_project(self, id, name, user_id="user-1", description=None):
        self.projects.append({"_id": id, "name": name, "userId": user_id, "description": description})

    def add_employee(self, id, name, user_id="user-1"):
        self.employees.append({"_id": id, "name": name, "userId": user_id})

    def add_task(self, id, title, project_id, status="TODO", priority="MEDIUM", employee_id=None, created_at=None):
        self.tasks.append({
            "_id": id,
            "title": title,
            "status": status,
            "priority": priority,
            "projectId": project_id,
            "employeeId": employee_id,
            "createdAt": created_at or datetime.now().astimezone(),
        })


class InMemoryDomainQueries(DomainQueryInterface):
    def __init__(self, store: InMemoryStore, user_id: str):
        self.store = store
        self.user_id = user_id
        self.calls: List[tuple] = []

    def _project(self, project_id) -> Optional[dict]:
        return next((p for p in self.store.projects if p["_id"] == project_id), None)

    def _employee(self, employee_id) -> Optional[dict]:
        return next((e for e in self.store.employees if e["_id"] == employee_id), None)

    def _owned_tasks(self) -> List[dict]:
        owned = {p["_id"] for p in self.store.projects if p["userId"] == self.user_id}
        return [t for t in self.store.tasks if t["projectId"] in owned]

    def _to_task(self, doc: dict) -> Task:
        employee = self._employee(doc["employeeId"])
        return Task(
            id=doc["_id"],
            title=doc["title"],
            status=doc["status"],
            priority=doc["priority"],
            project_name=self._project(doc["projectId"])["name"],
            employee_name=employee["name"] if employee else None,
            created_at=doc["createdAt"],
        )

    async def find_tasks(self, created_between=None, status=None, limit=None, order_by_created_desc=False):
        self.calls.append(("find_tasks", created_between, status, limit, order_by_created_desc))
        docs = self._owned_tasks()
        if created_between:
            start, end = created_between
            docs = [d for d in docs if start <= d["createdAt"] <= end]
        if status:
            docs = [d for d in docs if d["status"] == status.value]
        if order_by_created_desc:
            docs = sorted(docs, key=lambda d: d["createdAt"], reverse=True)
        if limit:
            docs = docs[:limit]
        return [self._to_task(d) for d in docs]

    async def find_tasks_by_employee(self, employee_id):
        self.calls.append(("find_tasks_by_employee", employee_id))
        return [self._to_task(d) for d in self.store.tasks if d["employeeId"] == employee_id]

    async def find_project_by_name_contains(self, fragment):
        self.calls.append(("find_project_by_name_contains", fragment))
        for p in self.store.projects:
            if p["userId"] == self.user_id and fragment.lower() in p["name"].lower():
                tasks = [self._to_task(d) for d in self.store.tasks if d["projectId"] == p["_id"]]
                return Project(id=p["_id"], name=p["name"], description=p["description"], tasks=tasks)
        return None

    async def find_employee_by_name_contains(self, fragment):
        self.calls.append(("find_employee_by_name_contains", fragment))
        for e in self.store.employees:
            if e["userId"] == self.user_id and fragment.lower() in e["name"].lower():
                return Employee(id=e["_id"], name=e["name"])
        return None

    async def count_projects(self):
        return sum(1 for p in self.store.projects if p["userId"] == self.user_id)

    async def count_employees(self):
        return sum(1 for e in self.store.employees if e["userId"] == self.user_id)

    async def group_task_counts_by_status(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for doc in self._owned_tasks():
            counts[doc["status"]] = counts.get(doc["status"], 0) + 1
        return counts


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def queries(store):
    return InMemoryDomainQueries(store, "user-1")


@pytest.fixture
def scope(store):
    return lambda caller_id: InMemoryDomainQueries(store, caller_id)


@pytest.fixture
def apollo_store(store):
    """Caller user-1 owns Apollo with 4 tasks (1 done, 1 in progress, 2 backlog)."""
    now = datetime.now().astimezone()
    store.add_project("p-apollo", "Apollo", description="Moon landing")
    store.add_project("p-other", "Gemini", user_id="user-2")
    store.add_employee("e-john", "John Smith")
    store.add_employee("e-jane", "Jane Doe")
    store.add_task("t1", "Design lander", "p-apollo", status="DONE", priority="HIGH",
                   employee_id="e-john", created_at=now - timedelta(days=3))
    store.add_task("t2", "Build lander", "p-apollo", status="IN_PROGRESS", priority="URGENT",
                   employee_id="e-john", created_at=now - timedelta(days=2))
    store.add_task("t3", "Test lander", "p-apollo", status="BACKLOG", created_at=now - timedelta(days=1))
    store.add_task("t4", "Launch", "p-apollo", status="BACKLOG", priority="LOW", created_at=now)
    store.add_task("t5", "Someone else's task", "p-other", status="DONE", created_at=now)
    return store


class FailingDomainQueries(InMemoryDomainQueries):
    """Store whose project count blows up like a dropped connection."""

    async def count_projects(self):
        raise ConnectionError("connection reset")


@pytest.fixture
def failing_scope(store):
    return lambda caller_id: FailingDomainQueries(store, caller_id)
