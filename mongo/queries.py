#!/usr/bin/env python3
"""
MongoDB implementation of the chatbot's Domain Query Interface.

Document shapes:
    project  {_id, name, description, userId}
    employee {_id, name, userId, ...}
    task     {_id, title, status, priority, projectId, employeeId, createdAt}

Projects and employees are owned directly through `userId`; tasks are owned
through the project they belong to, so every task read is prefixed with a
project join that keeps only the caller's projects. Ids are stored as strings.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from chatbot.domain import DomainQueryInterface
from chatbot.models import Employee, Project, Task, TaskStatus
from mongo.client import DirectMongoClient, direct_mongo_client
from mongo.constants import EMPLOYEE_COLLECTION, PROJECT_COLLECTION, TASK_COLLECTION

logger = logging.getLogger(__name__)


def _contains(fragment: str) -> Dict[str, Any]:
    """Substring match on a stored name; regex metacharacters in the fragment are literal."""
    return {"$regex": re.escape(fragment), "$options": "i"}


def _first(docs: Optional[List[dict]]) -> Optional[dict]:
    return docs[0] if docs else None


def _to_task(doc: dict, project_name: Optional[str] = None) -> Task:
    project = _first(doc.get("__project__")) or {}
    employee = _first(doc.get("__employee__")) or {}
    return Task(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        status=doc.get("status", ""),
        priority=doc.get("priority", ""),
        project_name=project_name if project_name is not None else project.get("name", ""),
        employee_name=employee.get("name"),
        created_at=doc.get("createdAt"),
    )


class MongoDomainQueries(DomainQueryInterface):
    """Read-only queries bound to one caller (`user_id`)"""

    def __init__(self, client: DirectMongoClient, user_id: str):
        self.client = client
        self.user_id = user_id

    async def _db(self):
        if not self.client.connected:
            await self.client.connect()
        return self.client.database

    def _owned_project_join(self) -> List[Dict[str, Any]]:
        """$lookup + $match stages keeping only tasks of the caller's projects."""
        return [
            {"$lookup": {
                "from": PROJECT_COLLECTION,
                "localField": "projectId",
                "foreignField": "_id",
                "as": "__project__",
            }},
            {"$match": {"__project__.userId": self.user_id}},
        ]

    @staticmethod
    def _employee_join() -> List[Dict[str, Any]]:
        return [
            {"$lookup": {
                "from": EMPLOYEE_COLLECTION,
                "localField": "employeeId",
                "foreignField": "_id",
                "as": "__employee__",
            }},
        ]

    async def find_tasks(
        self,
        created_between: Optional[Tuple[datetime, datetime]] = None,
        status: Optional[TaskStatus] = None,
        limit: Optional[int] = None,
        order_by_created_desc: bool = False,
    ) -> List[Task]:
        match: Dict[str, Any] = {}
        if created_between:
            start, end = created_between
            match["createdAt"] = {"$gte": start, "$lte": end}
        if status:
            match["status"] = status.value

        pipeline = self._owned_project_join()
        if match:
            pipeline.append({"$match": match})
        if order_by_created_desc:
            pipeline.append({"$sort": {"createdAt": -1}})
        if limit:
            pipeline.append({"$limit": limit})
        pipeline.extend(self._employee_join())

        db = await self._db()
        docs = await db[TASK_COLLECTION].aggregate(pipeline).to_list(length=None)
        return [_to_task(doc) for doc in docs]

    async def find_tasks_by_employee(self, employee_id: str) -> List[Task]:
        pipeline = [
            {"$match": {"employeeId": employee_id}},
            {"$lookup": {
                "from": PROJECT_COLLECTION,
                "localField": "projectId",
                "foreignField": "_id",
                "as": "__project__",
            }},
            *self._employee_join(),
        ]
        db = await self._db()
        docs = await db[TASK_COLLECTION].aggregate(pipeline).to_list(length=None)
        return [_to_task(doc) for doc in docs]

    async def find_project_by_name_contains(self, fragment: str) -> Optional[Project]:
        db = await self._db()
        doc = await db[PROJECT_COLLECTION].find_one({"userId": self.user_id, "name": _contains(fragment)})
        if not doc:
            return None

        pipeline = [{"$match": {"projectId": doc["_id"]}}, *self._employee_join()]
        task_docs = await db[TASK_COLLECTION].aggregate(pipeline).to_list(length=None)
        name = doc.get("name", "")
        return Project(
            id=str(doc["_id"]),
            name=name,
            description=doc.get("description"),
            tasks=[_to_task(task_doc, project_name=name) for task_doc in task_docs],
        )

    async def find_employee_by_name_contains(self, fragment: str) -> Optional[Employee]:
        db = await self._db()
        doc = await db[EMPLOYEE_COLLECTION].find_one({"userId": self.user_id, "name": _contains(fragment)})
        if not doc:
            return None
        return Employee(id=str(doc["_id"]), name=doc.get("name", ""))

    async def count_projects(self) -> int:
        db = await self._db()
        return await db[PROJECT_COLLECTION].count_documents({"userId": self.user_id})

    async def count_employees(self) -> int:
        db = await self._db()
        return await db[EMPLOYEE_COLLECTION].count_documents({"userId": self.user_id})

    async def group_task_counts_by_status(self) -> Dict[str, int]:
        pipeline = self._owned_project_join() + [
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]
        db = await self._db()
        rows = await db[TASK_COLLECTION].aggregate(pipeline).to_list(length=None)
        return {row["_id"]: row["count"] for row in rows}


def mongo_scope(caller_id: str) -> MongoDomainQueries:
    """QueryScope backed by the shared Motor client"""
    return MongoDomainQueries(direct_mongo_client, caller_id)
