#!/usr/bin/env python3
"""
Types shared by the chatbot query layer.

Internal values (intents, slots, domain records) are plain enums and
dataclasses; everything that goes back over the wire is a pydantic model so
the HTTP layer can serialize it directly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class QueryIntent(Enum):
    """Classified purpose of a user message"""
    TASKS = "tasks"                    # e.g. "What are my tasks today?"
    PROJECT_STATUS = "project_status"  # e.g. "What's the status of Project Apollo?"
    EMPLOYEE_TASKS = "employee_tasks"  # e.g. "Show me tasks assigned to John"
    STATISTICS = "statistics"          # e.g. "How many projects do I have?"
    UNKNOWN = "unknown"


class Timeframe(str, Enum):
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"


class TaskStatus(str, Enum):
    BACKLOG = "BACKLOG"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


@dataclass
class QueryAnalysis:
    """Represents the parsed intent of a user message plus its slots"""
    intent: QueryIntent
    timeframe: Optional[Timeframe] = None
    status: Optional[TaskStatus] = None
    project_name: Optional[str] = None  # Fragment of a project name, "" when asked without one
    employee_name: Optional[str] = None  # Fragment of an employee name


# --- Domain records returned by the data layer ---

@dataclass
class Task:
    id: str
    title: str
    status: str
    priority: str
    project_name: str
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Project:
    id: str
    name: str
    description: Optional[str] = None
    tasks: List[Task] = field(default_factory=list)


@dataclass
class Employee:
    id: str
    name: str


# --- Wire models ---

class TaskSummary(BaseModel):
    id: str
    title: str
    status: str
    priority: str
    project: str
    assignedTo: Optional[str] = None


class ProjectSummary(BaseModel):
    id: str
    name: str
    description: str = ""
    totalTasks: int
    completedTasks: int
    inProgressTasks: int
    percentComplete: int


class EmployeeSummary(BaseModel):
    id: str
    name: str


class TaskCounts(BaseModel):
    backlog: int = 0
    todo: int = 0
    inProgress: int = 0
    review: int = 0
    done: int = 0
    total: int = 0


class StatisticsSummary(BaseModel):
    projects: int
    employees: int
    tasks: TaskCounts


class TasksPayload(BaseModel):
    type: Literal["tasks"] = "tasks"
    tasks: List[TaskSummary]


class ProjectPayload(BaseModel):
    type: Literal["project"] = "project"
    project: ProjectSummary


class EmployeeTasksPayload(BaseModel):
    type: Literal["employee-tasks"] = "employee-tasks"
    employee: EmployeeSummary
    tasks: List[TaskSummary]


class StatisticsPayload(BaseModel):
    type: Literal["statistics"] = "statistics"
    statistics: StatisticsSummary


StructuredPayload = Annotated[
    Union[TasksPayload, ProjectPayload, EmployeeTasksPayload, StatisticsPayload],
    Field(discriminator="type"),
]


class QueryResult(BaseModel):
    """Natural-language answer plus an optional payload for rendering"""
    answer: str
    data: Optional[StructuredPayload] = None
