#!/usr/bin/env python3
"""
Aggregation handlers, one per intent.

Each handler reads through a caller-scoped DomainQueryInterface, derives
whatever counts it needs and writes the answer sentence plus the payload the
UI renders. Missing slots and empty lookups produce a plain answer without
data; they are not errors.
"""

import logging
import math
import os
from datetime import date, datetime, time
from typing import Iterable, List, Tuple

from dotenv import load_dotenv

from chatbot.domain import DomainQueryInterface
from chatbot.models import (
    EmployeeSummary,
    EmployeeTasksPayload,
    Project,
    ProjectPayload,
    ProjectSummary,
    QueryAnalysis,
    QueryResult,
    StatisticsPayload,
    StatisticsSummary,
    Task,
    TaskCounts,
    TaskStatus,
    TaskSummary,
    TasksPayload,
    Timeframe,
)

load_dotenv()

logger = logging.getLogger(__name__)

# Size of the "recent tasks" listing when no timeframe or status was asked for
RECENT_TASKS_LIMIT: int = int(os.getenv("RECENT_TASKS_LIMIT", "10"))

UNASSIGNED = "Unassigned"


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Inclusive bounds of a calendar day on the local server clock.

    Returned as aware instants; a naive value would be stored as UTC.
    """
    return datetime.combine(day, time.min).astimezone(), datetime.combine(day, time.max).astimezone()


def to_task_summaries(tasks: Iterable[Task]) -> List[TaskSummary]:
    return [
        TaskSummary(
            id=task.id,
            title=task.title,
            status=task.status,
            priority=task.priority,
            project=task.project_name,
            assignedTo=task.employee_name or UNASSIGNED,
        )
        for task in tasks
    ]


def summarize_project(project: Project) -> ProjectSummary:
    total = len(project.tasks)
    completed = sum(1 for task in project.tasks if task.status == TaskStatus.DONE.value)
    in_progress = sum(1 for task in project.tasks if task.status == TaskStatus.IN_PROGRESS.value)
    # Halves round up
    percent = math.floor(completed / total * 100 + 0.5) if total > 0 else 0

    return ProjectSummary(
        id=project.id,
        name=project.name,
        description=project.description or "",
        totalTasks=total,
        completedTasks=completed,
        inProgressTasks=in_progress,
        percentComplete=percent,
    )


def count_by_status(status_counts: dict) -> TaskCounts:
    """Fold raw grouped counts into the five known buckets.

    Statuses outside the five are dropped, so `total` always equals the sum
    of the buckets.
    """
    counts = TaskCounts(
        backlog=status_counts.get(TaskStatus.BACKLOG.value, 0),
        todo=status_counts.get(TaskStatus.TODO.value, 0),
        inProgress=status_counts.get(TaskStatus.IN_PROGRESS.value, 0),
        review=status_counts.get(TaskStatus.REVIEW.value, 0),
        done=status_counts.get(TaskStatus.DONE.value, 0),
    )
    counts.total = counts.backlog + counts.todo + counts.inProgress + counts.review + counts.done
    return counts


async def handle_tasks_query(analysis: QueryAnalysis, queries: DomainQueryInterface) -> QueryResult:
    if analysis.timeframe == Timeframe.TODAY:
        logger.debug("Tasks query: created today")
        tasks = await queries.find_tasks(created_between=day_bounds(date.today()))
        empty_phrase, lead_phrase = "tasks today", "tasks for today"
    elif analysis.status:
        logger.debug(f"Tasks query: status {analysis.status.value}")
        tasks = await queries.find_tasks(status=analysis.status)
        empty_phrase = lead_phrase = f"{analysis.status.value.lower()} tasks"
    else:
        logger.debug("Tasks query: most recent")
        tasks = await queries.find_tasks(limit=RECENT_TASKS_LIMIT, order_by_created_desc=True)
        empty_phrase = lead_phrase = "recent tasks"

    if not tasks:
        return QueryResult(answer=f"You don't have any {empty_phrase}.")

    return QueryResult(
        answer=f"Here are your {lead_phrase}:",
        data=TasksPayload(tasks=to_task_summaries(tasks)),
    )


async def handle_project_status_query(analysis: QueryAnalysis, queries: DomainQueryInterface) -> QueryResult:
    if not analysis.project_name:
        return QueryResult(answer="Please specify a project name to check its status.")

    project = await queries.find_project_by_name_contains(analysis.project_name)
    if project is None:
        logger.debug(f"No project matches '{analysis.project_name}'")
        return QueryResult(answer=f'I couldn\'t find a project named "{analysis.project_name}".')

    return QueryResult(
        answer=f'Project "{project.name}" status:',
        data=ProjectPayload(project=summarize_project(project)),
    )


async def handle_employee_tasks_query(analysis: QueryAnalysis, queries: DomainQueryInterface) -> QueryResult:
    if not analysis.employee_name:
        return QueryResult(answer="Please specify an employee name to check their tasks.")

    employee = await queries.find_employee_by_name_contains(analysis.employee_name)
    if employee is None:
        logger.debug(f"No employee matches '{analysis.employee_name}'")
        return QueryResult(answer=f'I couldn\'t find an employee named "{analysis.employee_name}".')

    tasks = await queries.find_tasks_by_employee(employee.id)
    if not tasks:
        return QueryResult(answer=f"{employee.name} has no tasks assigned.")

    # Every task here belongs to the one employee
    summaries = to_task_summaries(tasks)
    for summary in summaries:
        summary.assignedTo = employee.name

    return QueryResult(
        answer=f"Tasks assigned to {employee.name}:",
        data=EmployeeTasksPayload(
            employee=EmployeeSummary(id=employee.id, name=employee.name),
            tasks=summaries,
        ),
    )


async def handle_statistics_query(analysis: QueryAnalysis, queries: DomainQueryInterface) -> QueryResult:
    projects = await queries.count_projects()
    employees = await queries.count_employees()
    status_counts = await queries.group_task_counts_by_status()

    return QueryResult(
        answer="Here are your current statistics:",
        data=StatisticsPayload(
            statistics=StatisticsSummary(
                projects=projects,
                employees=employees,
                tasks=count_by_status(status_counts),
            )
        ),
    )
