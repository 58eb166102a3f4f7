#!/usr/bin/env python3
"""
Rule-based intent classifier for chatbot messages.

Rules are evaluated in table order and the first matching rule wins. The
order matters: the task-keyword rule is a plain substring test and runs
first, so "how many tasks does john have" is a TASKS query, not STATISTICS
or EMPLOYEE_TASKS.

Input is expected to be lower-cased already; no normalization happens here.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from chatbot.models import QueryAnalysis, QueryIntent, TaskStatus, Timeframe

logger = logging.getLogger(__name__)

# \w restricted to [A-Za-z0-9_]
_FLAGS = re.IGNORECASE | re.ASCII

TASK_KEYWORDS = ("task", "todo", "to do")

TIMEFRAME_KEYWORDS: Sequence[Tuple[Tuple[str, ...], Timeframe]] = (
    (("today",), Timeframe.TODAY),
    (("this week",), Timeframe.THIS_WEEK),
    (("this month",), Timeframe.THIS_MONTH),
)

# Checked in order; only the first hit sets the status
STATUS_KEYWORDS: Sequence[Tuple[Tuple[str, ...], TaskStatus]] = (
    (("in progress",), TaskStatus.IN_PROGRESS),
    (("done", "completed"), TaskStatus.DONE),
    (("backlog",), TaskStatus.BACKLOG),
    (("review",), TaskStatus.REVIEW),
    (("todo", "to do"), TaskStatus.TODO),
)

PROJECT_PATTERNS = (
    re.compile(r"project\s+(\w+)", _FLAGS),
    re.compile(r"status of\s+(\w+)", _FLAGS),
    re.compile(r"how is\s+(\w+)", _FLAGS),
)

EMPLOYEE_PATTERNS = (
    re.compile(r"tasks? (assigned to|for)\s+(\w+)", _FLAGS),
    re.compile(r"what is\s+(\w+)\s+working on", _FLAGS),
    re.compile(r"what('s| is)\s+(\w+)\s+doing", _FLAGS),
)

STATISTICS_KEYWORDS = ("statistics", "stats", "how many", "count")


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _first_keyword_match(text: str, table):
    for keywords, value in table:
        if _contains_any(text, keywords):
            return value
    return None


def _first_pattern_match(text: str, patterns) -> Optional[re.Match]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None


@dataclass(frozen=True)
class ClassificationRule:
    """One entry of the classification table.

    `build` is only called when `predicate` returned True for the same text.
    """
    name: str
    predicate: Callable[[str], bool]
    build: Callable[[str], QueryAnalysis]


def _build_tasks(text: str) -> QueryAnalysis:
    # Timeframe and status are detected independently of each other
    return QueryAnalysis(
        intent=QueryIntent.TASKS,
        timeframe=_first_keyword_match(text, TIMEFRAME_KEYWORDS),
        status=_first_keyword_match(text, STATUS_KEYWORDS),
    )


def _is_project_query(text: str) -> bool:
    return _first_pattern_match(text, PROJECT_PATTERNS) is not None or "project status" in text


def _build_project_status(text: str) -> QueryAnalysis:
    match = _first_pattern_match(text, PROJECT_PATTERNS)
    return QueryAnalysis(
        intent=QueryIntent.PROJECT_STATUS,
        project_name=match.group(1) if match else "",
    )


def _build_employee_tasks(text: str) -> QueryAnalysis:
    match = _first_pattern_match(text, EMPLOYEE_PATTERNS)
    # The name is always the last capturing group of whichever pattern fired
    return QueryAnalysis(
        intent=QueryIntent.EMPLOYEE_TASKS,
        employee_name=match.group(match.re.groups),
    )


DEFAULT_RULES: List[ClassificationRule] = [
    ClassificationRule(
        name="tasks",
        predicate=lambda text: _contains_any(text, TASK_KEYWORDS),
        build=_build_tasks,
    ),
    ClassificationRule(
        name="project_status",
        predicate=_is_project_query,
        build=_build_project_status,
    ),
    ClassificationRule(
        name="employee_tasks",
        predicate=lambda text: _first_pattern_match(text, EMPLOYEE_PATTERNS) is not None,
        build=_build_employee_tasks,
    ),
    ClassificationRule(
        name="statistics",
        predicate=lambda text: _contains_any(text, STATISTICS_KEYWORDS),
        build=lambda text: QueryAnalysis(intent=QueryIntent.STATISTICS),
    ),
]


def classify(text: str, rules: Sequence[ClassificationRule] = DEFAULT_RULES) -> QueryAnalysis:
    """Map a lower-cased message to a QueryAnalysis.

    Returns an UNKNOWN analysis when no rule matches.
    """
    for rule in rules:
        if rule.predicate(text):
            analysis = rule.build(text)
            logger.debug(f"Classified message with rule '{rule.name}': {analysis}")
            return analysis

    logger.debug("No classification rule matched; intent is UNKNOWN")
    return QueryAnalysis(intent=QueryIntent.UNKNOWN)
