#!/usr/bin/env python3
"""Routes a classified message to the handler for its intent"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from chatbot.domain import DomainQueryInterface, QueryScope
from chatbot.handlers import (
    handle_employee_tasks_query,
    handle_project_status_query,
    handle_statistics_query,
    handle_tasks_query,
)
from chatbot.models import QueryAnalysis, QueryIntent, QueryResult

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "I'm not sure how to help with that. Try asking about your tasks, projects, or employees."

Handler = Callable[[QueryAnalysis, DomainQueryInterface], Awaitable[QueryResult]]


async def handle_unknown_query(analysis: QueryAnalysis, queries: DomainQueryInterface) -> QueryResult:
    return QueryResult(answer=FALLBACK_ANSWER)


DEFAULT_HANDLERS: Dict[QueryIntent, Handler] = {
    QueryIntent.TASKS: handle_tasks_query,
    QueryIntent.PROJECT_STATUS: handle_project_status_query,
    QueryIntent.EMPLOYEE_TASKS: handle_employee_tasks_query,
    QueryIntent.STATISTICS: handle_statistics_query,
    QueryIntent.UNKNOWN: handle_unknown_query,
}


class QueryDispatcher:
    """Selects exactly one handler per intent.

    The dispatcher does no filtering itself: it asks `scope` for the
    caller-bound query interface and hands that to the handler.
    """

    def __init__(self, scope: QueryScope, handlers: Optional[Dict[QueryIntent, Handler]] = None):
        handlers = dict(DEFAULT_HANDLERS if handlers is None else handlers)
        missing = [intent.name for intent in QueryIntent if intent not in handlers]
        if missing:
            raise ValueError(f"No handler registered for intents: {', '.join(missing)}")

        self.scope = scope
        self.handlers = handlers

    async def dispatch(self, analysis: QueryAnalysis, caller_id: str) -> QueryResult:
        handler = self.handlers[analysis.intent]
        logger.info(f"Dispatching {analysis.intent.name} query for caller {caller_id}")
        return await handler(analysis, self.scope(caller_id))
