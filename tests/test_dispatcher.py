#!/usr/bin/env python3
"""
Dispatcher tests
"""

import pytest
from unittest.mock import AsyncMock

from chatbot.dispatcher import DEFAULT_HANDLERS, FALLBACK_ANSWER, QueryDispatcher
from chatbot.models import QueryAnalysis, QueryIntent, QueryResult


class TestHandlerRegistry:

    def test_every_intent_has_a_handler(self):
        assert set(DEFAULT_HANDLERS) == set(QueryIntent)

    def test_missing_handler_is_rejected(self, scope):
        handlers = dict(DEFAULT_HANDLERS)
        del handlers[QueryIntent.STATISTICS]
        with pytest.raises(ValueError, match="STATISTICS"):
            QueryDispatcher(scope, handlers)


class TestDispatch:

    @pytest.mark.asyncio
    async def test_unknown_returns_fallback(self, scope):
        dispatcher = QueryDispatcher(scope)
        result = await dispatcher.dispatch(QueryAnalysis(intent=QueryIntent.UNKNOWN), "user-1")
        assert result.answer == FALLBACK_ANSWER
        assert result.data is None

    @pytest.mark.asyncio
    async def test_routes_to_exactly_one_handler_with_scoped_queries(self):
        handlers = {intent: AsyncMock(return_value=QueryResult(answer=intent.name)) for intent in QueryIntent}
        scopes = []

        def scope(caller_id):
            scopes.append(caller_id)
            return f"queries-for-{caller_id}"

        dispatcher = QueryDispatcher(scope, handlers)
        analysis = QueryAnalysis(intent=QueryIntent.PROJECT_STATUS, project_name="apollo")

        result = await dispatcher.dispatch(analysis, "user-42")

        assert result.answer == "PROJECT_STATUS"
        assert scopes == ["user-42"]
        handlers[QueryIntent.PROJECT_STATUS].assert_awaited_once_with(analysis, "queries-for-user-42")
        for intent, handler in handlers.items():
            if intent != QueryIntent.PROJECT_STATUS:
                handler.assert_not_awaited()
