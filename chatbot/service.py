#!/usr/bin/env python3
"""
Entry point of the chatbot query layer: validate, classify, dispatch.

Data-layer failures are converted here, and only here, into a
QueryProcessingError so the caller can tell "system failure" apart from a
"not found" answer.
"""

import logging
from typing import Optional

from chatbot.classifier import classify
from chatbot.dispatcher import QueryDispatcher
from chatbot.errors import InvalidQueryError, QueryProcessingError, UnauthorizedError
from chatbot.models import QueryResult

logger = logging.getLogger(__name__)


async def answer_query(message, caller_id: Optional[str], dispatcher: QueryDispatcher) -> QueryResult:
    """Answer one chatbot message on behalf of `caller_id`.

    Raises:
        UnauthorizedError: no caller identity was supplied
        InvalidQueryError: message is empty or not a string
        QueryProcessingError: the data layer failed while answering
    """
    if not caller_id:
        raise UnauthorizedError("Unauthorized")

    if not isinstance(message, str) or not message:
        raise InvalidQueryError("Invalid request")

    analysis = classify(message.lower())

    try:
        return await dispatcher.dispatch(analysis, caller_id)
    except Exception as e:
        logger.exception(f"Chatbot error while handling {analysis.intent.name} query: {e}")
        raise QueryProcessingError("Failed to process query") from e
