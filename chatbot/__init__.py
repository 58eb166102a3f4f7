"""
Chatbot query layer

Classifies free-text questions about projects, tasks and employees and
answers them from the caller's own records.
"""

from chatbot.classifier import classify
from chatbot.dispatcher import FALLBACK_ANSWER, QueryDispatcher
from chatbot.errors import (
    ChatbotError,
    InvalidQueryError,
    QueryProcessingError,
    UnauthorizedError,
)
from chatbot.models import QueryAnalysis, QueryIntent, QueryResult
from chatbot.service import answer_query

__all__ = [
    "classify",
    "answer_query",
    "QueryDispatcher",
    "FALLBACK_ANSWER",
    "QueryAnalysis",
    "QueryIntent",
    "QueryResult",
    "ChatbotError",
    "InvalidQueryError",
    "QueryProcessingError",
    "UnauthorizedError",
]
