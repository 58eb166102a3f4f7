"""Errors raised at the chatbot query boundary"""


class ChatbotError(Exception):
    """Base class for errors surfaced by answer_query."""
    pass


class InvalidQueryError(ChatbotError):
    """Raised when the incoming message is empty or not text."""
    pass


class UnauthorizedError(ChatbotError):
    """Raised when no caller identity accompanies the message."""
    pass


class QueryProcessingError(ChatbotError):
    """Raised when the data layer fails while answering a query.

    Distinct from a "not found" answer: lookups that match nothing are normal
    results, this is a system failure.
    """
    pass
