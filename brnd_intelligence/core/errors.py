from typing import Optional


class IntelligenceError(Exception):
    """Base class for errors raised by the analytics pipeline."""


class GenerationServiceError(IntelligenceError):
    """The completion service failed while generating SQL (auth, quota, model, timeout)."""


class GenerationParseError(IntelligenceError):
    """The completion came back empty or was not a usable JSON object."""

    def __init__(self, message: str, raw_response: Optional[str] = None):
        super().__init__(message)
        self.raw_response = raw_response


class QueryExecutionError(IntelligenceError):
    """Raised inside the executor when a result is not tabular."""


class QueryRejectedError(IntelligenceError):
    """Generated SQL was refused by the guardrail or failed in the database."""

    def __init__(self, error: str, sql: str, explanation: str = ""):
        super().__init__(error)
        self.error = error
        self.sql = sql
        self.explanation = explanation
