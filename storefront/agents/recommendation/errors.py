"""
Error taxonomy for the recommendation pipeline.

Every failure between building the prompt and parsing the model output is one
of three kinds. Routes turn them into HTTP 500 payloads; the widget pipeline
turns them into the fallback product list.
"""

from typing import Any, Dict, Optional


class RecommendationError(Exception):
    """Base exception for recommendation pipeline errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(RecommendationError):
    """Raised when the Gemini API key is not configured."""

    def __init__(self, message: str = "Gemini API key not configured"):
        super().__init__(message=message, status_code=500)


class UpstreamError(RecommendationError):
    """Raised when the Gemini API fails or returns an unexpected envelope."""

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            details=details or ({"upstream_status": upstream_status} if upstream_status else None),
        )
        self.upstream_status = upstream_status


class ParseError(RecommendationError):
    """Raised when the model output does not contain a JSON array of handles."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=500,
            details={"raw_preview": raw_text[:200]} if raw_text else None,
        )
