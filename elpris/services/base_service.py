"""
Base service interface for business logic.

Services validate their own query parameters (HTTP 400) and turn anything
unexpected into HTTP 500 through handle_exception.
"""

import logging
from abc import ABC, abstractmethod
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class BaseService(ABC):
    """Abstract base service over an optional repository."""

    def __init__(self, repository=None):
        self.repository = repository

    @abstractmethod
    def validate_input(self, **kwargs) -> bool:
        """Raise HTTPException(400) for invalid parameters, else return True."""
        pass

    def handle_exception(self, e: Exception, context: str = None) -> None:
        """Log and convert unexpected exceptions into HTTP 500 errors."""
        error_message = f"{context}: {str(e)}" if context else str(e)
        logger.error(f"❌ {error_message}")
        raise HTTPException(status_code=500, detail=error_message)
