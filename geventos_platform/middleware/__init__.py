"""
Middleware components for the GEventos platform.
"""

from .error_handler import ErrorHandlerMiddleware, request_validation_exception_handler
from .logging import LoggingMiddleware, request_id_var

__all__ = [
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",
    "request_id_var",
    "request_validation_exception_handler",
]
