"""Logging configuration with structured output and evaluation context support."""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from ..config import get_settings

# Context variables for evaluation tracking
evaluation_id_context: ContextVar[str | None] = ContextVar("evaluation_id", default=None)
content_type_context: ContextVar[str | None] = ContextVar("content_type", default=None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        evaluation_id = evaluation_id_context.get()
        if evaluation_id:
            log_data["evaluation_id"] = evaluation_id

        content_type = content_type_context.get()
        if content_type:
            log_data["content_type"] = content_type

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        if record.stack_info:
            log_data["stack_info"] = record.stack_info

        return json.dumps(log_data, default=str)


class ProductionLogger(logging.LoggerAdapter):
    """
    Logger adapter with:
    - Structured extra fields
    - Evaluation context tracking (evaluation_id, content_type)
    - Performance logging
    - Error enrichment
    """

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        """Add contextual information to log messages."""
        extra = {**self.extra, **kwargs.get("extra", {})}

        evaluation_id = evaluation_id_context.get()
        if evaluation_id and "evaluation_id" not in extra:
            extra["evaluation_id"] = evaluation_id

        content_type = content_type_context.get()
        if content_type and "content_type" not in extra:
            extra["content_type"] = content_type

        kwargs["extra"] = {"extra_fields": extra}
        return msg, kwargs

    def with_context(self, **context: Any) -> "ProductionLogger":
        """Create a new logger with additional context."""
        new_extra = {**self.extra, **context}
        return ProductionLogger(self.logger, new_extra)

    def log_performance(
        self,
        operation: str,
        duration_ms: float,
        **metadata: Any
    ) -> None:
        """
        Log performance metrics.

        Args:
            operation: Name of the operation
            duration_ms: Duration in milliseconds
            **metadata: Additional metadata
        """
        self.info(
            f"Performance: {operation} completed in {duration_ms:.2f}ms",
            extra={
                "operation": operation,
                "duration_ms": duration_ms,
                "metric_type": "performance",
                **metadata,
            },
        )

    def log_error_with_context(
        self,
        message: str,
        error: Exception,
        **context: Any
    ) -> None:
        """
        Log errors with full context and stack trace.

        Args:
            message: Error message
            error: Exception instance
            **context: Additional context
        """
        self.error(
            message,
            exc_info=(type(error), error, error.__traceback__),
            extra={
                "error_type": type(error).__name__,
                "error_message": str(error),
                **context,
            },
        )

    def log_evaluation(
        self,
        overall_status: str,
        overall_score: float,
        dimensions: int,
        **metadata: Any
    ) -> None:
        """
        Log a completed composite evaluation.

        Args:
            overall_status: Aggregated status of the verdict
            overall_score: Mean score across dimensions
            dimensions: Number of dimensions evaluated
            **metadata: Additional metadata
        """
        self.info(
            f"Evaluation: {overall_status} (score: {overall_score:.3f}, dimensions: {dimensions})",
            extra={
                "overall_status": overall_status,
                "overall_score": overall_score,
                "dimensions": dimensions,
                "metric_type": "evaluation",
                **metadata,
            },
        )


def get_logger(name: str) -> ProductionLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured ProductionLogger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Scoring artifact", extra={"content_type": "roadmap"})
        logger.log_performance("composite_evaluate", 4.2, dimensions=5)
    """
    settings = get_settings()

    base_logger = logging.getLogger(name)

    if not base_logger.handlers:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
        base_logger.setLevel(log_level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)

        if settings.is_production or settings.log_format == "json":
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            )

        handler.setFormatter(formatter)
        base_logger.addHandler(handler)

        # Prevent propagation to root logger
        base_logger.propagate = False

    return ProductionLogger(base_logger, {})


def set_evaluation_context(
    evaluation_id: str | None = None,
    content_type: str | None = None,
) -> None:
    """
    Set evaluation context for logging.

    Args:
        evaluation_id: Identifier of the evaluation run
        content_type: Type of artifact being evaluated
    """
    if evaluation_id:
        evaluation_id_context.set(evaluation_id)
    if content_type:
        content_type_context.set(content_type)


def clear_evaluation_context() -> None:
    """Clear evaluation context."""
    evaluation_id_context.set(None)
    content_type_context.set(None)
