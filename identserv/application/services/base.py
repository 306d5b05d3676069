"""Base service logging mixin.

Provides the LoggingMixin class for standardized structured logging across
application services.

Usage:
    from identserv.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, dependency: SomePort) -> None:
            self._dependency = dependency
            self._init_logger()

        async def do_something(self) -> None:
            log = self._log_operation("do_something", item_id="123")
            log.info("operation_started")
"""

import structlog

from identserv.infrastructure.observability.correlation import get_correlation_id
from identserv.infrastructure.observability.logging import get_logger_for_service


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "ident")

    Each operation gets:
    - operation: The name of the operation being performed
    - correlation_id: From context, one per accepted ident connection
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "ident") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: The component type for log categorization.
        """
        self._log = get_logger_for_service(self.__class__.__name__, component)

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
