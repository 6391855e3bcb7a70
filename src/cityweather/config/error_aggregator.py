"""Error aggregation and reporting utilities."""

import logging
import threading
import traceback
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from types import TracebackType

from cityweather.config.types import ErrorAggregationConfig


@dataclass
class ErrorGroup:
    """Group of identical errors."""
    message: str
    count: int = 0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)
    services: set[str] = field(default_factory=set)
    stack_traces: list[str] = field(default_factory=list)

    def update(self, service: str, stack_trace: str | None = None) -> None:
        """Update error group with new occurrence."""
        self.count += 1
        self.last_seen = datetime.now()
        self.services.add(service)
        if stack_trace and stack_trace not in self.stack_traces:
            self.stack_traces.append(stack_trace)

class ErrorAggregator:
    """Aggregates errors across services and reports them in groups.

    Provider workers report from their own threads, so every access to the
    groups goes through the lock.
    """

    def __init__(self, config: ErrorAggregationConfig):
        """Initialize error aggregator.

        Args:
            config: Error aggregation configuration
        """
        self._errors: dict[str, ErrorGroup] = {}
        self._lock = threading.Lock()
        self._config = config
        self.logger = logging.getLogger('error_aggregator')

    @property
    def pending(self) -> dict[str, ErrorGroup]:
        """Snapshot of error groups not yet reported."""
        with self._lock:
            return dict(self._errors)

    def add_error(
        self,
        message: str,
        service: str,
        stack_trace: str | TracebackType | None = None
    ) -> None:
        """Add error occurrence to aggregator.

        Args:
            message: Error message
            service: Service where error occurred
            stack_trace: Optional formatted stack trace or traceback object
        """
        if not self._config.enabled:
            return

        if isinstance(stack_trace, TracebackType):
            stack_trace = ''.join(traceback.format_tb(stack_trace))

        with self._lock:
            if message not in self._errors:
                self._errors[message] = ErrorGroup(message=message)
            error_group = self._errors[message]
            error_group.update(service, stack_trace)

            if error_group.count >= self._config.error_threshold:
                self._report_error_group(error_group)
                del self._errors[message]

    def _report_error_group(self, error_group: ErrorGroup) -> None:
        """Report a single error group."""
        self.logger.error(
            f"{error_group.message} (occurrences: {error_group.count}, "
            f"services: {', '.join(sorted(error_group.services))})",
            extra={'extra_fields': {
                'error_count': error_group.count,
                'first_seen': error_group.first_seen.isoformat(),
                'last_seen': error_group.last_seen.isoformat()
            }}
        )
        for trace in error_group.stack_traces:
            if trace.strip():
                self.logger.debug(f"Stack trace:\n{trace}")

    def shutdown(self) -> None:
        """Report remaining errors and reset the aggregator."""
        if not self._config.enabled:
            return

        with self._lock:
            for group in self._errors.values():
                self._report_error_group(group)
            self._errors.clear()

# Global error aggregator instance
_error_aggregator: ErrorAggregator | None = None

def init_error_aggregator(config: ErrorAggregationConfig | None = None) -> ErrorAggregator:
    """Initialize global error aggregator with configuration.

    Args:
        config: Error aggregation configuration, defaults when omitted

    Returns:
        The new global aggregator
    """
    global _error_aggregator
    _error_aggregator = ErrorAggregator(config or ErrorAggregationConfig())
    return _error_aggregator

def get_error_aggregator() -> ErrorAggregator:
    """Get global error aggregator instance, creating a default one on first use."""
    if _error_aggregator is None:
        return init_error_aggregator()
    return _error_aggregator

def aggregate_error(
    message: str,
    service: str,
    stack_trace: str | TracebackType | None = None
) -> None:
    """Add error to global aggregator.

    Args:
        message: Error message
        service: Service where error occurred
        stack_trace: Optional stack trace
    """
    get_error_aggregator().add_error(message, service, stack_trace)
