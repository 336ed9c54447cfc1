"""
Audit Logger

DESIGN DECISION: Every change to the ledger and every load/save is logged.
This provides:
1. Traceability of edits
2. Debugging capability when a data file fails to load
3. A history of the session

The audit logger:
- Is synchronous, like the rest of the ledger
- Never raises into the caller (a logging failure must not lose data)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

LOGGER_NAME = "expense_ledger.audit"


def configure_logging(level: str = "INFO") -> None:
    """Route audit output to stderr at the given stdlib level."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger(LOGGER_NAME).setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Writes every event to the structured log at a level matching
    its severity.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.

        Args:
            correlation_id: Attached to events that don't carry their own.
        """
        self._correlation_id = correlation_id
        self._logger = structlog.get_logger(LOGGER_NAME)

    @property
    def correlation_id(self) -> Optional[UUID]:
        return self._correlation_id

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written, False if logging failed.
        """
        if event.correlation_id is None and self._correlation_id is not None:
            event = event.model_copy(update={"correlation_id": self._correlation_id})

        try:
            log_dict = event.to_log_dict()
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Log failure but don't raise
            logging.getLogger(LOGGER_NAME).exception(
                "audit logging failed for event %s", event.event_id
            )
            return False

        return True

    def log_expense_added(self, expense_id: str, name: str, amount: str) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, name, amount))

    def log_expense_updated(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id))

    def log_expense_removed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_removed(expense_id))

    def log_expense_not_found(self, expense_id: str, operation: str) -> None:
        self.log(AuditEventBuilder.expense_not_found(expense_id, operation))

    def log_validation_failed(
        self,
        issues: list[dict],
        expense_id: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(issues, expense_id))

    def log_ledger_loaded(self, path: str, expense_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(path, expense_count))

    def log_ledger_saved(self, path: str, expense_count: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(path, expense_count))

    def log_load_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.load_failed(path, error_message))

    def log_save_failed(self, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(path, error_message))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per ledger session so all of its events can be grouped.
    """
    return uuid4()
