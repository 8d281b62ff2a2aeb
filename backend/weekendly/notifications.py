"""Notification sinks: where planner outcomes and weather advice are delivered for display."""

import logging
from typing import List, Protocol, Union

from .models import Outcome, OutdoorNudge, SwapProposal
from .observability import log_event

logger = logging.getLogger("weekendly.notifications")

Notice = Union[Outcome, SwapProposal, OutdoorNudge]


class NotificationSink(Protocol):
    def notify(self, notice: Notice) -> None:
        ...


class LoggingNotificationSink:
    """Writes every notice to the structured log."""

    def notify(self, notice: Notice) -> None:
        if isinstance(notice, Outcome):
            level = logging.INFO if notice.success else logging.WARNING
            log_event(
                logger,
                level,
                "planner_outcome",
                operation=notice.operation,
                success=notice.success,
                error_type=notice.error_type,
                activity_id=notice.activity_id,
                day=notice.day,
                detail=notice.message,
            )
        elif isinstance(notice, SwapProposal):
            log_event(
                logger,
                logging.INFO,
                "swap_proposed",
                day=notice.day,
                from_activity=notice.from_activity.id,
                to_activity=notice.to_activity.id,
            )
        else:
            log_event(logger, logging.INFO, "outdoor_nudge", day=notice.day, detail=notice.message)


class CollectingNotificationSink:
    """Keeps notices in memory until the host drains them."""

    def __init__(self):
        self.notices: List[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    def drain(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices
