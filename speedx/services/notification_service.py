# speedx/services/notification_service.py
import logging
from collections import deque
from typing import Deque, List

from speedx.core.errors import AnalysisError
from speedx.models import Notification

logger = logging.getLogger(__name__)

class NotificationCenter:
    """
    Holds the transient messages shown to the user as toasts.

    Only the most recent `max_pending` messages are kept until drained.
    """

    def __init__(self, max_pending: int = 20):
        self._pending: Deque[Notification] = deque(maxlen=max_pending)

    def notify(self, title: str, description: str) -> Notification:
        notification = Notification(title=title, description=description)
        self._pending.append(notification)
        logger.debug("Notification queued: %s", title)
        return notification

    def notify_error(self, error: AnalysisError) -> Notification:
        return self.notify(error.title, error.description)

    def drain(self) -> List[Notification]:
        notifications = list(self._pending)
        self._pending.clear()
        return notifications
