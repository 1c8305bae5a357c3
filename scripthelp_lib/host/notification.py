from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


def log_delivery(notification: "Notification") -> None:
    logger.info("Notification: %s", notification.as_dict())


class Notification:
    """A local notification; `schedule` hands it to the delivery callable."""

    def __init__(self, deliver: Optional[Callable[["Notification"], None]] = None):
        self.title = ''
        self.subtitle = ''
        self.body = ''
        self.sound: Optional[str] = None
        self.open_url: Optional[str] = None
        self._deliver = deliver or log_delivery

    def as_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in vars(self).items() if not k.startswith('_')}

    def schedule(self) -> None:
        self._deliver(self)
