from __future__ import annotations
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class Analytics:
    """page-view tracking, set up once per page lifecycle and kept out of the session store"""

    def __init__(self, tracking_id: Optional[str] = None, anonymize_ip: bool = True):
        self.tracking_id = tracking_id
        self.anonymize_ip = anonymize_ip
        self.initialized = False
        self.pageviews: list[str] = []

    @property
    def enabled(self) -> bool:
        return bool(self.tracking_id)

    def initialize(self) -> None:
        if self.initialized or not self.enabled:
            return
        self.initialized = True
        logger.info("analytics initialized id=%s anonymize_ip=%s", self.tracking_id, self.anonymize_ip)

    def pageview(self, path: str) -> None:
        if not self.initialized:
            return
        self.pageviews.append(path)
        logger.info("pageview %s", path)
