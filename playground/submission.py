# playground/submission.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import FormatServiceError, SubmissionFailure, SubmissionInProgress, UnknownVersionError
from .formatter.base import FormatterService
from .state import SessionStore
from .url_sync import UrlSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    ok: bool
    error: Optional[Exception] = None
    href: Optional[str] = None


class SubmissionController:
    def __init__(self, store: SessionStore, registry: Mapping[str, FormatterService], url_sync: UrlSynchronizer):
        self.store = store
        self.registry = registry
        self.url_sync = url_sync

    def submit(self) -> SubmitResult:
        s = self.store.session
        if s.is_loading:
            # at most one request in flight
            logger.warning("submit ignored, a submission is already pending")
            return SubmitResult(ok=False, error=SubmissionInProgress("A submission is already pending"))

        version = s.version
        service = self.registry.get(version)
        if service is None:
            return SubmitResult(ok=False, error=UnknownVersionError(version, self.registry))

        source = s.source_text
        options = dict(s.options)

        self.store.begin_loading()
        error: Optional[str] = None
        try:
            resp = service.format(source, options)
        except FormatServiceError as e:
            logger.warning("submit to %s failed: %s", version, e)
            error = str(e)
            return SubmitResult(ok=False, error=SubmissionFailure(error))
        finally:
            self.store.end_loading(error)

        self.store.apply_service_response(resp)
        href = self.url_sync.sync(version, self.store.session.state_token)
        logger.info("formatted with %s, state=%s", version, resp.state)
        return SubmitResult(ok=True, href=href)
