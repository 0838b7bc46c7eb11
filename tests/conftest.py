from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from playground.errors import FormatServiceError
from playground.formatter.base import FormatResponse


class FakeService:
    """In-memory deployment: tokens map to stored (source, options) pairs."""

    def __init__(self, name: str, version: str):
        self.name = name
        self.version = version
        self.calls: List[tuple] = []
        self.fail_next: Optional[Exception] = None
        self.states: Dict[str, tuple] = {"default": ("print( 'hello' )\n", {"line_length": 88})}
        self._counter = 0
        self.body_overrides: Dict[str, Any] = {}

    def _maybe_fail(self) -> None:
        if self.fail_next is not None:
            e, self.fail_next = self.fail_next, None
            raise e

    def _response(self, token: str) -> FormatResponse:
        source, options = self.states[token]
        body = {
            "source_code": source,
            "formatted_code": f"[{self.name}] " + source.replace("( '", "(\"").replace("' )", "\")"),
            "options": dict(options),
            "state": token,
            "issue_link": f"https://github.com/psf/black/issues/new?state={token}",
            "version": self.version,
        }
        # lets a test corrupt the next body, it goes through the same validation as the http client
        body.update(self.body_overrides)
        return FormatResponse.from_json(body)

    def get_version(self) -> str:
        self.calls.append(("version",))
        self._maybe_fail()
        return self.version

    def fetch(self, state: Optional[str] = None) -> FormatResponse:
        self.calls.append(("fetch", state))
        self._maybe_fail()
        token = state or "default"
        if token not in self.states:
            raise FormatServiceError(f"unknown state {token}", status=404)
        return self._response(token)

    def format(self, source: str, options: Dict[str, Any]) -> FormatResponse:
        self.calls.append(("format", source, dict(options)))
        self._maybe_fail()
        self._counter += 1
        token = f"{self.name}-tok{self._counter}"
        canonical = {"line_length": 88, **options}
        self.states[token] = (source, canonical)
        return self._response(token)


@pytest.fixture
def services() -> Dict[str, FakeService]:
    return {
        "stable": FakeService("stable", "19.3b0"),
        "master": FakeService("master", "a1b2c3d"),
    }
