from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from playground.errors import MalformedResponse

REQUIRED_FIELDS = ("source_code", "formatted_code", "options", "state", "issue_link", "version")
TEXT_FIELDS = ("source_code", "formatted_code", "state", "issue_link", "version")


@dataclass
class FormatResponse:
    source_code: str
    formatted_code: str
    options: Dict[str, Any]
    state: str
    issue_link: str
    version: str
    raw: dict | None = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "FormatResponse":
        if not isinstance(data, dict):
            raise MalformedResponse(f"Expected a JSON object, got {type(data).__name__}")
        missing = [k for k in REQUIRED_FIELDS if k not in data]
        if missing:
            raise MalformedResponse(f"Response missing fields: {', '.join(missing)}")
        if not isinstance(data["options"], dict):
            raise MalformedResponse("Response field 'options' is not an object")
        not_str = [k for k in TEXT_FIELDS if not isinstance(data[k], str)]
        if not_str:
            raise MalformedResponse(f"Response fields must be strings: {', '.join(not_str)}")
        return cls(
            source_code=data["source_code"],
            formatted_code=data["formatted_code"],
            options=data["options"],
            state=data["state"],
            issue_link=data["issue_link"],
            version=data["version"],
            raw=data,
        )


class FormatterService(Protocol):
    name: str  # version tag of the deployment, ex: "stable"

    def get_version(self) -> str: ...

    def fetch(self, state: Optional[str] = None) -> FormatResponse:
        """state=None returns the service's default example"""
        ...

    def format(self, source: str, options: Dict[str, Any]) -> FormatResponse: ...
