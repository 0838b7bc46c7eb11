# playground/state.py  session store
from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .errors import UnknownVersionError

OptionSet = Dict[str, Any]  # option name -> value, passed through untouched

DEFAULT_VERSION = "stable"


@dataclass
class VersionIdentifiers:
    stable: str = ""
    master: str = ""
    extra: Dict[str, str] = field(default_factory=dict)  # any deployment beyond the two

    def get(self, tag: str) -> str:
        if tag in ("stable", "master"):
            return getattr(self, tag)
        return self.extra.get(tag, "")

    def set(self, tag: str, value: str) -> None:
        if tag in ("stable", "master"):
            setattr(self, tag, value)
        else:
            self.extra[tag] = value

    def as_dict(self) -> Dict[str, str]:
        return {"stable": self.stable, "master": self.master, **self.extra}


@dataclass
class Session:
    source_text: str = ""
    formatted_text: str = ""
    options: OptionSet = field(default_factory=dict)
    version: str = DEFAULT_VERSION
    version_identifiers: VersionIdentifiers = field(default_factory=VersionIdentifiers)
    state_token: Optional[str] = None
    issue_link: str = ""
    is_loading: bool = False
    is_sidebar_visible: bool = False
    last_error: Optional[str] = None  # set after a failed submit, cleared on the next success


@dataclass(frozen=True)
class OptionPatch:
    values: Mapping[str, Any]


@dataclass(frozen=True)
class VersionSwitch:
    version: str


SessionChange = Union[OptionPatch, VersionSwitch]


class SessionStore:
    """Single owner of the Session. Every mutation goes through a method here."""

    def __init__(self, session: Session, known_versions: Optional[Iterable[str]] = None):
        self._session = session
        self.known_versions = frozenset(known_versions) if known_versions else None

    @property
    def session(self) -> Session:
        # read-only by convention, use snapshot() when the value must outlive a transition
        return self._session

    def snapshot(self) -> Session:
        return copy.deepcopy(self._session)

    # ---- local edits ----
    def set_source(self, text: str) -> None:
        self._session.source_text = text

    def toggle_sidebar(self) -> bool:
        self._session.is_sidebar_visible = not self._session.is_sidebar_visible
        return self._session.is_sidebar_visible

    def update(self, change: SessionChange) -> None:
        if isinstance(change, VersionSwitch):
            if self.known_versions is not None and change.version not in self.known_versions:
                raise UnknownVersionError(change.version, self.known_versions)
            self._session.version = change.version
            return
        if isinstance(change, OptionPatch):
            # shallow merge into a fresh dict, never mutate the previous mapping
            self._session.options = {**self._session.options, **dict(change.values)}
            return
        raise TypeError(f"Unsupported session change: {change!r}")

    def set_option(self, key: str, value: Any) -> None:
        self.update(OptionPatch({key: value}))

    def patch_options(self, values: Mapping[str, Any]) -> None:
        self.update(OptionPatch(values))

    def switch_version(self, version: str) -> None:
        self.update(VersionSwitch(version))

    def update_from_payload(self, payload: Mapping[str, Any]) -> SessionChange:
        """Options-panel channel: a payload with a version tag switches version, anything else merges."""
        if payload.get("version"):
            change: SessionChange = VersionSwitch(str(payload["version"]))
        else:
            change = OptionPatch(payload)
        self.update(change)
        return change

    # ---- submission lifecycle ----
    def begin_loading(self) -> None:
        self._session.is_loading = True

    def end_loading(self, error: Optional[str] = None) -> None:
        self._session.is_loading = False
        if error is not None:
            self._session.last_error = error

    def apply_service_response(self, response, *, replace_source: bool = False) -> None:
        s = self._session
        s.formatted_text = response.formatted_code
        s.options = dict(response.options)
        s.state_token = response.state
        s.issue_link = response.issue_link
        if replace_source:
            s.source_text = response.source_code
        s.is_loading = False
        s.last_error = None
