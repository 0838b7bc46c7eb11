from __future__ import annotations
import json
import logging
import os
import shlex
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .analytics import Analytics
from .errors import UnknownVersionError
from .formatter.base import FormatterService
from .loader import resolve_initial_session
from .parser.router import parse_user_text
from .parser.schema import Action
from .state import DEFAULT_VERSION, Session, SessionStore
from .submission import SubmissionController, SubmitResult
from .url_sync import AddressBar, UrlSynchronizer

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "  show                      render the current session\n"
    "  source <text>             replace the source (use \\n for newlines)\n"
    "  edit                      edit the source in your editor\n"
    "  set key=value ...         change formatting options\n"
    "  version <tag>             switch service deployment\n"
    "  submit                    format the source remotely\n"
    "  sidebar                   toggle the options panel\n"
    "  url                       print the shareable link\n"
    "  open <url>                load a shared link\n"
    "  quit\n"
)


DEFAULT_EDITOR = "code --wait"


def resolve_editor(editor: str | None = None) -> List[str]:
    """explicit setting, then $VISUAL / $EDITOR, then VS Code"""
    cmd = editor or os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
    return shlex.split(cmd)


def edit_in_editor(current_text: str, *, editor: str | None = None, suffix: str = ".py") -> str | None:
    """
    Hand the source to an external editor and wait for it to close.
    Returns the new text, or None when nothing changed.
    """
    argv = resolve_editor(editor)
    with tempfile.TemporaryDirectory() as tmpdir:
        p = Path(tmpdir) / f"playground{suffix}"
        p.write_text(current_text, encoding="utf-8")
        try:
            subprocess.run([*argv, str(p)], check=True)
        except FileNotFoundError as e:
            raise RuntimeError(
                f"Editor {argv[0]!r} not found. Set 'editor' in the config or $EDITOR."
            ) from e
        new_text = p.read_text(encoding="utf-8")
    return None if new_text == current_text else new_text


def version_label(tag: str, identifier: str) -> str:
    if tag == "stable":
        return f"v{identifier}"
    if tag == "master":
        return f"@{identifier}"
    return f"{tag}:{identifier}"


def render_session(s: Session) -> str:
    lines = [f"=== Playground {version_label(s.version, s.version_identifiers.get(s.version))} ==="]
    if s.is_sidebar_visible:
        versions = ", ".join(
            f"{tag}={version_label(tag, ident)}" for tag, ident in s.version_identifiers.as_dict().items() if ident
        )
        lines.append(f"Version: {s.version}  ({versions})")
        lines.append("Options:")
        for k in sorted(s.options):
            lines.append(f"  {k} = {json.dumps(s.options[k])}")
    lines.append("----- SOURCE -----")
    lines.append(s.source_text)
    lines.append("----- FORMATTED -----")
    lines.append("...formatting..." if s.is_loading else s.formatted_text)
    lines.append("---------------------")
    if s.last_error:
        lines.append(f"! Last submit failed: {s.last_error}")
    lines.append(f"Report issue: {s.issue_link}")
    return "\n".join(lines)


@dataclass
class ViewResult:
    content: str
    quit: bool = False


@dataclass
class Playground:
    registry: Dict[str, FormatterService]
    analytics: Analytics = field(default_factory=Analytics)
    default_version: str = DEFAULT_VERSION
    address_bar: AddressBar = field(default_factory=AddressBar)
    editor: Optional[str] = None

    def __post_init__(self):
        self.url_sync = UrlSynchronizer(self.address_bar)
        self.store: Optional[SessionStore] = None
        self.controller: Optional[SubmissionController] = None

    def mount(self, href: Optional[str] = None) -> Session:
        """Load the page at href (default: current address). InitialLoadFailure propagates."""
        href = self.address_bar.href if href is None else href
        session = resolve_initial_session(self.registry, href, default_version=self.default_version)
        self.store = SessionStore(session, known_versions=self.registry)
        self.controller = SubmissionController(self.store, self.registry, self.url_sync)
        # normalize the address even when the link had no parameters
        self.url_sync.sync(session.version, session.state_token)
        self.analytics.initialize()
        self.analytics.pageview(self.address_bar.href.split("?", 1)[0])
        return session

    def open(self, href: str) -> Session:
        # full navigation: the old session is dropped, even when the new page fails to load
        self.address_bar.push(href)
        self.store = None
        self.controller = None
        return self.mount(href)

    def _require_mounted(self) -> SessionStore:
        if self.store is None or self.controller is None:
            raise RuntimeError("Playground is not mounted")
        return self.store

    def submit(self) -> SubmitResult:
        self._require_mounted()
        return self.controller.submit()

    def render(self) -> str:
        return render_session(self._require_mounted().session)

    def handle(self, user_text: str) -> ViewResult:
        self._require_mounted()
        cmd = parse_user_text(user_text)
        logger.debug("cmd.action=%s args=%s", cmd.action, cmd.args)

        if cmd.action == Action.QUIT:
            return ViewResult(content="Bye!", quit=True)

        if cmd.action == Action.SHOW:
            return ViewResult(content=self.render())

        if cmd.action == Action.SOURCE:
            self.store.set_source(cmd.args["text"])
            return ViewResult(content="Source updated (not submitted).")

        if cmd.action == Action.EDIT:
            try:
                new_text = edit_in_editor(self.store.session.source_text, editor=self.editor)
            except (RuntimeError, subprocess.CalledProcessError) as e:
                return ViewResult(content=str(e))
            if new_text is None:
                return ViewResult(content="Source unchanged.")
            self.store.set_source(new_text)
            return ViewResult(content="Source updated (not submitted).")

        if cmd.action == Action.OPTION:
            self.store.patch_options(cmd.args["values"])
            changed = ", ".join(f"{k}={v!r}" for k, v in cmd.args["values"].items())
            return ViewResult(content=f"Options updated: {changed}")

        if cmd.action == Action.VERSION:
            try:
                self.store.switch_version(cmd.args["version"])
            except UnknownVersionError as e:
                return ViewResult(content=str(e))
            return ViewResult(content=f"Version set to {cmd.args['version']} (submit to apply).")

        if cmd.action == Action.SIDEBAR:
            visible = self.store.toggle_sidebar()
            return ViewResult(content=self.render() if visible else "Sidebar hidden.")

        if cmd.action == Action.SUBMIT:
            result = self.submit()
            if not result.ok:
                return ViewResult(content=f"Submit failed: {result.error}\n\n{self.render()}")
            return ViewResult(content=self.render())

        if cmd.action == Action.URL:
            return ViewResult(content=self.address_bar.href)

        if cmd.action == Action.OPEN:
            self.open(cmd.args["href"])
            return ViewResult(content=self.render())

        return ViewResult(content=HELP_TEXT)
