# playground/parser/router.py
from __future__ import annotations
import re
from typing import Any, Dict

from .schema import Action, ParsedCommand

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?(\d+\.\d*|\.\d+)([eE][-+]?\d+)?$")


def coerce_value(raw: str) -> Any:
    # options panel sends bools / numbers / strings, mirror that from text
    v = raw.strip()
    if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
        return v[1:-1]
    low = v.lower()
    if low in ("true", "yes", "on"):
        return True
    if low in ("false", "no", "off"):
        return False
    if _INT_RE.match(v):
        return int(v)
    if _FLOAT_RE.match(v):
        return float(v)
    return v


def parse_kv_pairs(text: str) -> Dict[str, Any]:
    # key=value / key = value / key="value with spaces"
    pairs = re.findall(r"([A-Za-z_][\w-]*)\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s]+)", text)
    return {k: coerce_value(v) for k, v in pairs}


def parse_user_text(user_text: str) -> ParsedCommand:
    t = (user_text or "").strip()
    if not t:
        return ParsedCommand(action=Action.HELP, args={}, confidence=0.0)

    low = t.lower()

    if low in ("help", "h", "?"):
        return ParsedCommand(Action.HELP, {})
    if low in ("show", "ls", "view", "print"):
        return ParsedCommand(Action.SHOW, {})
    if low in ("quit", "q", "exit"):
        return ParsedCommand(Action.QUIT, {})
    if low in ("submit", "s", "format", "run"):
        return ParsedCommand(Action.SUBMIT, {})
    if low in ("sidebar", "options", "cog"):
        return ParsedCommand(Action.SIDEBAR, {})
    if low in ("url", "link", "share"):
        return ParsedCommand(Action.URL, {})
    if low in ("edit", "manual"):
        return ParsedCommand(Action.EDIT, {})

    tokens = t.split()
    head = tokens[0].lower()
    rest = t[len(tokens[0]):].strip()

    if head in ("source", "src"):
        # literal "\n" lets a one-line command carry multi-line source
        return ParsedCommand(Action.SOURCE, {"text": rest.replace("\\n", "\n")})

    if head in ("version", "v"):
        if not rest:
            return ParsedCommand(Action.HELP, {}, confidence=0.0)
        return ParsedCommand(Action.VERSION, {"version": rest.split()[0].lower()})

    if head in ("set", "option", "opt"):
        values = parse_kv_pairs(rest)
        if not values:
            return ParsedCommand(Action.HELP, {}, confidence=0.0)
        # version travels on its own channel, never mixed into options
        if "version" in values:
            return ParsedCommand(Action.VERSION, {"version": str(values["version"]).lower()})
        return ParsedCommand(Action.OPTION, {"values": values})

    if head in ("open", "goto"):
        if not rest:
            return ParsedCommand(Action.HELP, {}, confidence=0.0)
        return ParsedCommand(Action.OPEN, {"href": rest})

    return ParsedCommand(Action.HELP, {"raw": t}, confidence=0.0)
