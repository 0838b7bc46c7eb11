# playground/parser/schema.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

class Action(str, Enum):
    HELP = "HELP"
    SHOW = "SHOW"
    SOURCE = "SOURCE"
    EDIT = "EDIT"
    OPTION = "OPTION"
    VERSION = "VERSION"
    SUBMIT = "SUBMIT"
    SIDEBAR = "SIDEBAR"
    URL = "URL"
    OPEN = "OPEN"
    QUIT = "QUIT"

@dataclass
class ParsedCommand:
    action: Action
    args: Dict[str, Any]
    confidence: float = 1.0
