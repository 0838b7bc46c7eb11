from .router import parse_user_text
from .schema import Action, ParsedCommand
