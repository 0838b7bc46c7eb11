from .base import FormatResponse, FormatterService
from .black_api import BlackApiService
from .factory import build_registry
