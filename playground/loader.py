# playground/loader.py  initial load
from __future__ import annotations
import logging
from typing import Mapping

from .errors import FormatServiceError, InitialLoadFailure
from .formatter.base import FormatterService
from .state import DEFAULT_VERSION, Session, VersionIdentifiers
from .url_sync import parse_query

logger = logging.getLogger(__name__)


def resolve_version(requested: str | None, registry: Mapping[str, FormatterService], default: str = DEFAULT_VERSION) -> str:
    if requested and requested in registry:
        return requested
    if requested:
        logger.info("ignoring unknown version %r, using %r", requested, default)
    return default


def resolve_initial_session(
    registry: Mapping[str, FormatterService],
    href: str,
    *,
    default_version: str = DEFAULT_VERSION,
) -> Session:
    """
    Build the first Session for a page view from its URL.
    Both the content fetch and every other deployment's version must succeed,
    otherwise InitialLoadFailure is raised and nothing is rendered.
    """
    if default_version not in registry:
        raise InitialLoadFailure(f"Default version {default_version!r} has no deployment")

    requested, state = parse_query(href)
    current = resolve_version(requested, registry, default_version)
    service = registry[current]

    identifiers = VersionIdentifiers()
    try:
        resp = service.fetch(state)
        identifiers.set(current, resp.version)
        for tag, other in registry.items():
            if tag == current:
                continue
            identifiers.set(tag, other.get_version())
    except FormatServiceError as e:
        raise InitialLoadFailure(f"Could not load playground ({current}): {e}") from e

    logger.info("loaded %s version=%s state=%s", current, resp.version, resp.state)
    return Session(
        source_text=resp.source_code,
        formatted_text=resp.formatted_code,
        options=dict(resp.options),
        version=current,
        version_identifiers=identifiers,
        state_token=resp.state,
        issue_link=resp.issue_link,
    )
