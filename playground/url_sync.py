# playground/url_sync.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit

logger = logging.getLogger(__name__)


def build_href(version: str, state: Optional[str]) -> str:
    params = {"version": version}
    if state:
        params["state"] = state
    return "/?" + urlencode(params)


def parse_query(href: str) -> Tuple[Optional[str], Optional[str]]:
    """returns (version, state); empty values count as absent"""
    qs = parse_qs(urlsplit(href or "").query)
    version = (qs.get("version") or [None])[0] or None
    state = (qs.get("state") or [None])[0] or None
    return version, state


@dataclass
class AddressBar:
    href: str = "/"
    history: List[str] = field(default_factory=list)  # navigations only, replace() never appends

    def __post_init__(self):
        if not self.history:
            self.history.append(self.href)

    def replace(self, href: str) -> None:
        self.href = href

    def push(self, href: str) -> None:
        self.href = href
        self.history.append(href)


class UrlSynchronizer:
    def __init__(self, address_bar: AddressBar):
        self.address_bar = address_bar

    def sync(self, version: str, state_token: Optional[str]) -> str:
        href = build_href(version, state_token)
        if href != self.address_bar.href:
            logger.debug("url sync %s -> %s", self.address_bar.href, href)
        self.address_bar.replace(href)
        return href
