from __future__ import annotations
import argparse
import logging
import sys

from playground.analytics import Analytics
from playground.config import DEFAULT_CONFIG_PATH, load_cfg
from playground.errors import InitialLoadFailure
from playground.formatter.factory import build_registry
from playground.orchestrator import Playground
from playground.state import DEFAULT_VERSION


def build_playground(cfg: dict) -> Playground:
    registry = build_registry(cfg)  # make config real services
    analytics_cfg = cfg.get("analytics", {}) or {}
    analytics = Analytics(
        tracking_id=analytics_cfg.get("tracking_id"),
        anonymize_ip=bool(analytics_cfg.get("anonymize_ip", True)),
    )
    return Playground(
        registry=registry,
        analytics=analytics,
        default_version=cfg.get("default_version", DEFAULT_VERSION),
        editor=cfg.get("editor"),
    )


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Formatter playground")
    ap.add_argument("url", nargs="?", default="/", help="shared link, ex: /?version=master&state=abc123")
    ap.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    pg = build_playground(load_cfg(args.config))
    try:
        pg.mount(args.url)
    except InitialLoadFailure as e:
        print(f"Failed to load playground: {e}", file=sys.stderr)
        return 1

    print("Formatter Playground (type 'help' for commands, 'q' to quit)")
    print(pg.render())
    while True:  # little interface
        try:
            user_text = input("\nYou> ").strip()
        except EOFError:
            print("Bye!")
            return 0
        try:
            result = pg.handle(user_text)
        except InitialLoadFailure as e:
            print(f"Failed to load playground: {e}", file=sys.stderr)
            return 1
        print(result.content)
        if result.quit:
            return 0


if __name__ == "__main__":
    sys.exit(main())
