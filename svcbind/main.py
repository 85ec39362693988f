"""Command line interface for the service binding tool."""

import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import Optional, Sequence

from svcbind.commands import COMMANDS, build_context
from svcbind.config import config


LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    """Configure the root logger; unknown level names fall back to WARNING."""
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svcbind",
        description="Bind Kubernetes services and service-catalog instances to a Helm chart",
    )
    parser.add_argument(
        "command",
        choices=list(COMMANDS),
        help="Binding operation to run",
    )
    parser.add_argument("--chart", help="Chart directory (default: search below the current directory)")
    parser.add_argument("-n", "--namespace", help="Namespace for kubectl and svcat calls")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default: %(default)s)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    run_config = config
    if args.namespace:
        run_config = replace(config, namespace=args.namespace)

    ctx = build_context(run_config, chart=args.chart)
    outcome = COMMANDS[args.command](ctx)
    logger.info("%s finished: %s", args.command, outcome.status.value)
    return 1 if outcome.failed else 0


if __name__ == "__main__":
    sys.exit(main())
