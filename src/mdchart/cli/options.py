"""Options shared by every command: settings file and log level."""

from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from mdchart.core.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default=None,
        help="YAML settings file. Default: $MDCHART_CONFIG if set, else built-in defaults.",
    )
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...). Default: $MDCHART_LOG_LEVEL or WARNING.",
    )


def setup(args: argparse.Namespace) -> Settings | None:
    """Load .env, configure logging and return the settings to render with."""
    load_dotenv()

    level = (args.log_level or os.environ.get("MDCHART_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = args.config or os.environ.get("MDCHART_CONFIG")
    if not config_path:
        return None
    logger.info("Using settings from %s", config_path)
    return load_settings(config_path)
