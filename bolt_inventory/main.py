"""Command line entry point printing a Bolt inventory."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .core.config import settings
from .core.config_validation import run_config_checks
from .core.errors import ConfigurationError, InventoryError
from .services.provider_registry import available_providers, create_inventory

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def load_options_file(path: Path) -> Dict[str, Any]:
    """Read inventory options from a YAML file."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigurationError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"cannot parse {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return raw


def parse_group_argument(value: str) -> Dict[str, str]:
    """Parse ``NAME=REGEX`` into a group pattern mapping."""

    group, sep, pattern = value.partition("=")
    if not sep or not group.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=REGEX, got {value!r}")
    return {"group": group.strip(), "pattern": pattern}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bolt-dynamic-inventory",
        description="Generate a Bolt inventory from OrbStack or vmpooler machines.",
    )
    parser.add_argument(
        "--provider",
        choices=available_providers(),
        help=f"machine provider (default: {settings.provider})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with provider and group_patterns options",
    )
    parser.add_argument(
        "--group",
        dest="groups",
        action="append",
        type=parse_group_argument,
        default=[],
        metavar="NAME=REGEX",
        help="add a group of targets whose name matches REGEX (repeatable)",
    )
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="output format (default: yaml)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="validate settings and exit",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def collect_options(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if args.config:
        options.update(load_options_file(args.config))
    if args.provider:
        options["provider"] = args.provider
    if args.groups:
        patterns: List[Any] = list(options.get("group_patterns") or [])
        patterns.extend(args.groups)
        options["group_patterns"] = patterns
    return options


def render_document(document: Dict[str, Any], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(document, indent=2) + "\n"
    return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)


def check_config() -> int:
    result = run_config_checks(settings, known_providers=available_providers())
    for issue in result.errors:
        logger.error("Configuration error: %s", issue.message)
        if issue.hint:
            logger.error("Hint: %s", issue.hint)
    for issue in result.warnings:
        logger.warning("Configuration warning: %s", issue.message)
        if issue.hint:
            logger.warning("Hint: %s", issue.hint)
    if not result.has_errors:
        logger.info("Configuration OK")
    return 1 if result.has_errors else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug or settings.debug)

    if args.check_config:
        return check_config()

    try:
        inventory = create_inventory(collect_options(args))
        document = inventory.generate()
    except InventoryError as exc:
        logger.error("Inventory generation failed: %s", exc)
        return 1

    sys.stdout.write(render_document(document, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
