"""Configuration validation utilities."""
from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .config import Settings, settings as default_settings


@dataclass
class ConfigIssue:
    """Represents a single configuration issue."""

    message: str
    hint: Optional[str] = None


@dataclass
class ConfigValidationResult:
    """Outcome of running configuration checks."""

    checked_at: datetime
    errors: List[ConfigIssue] = field(default_factory=list)
    warnings: List[ConfigIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def _warn(result: ConfigValidationResult, message: str, hint: Optional[str] = None) -> None:
    result.warnings.append(ConfigIssue(message=message, hint=hint))


def _error(result: ConfigValidationResult, message: str, hint: Optional[str] = None) -> None:
    result.errors.append(ConfigIssue(message=message, hint=hint))


def _check_executable(
    result: ConfigValidationResult, setting_name: str, argv: Sequence[str]
) -> None:
    if not argv:
        _error(
            result,
            f"{setting_name} is empty.",
            f"Set {setting_name} to the command that lists machines as JSON.",
        )
        return

    if shutil.which(argv[0]) is None:
        _warn(
            result,
            f"{argv[0]} was not found on PATH ({setting_name}).",
            "Install the tool or point the setting at its full path.",
        )


def run_config_checks(
    config: Optional[Settings] = None,
    known_providers: Sequence[str] = (),
) -> ConfigValidationResult:
    """Validate settings before a provider is built."""

    config = config or default_settings
    result = ConfigValidationResult(checked_at=datetime.now(timezone.utc))

    provider = config.provider.strip().lower()
    if known_providers and provider not in known_providers:
        _error(
            result,
            f"BOLT_INVENTORY_PROVIDER is set to an unknown provider: {config.provider}",
            "Use one of: " + ", ".join(known_providers),
        )

    if config.fetch_timeout <= 0:
        _error(
            result,
            "BOLT_INVENTORY_FETCH_TIMEOUT must be greater than zero.",
            "Set BOLT_INVENTORY_FETCH_TIMEOUT to the number of seconds to wait for a listing.",
        )

    if provider == "orbstack":
        _check_executable(result, "BOLT_INVENTORY_ORBSTACK_COMMAND", config.get_orbstack_argv())
    elif provider == "vmpooler":
        _check_executable(result, "BOLT_INVENTORY_VMPOOLER_COMMAND", config.get_vmpooler_argv())
        credentials = os.path.expanduser(config.windows_credentials_path)
        if not os.path.exists(credentials):
            _warn(
                result,
                f"Windows credentials file {config.windows_credentials_path} does not exist.",
                "Windows targets will not be reachable until the credentials file is created.",
            )

    return result
