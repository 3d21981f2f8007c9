"""Base class shared by inventory providers.

A provider lists machines from one backend, turns each raw record into a
:class:`Target`, and declares the groups and global config that backend
needs. Grouping by user patterns and document assembly are common to every
provider and live here.

Providers never cache listings: each call to :meth:`InventoryProvider.generate`
performs exactly one fetch.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..core.config import Settings, settings as default_settings
from ..core.errors import ConfigurationError
from ..core.models import Group, GroupPattern, InventoryDocument, InventoryOptions, SSHConfig, Target
from .group_service import build_pattern_groups
from .inventory_service import compose_inventory, unique_targets

logger = logging.getLogger(__name__)

OptionsInput = Union[InventoryOptions, Mapping[str, Any], None]


def parse_inventory_options(options: OptionsInput) -> InventoryOptions:
    """Validate construction options, raising :class:`ConfigurationError`."""

    if isinstance(options, InventoryOptions):
        return options
    if options is not None and not isinstance(options, Mapping):
        raise ConfigurationError(
            f"inventory options must be a mapping, got {type(options).__name__}"
        )

    try:
        return InventoryOptions.model_validate(dict(options or {}))
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"invalid inventory options: {details}") from exc


def default_ssh_config(config: Settings, port: Optional[int] = None) -> Dict[str, Any]:
    """Return the SSH transport block shared by SSH reachable targets."""

    return SSHConfig(
        login_shell=config.ssh_login_shell,
        run_as=config.ssh_user,
        user=config.ssh_user,
        port=port,
    ).to_dict()


class InventoryProvider(ABC):
    """Produce a Bolt inventory from one machine provider."""

    name: ClassVar[str]

    def __init__(self, options: OptionsInput = None, config: Optional[Settings] = None):
        self.options = parse_inventory_options(options)
        self.settings = config or default_settings

    @property
    def group_patterns(self) -> List[GroupPattern]:
        return list(self.options.group_patterns)

    @abstractmethod
    def fetch_records(self) -> List[Dict[str, Any]]:
        """Return the raw machine records for this provider."""

    @abstractmethod
    def build_target(self, record: Dict[str, Any]) -> Optional[Target]:
        """Normalise one raw record, or return None to skip it."""

    def base_groups(self, targets: List[Target]) -> List[Group]:
        """Groups the provider always defines. None by default."""
        return []

    def global_config(self) -> Dict[str, Any]:
        """Top level config block of the document."""
        return {}

    def list_targets(self) -> List[Target]:
        records = self.fetch_records()
        targets = []
        for record in records:
            target = self.build_target(record)
            if target is not None:
                targets.append(target)

        logger.debug(
            "%s provider built %d targets from %d records",
            self.name,
            len(targets),
            len(records),
        )
        return unique_targets(targets)

    def build_document(self) -> InventoryDocument:
        targets = self.list_targets()
        pattern_groups: List[Group] = []
        if self.options.group_patterns:
            pattern_groups = build_pattern_groups(targets, self.options.group_patterns)

        return compose_inventory(
            targets,
            base_groups=self.base_groups(targets),
            pattern_groups=pattern_groups,
            config=self.global_config(),
        )

    def generate(self) -> Dict[str, Any]:
        """Fetch machines and return the serialized inventory document."""
        return self.build_document().to_dict()
