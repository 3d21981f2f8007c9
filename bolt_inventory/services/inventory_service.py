"""Assemble provider output into a complete inventory document."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.models import Group, InventoryDocument, Target

logger = logging.getLogger(__name__)


def unique_targets(targets: Iterable[Target]) -> List[Target]:
    """Drop targets whose name was already seen, keeping the first one."""

    seen: Dict[str, Target] = {}
    for target in targets:
        existing = seen.get(target.name)
        if existing is not None:
            logger.warning(
                "Duplicate target name %s (%s); keeping %s",
                target.name,
                target.uri,
                existing.uri,
            )
            continue
        seen[target.name] = target
    return list(seen.values())


def compose_inventory(
    targets: Sequence[Target],
    base_groups: Sequence[Group] = (),
    pattern_groups: Sequence[Group] = (),
    config: Optional[Dict[str, Any]] = None,
) -> InventoryDocument:
    """Merge targets, base groups, pattern groups and global config.

    Base groups come first, followed by pattern groups, each keeping its own
    order. The document always carries ``targets``, ``groups`` and ``config``.
    """

    groups = list(base_groups) + list(pattern_groups)
    document = InventoryDocument(
        targets=list(targets),
        groups=groups,
        config=dict(config or {}),
    )
    logger.info(
        "Composed inventory with %d targets and %d groups",
        len(document.targets),
        len(document.groups),
    )
    return document
