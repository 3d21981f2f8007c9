"""Group membership helpers shared by all providers."""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.models import Group, GroupPattern, Target

logger = logging.getLogger(__name__)


def build_role_group(
    name: str,
    target_names: Iterable[str],
    config: Optional[Dict[str, Any]] = None,
    role: Optional[str] = None,
) -> Group:
    """Build a group whose ``role`` fact defaults to the group name."""

    group = Group(name=name, facts={"role": role or name}, config=config)
    for target_name in target_names:
        group.add_target(target_name)
    return group


def build_pattern_groups(
    targets: Sequence[Target], patterns: Sequence[GroupPattern]
) -> List[Group]:
    """Evaluate user patterns against target names.

    One group is returned per pattern, in declaration order. Members keep the
    order of ``targets``; a target may belong to any number of groups.
    """

    groups: List[Group] = []
    for pattern in patterns:
        members = [target.name for target in targets if pattern.matches(target.name)]
        logger.debug(
            "Pattern group %s (%s) matched %d of %d targets",
            pattern.group,
            pattern.pattern,
            len(members),
            len(targets),
        )
        groups.append(build_role_group(pattern.group, members))
    return groups
