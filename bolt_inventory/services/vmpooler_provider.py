"""Inventory provider for VMs checked out from vmpooler with ``floaty``."""
import logging
from typing import Any, Dict, List, Optional, Sequence

from ..core.config import Settings
from ..core.errors import FetchError
from ..core.models import Group, OSFamily, Target
from .command_runner import CommandRunner, decode_json_output, ensure_success, run_command
from .group_service import build_role_group
from .provider_base import InventoryProvider, OptionsInput, default_ssh_config

logger = logging.getLogger(__name__)


WINDOWS_MARKER = "win"
LINUX_MARKERS = (
    "linux",
    "ubuntu",
    "debian",
    "centos",
    "rhel",
    "redhat",
    "fedora",
    "sles",
    "suse",
    "oracle",
    "rocky",
    "alma",
    "amazon",
)


def classify_os_family(vm_type: Any) -> OSFamily:
    """Classify a vmpooler template type as Windows or Linux.

    Anything that does not mention Windows is treated as Linux.
    """
    lowered = str(vm_type or "").strip().lower()
    if WINDOWS_MARKER in lowered:
        return OSFamily.WINDOWS

    if not any(marker in lowered for marker in LINUX_MARKERS):
        logger.debug("VM type %r has no known OS marker; classifying as linux", vm_type)
    return OSFamily.LINUX


def short_hostname(hostname: str) -> str:
    """Return the hostname without its domain suffix."""
    return hostname.split(".", 1)[0]


def flatten_allocations(payload: Any, argv: Sequence[str] = ()) -> List[Dict[str, Any]]:
    """Flatten ``floaty list --json`` output into VM records.

    ``payload`` is either a mapping of job id to job details, or an already
    flattened list of ``{hostname, type}`` records. Job state is ignored.
    """
    if payload is None:
        return []

    if isinstance(payload, list):
        resources: Sequence[Any] = payload
    elif isinstance(payload, dict):
        collected: List[Any] = []
        for job_id, job in payload.items():
            if not isinstance(job, dict):
                raise FetchError(
                    f"Unexpected job entry for {job_id}: {type(job).__name__}",
                    command=argv,
                )
            allocated = job.get("allocated_resources") or []
            if not isinstance(allocated, list):
                raise FetchError(
                    f"allocated_resources for {job_id} must be a list",
                    command=argv,
                )
            logger.debug(
                "Job %s (%s) holds %d resources", job_id, job.get("state"), len(allocated)
            )
            collected.extend(allocated)
        resources = collected
    else:
        raise FetchError(
            f"Unexpected floaty payload type: {type(payload).__name__}",
            command=argv,
        )

    records: List[Dict[str, Any]] = []
    for resource in resources:
        if not isinstance(resource, dict):
            logger.warning("Skipping malformed vmpooler resource: %r", resource)
            continue
        records.append(resource)
    return records


class VmpoolerInventory(InventoryProvider):
    """VMs leased through floaty, split into windows and linux groups."""

    name = "vmpooler"

    def __init__(
        self,
        options: OptionsInput = None,
        config: Optional[Settings] = None,
        runner: CommandRunner = run_command,
    ):
        super().__init__(options, config)
        self._runner = runner

    def fetch_records(self) -> List[Dict[str, Any]]:
        argv = self.settings.get_vmpooler_argv()
        result = self._runner(argv, self.settings.fetch_timeout)
        ensure_success(result, argv)

        payload = decode_json_output(result.stdout, argv)
        if payload is None:
            logger.info("No active vmpooler VMs")
        return flatten_allocations(payload, argv)

    def build_target(self, record: Dict[str, Any]) -> Optional[Target]:
        hostname = record.get("hostname")
        if not isinstance(hostname, str) or not hostname.strip():
            logger.warning("Skipping vmpooler resource without a hostname: %r", record)
            return None

        hostname = hostname.strip()
        name = short_hostname(hostname)
        if not name:
            logger.warning("Skipping vmpooler resource with an empty host label: %r", record)
            return None

        vm_type = str(record.get("type") or "")
        os_family = classify_os_family(vm_type)
        return Target(
            name=name,
            uri=hostname,
            metadata={"os_family": os_family.value, "type": vm_type},
        )

    def base_groups(self, targets: List[Target]) -> List[Group]:
        def members(family: OSFamily) -> List[str]:
            return [
                target.name
                for target in targets
                if target.metadata.get("os_family") == family.value
            ]

        windows = build_role_group(
            OSFamily.WINDOWS.value,
            members(OSFamily.WINDOWS),
            config={
                "_plugin": "yaml",
                "filepath": self.settings.windows_credentials_path,
            },
        )
        linux = build_role_group(
            OSFamily.LINUX.value,
            members(OSFamily.LINUX),
            config={"ssh": default_ssh_config(self.settings)},
        )
        return [windows, linux]
