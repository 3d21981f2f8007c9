"""Inventory provider for OrbStack machines."""
import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.config import Settings
from ..core.errors import FetchError
from ..core.models import Target
from .command_runner import CommandRunner, decode_json_output, ensure_success, run_command
from .provider_base import InventoryProvider, OptionsInput, default_ssh_config

logger = logging.getLogger(__name__)


RUNNING_STATUS = "running"

MachineFetcher = Callable[[], List[Dict[str, Any]]]


class OrbstackInventory(InventoryProvider):
    """Running OrbStack machines reached over OrbStack's SSH proxy.

    ``fetcher`` replaces the ``orbctl`` call and must return the machine
    records; anything it raises propagates to the caller untouched.
    """

    name = "orbstack"

    def __init__(
        self,
        options: OptionsInput = None,
        config: Optional[Settings] = None,
        fetcher: Optional[MachineFetcher] = None,
        runner: CommandRunner = run_command,
    ):
        super().__init__(options, config)
        self._fetcher = fetcher
        self._runner = runner

    def fetch_records(self) -> List[Dict[str, Any]]:
        if self._fetcher is not None:
            return list(self._fetcher())
        return self.fetch_orbstack_machines()

    def fetch_orbstack_machines(self) -> List[Dict[str, Any]]:
        """List machines with ``orbctl``."""

        argv = self.settings.get_orbstack_argv()
        result = self._runner(argv, self.settings.fetch_timeout)
        ensure_success(result, argv)

        payload = decode_json_output(result.stdout, argv)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise FetchError(
                f"Unexpected orbctl payload type: {type(payload).__name__}",
                command=argv,
            )
        return [entry for entry in payload if isinstance(entry, dict)]

    def build_target(self, record: Dict[str, Any]) -> Optional[Target]:
        name = record.get("name")
        if not isinstance(name, str) or not name:
            logger.warning("Skipping OrbStack machine without a name: %r", record)
            return None

        status = record.get("status", record.get("state"))
        if status != RUNNING_STATUS:
            logger.debug("Skipping OrbStack machine %s with status %s", name, status)
            return None

        return Target(name=name, uri=f"{name}@{self.settings.orbstack_uri_suffix}")

    def global_config(self) -> Dict[str, Any]:
        return {
            "ssh": default_ssh_config(self.settings, port=self.settings.orbstack_ssh_port),
        }
