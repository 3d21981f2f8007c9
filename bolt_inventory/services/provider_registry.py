"""Select an inventory provider by name."""
import inspect
import logging
from typing import Any, Dict, List, Type

from ..core.config import settings as default_settings
from ..core.errors import ConfigurationError
from .orbstack_provider import OrbstackInventory
from .provider_base import InventoryProvider, OptionsInput, parse_inventory_options
from .vmpooler_provider import VmpoolerInventory

logger = logging.getLogger(__name__)


PROVIDERS: Dict[str, Type[InventoryProvider]] = {
    OrbstackInventory.name: OrbstackInventory,
    VmpoolerInventory.name: VmpoolerInventory,
}


def available_providers() -> List[str]:
    """Return registered provider names in sorted order."""
    return sorted(PROVIDERS)


def create_inventory(options: OptionsInput = None, **kwargs: Any) -> InventoryProvider:
    """Build the provider named by ``options['provider']``.

    The provider defaults to the configured one (``orbstack`` unless
    overridden). Extra keyword arguments such as ``config``, ``runner`` or
    ``fetcher`` are passed to the provider constructor. No listing command is
    run here.
    """

    parsed = parse_inventory_options(options)
    config = kwargs.get("config") or default_settings
    requested = parsed.provider if parsed.provider is not None else config.provider
    name = str(requested).strip().lower()

    provider_cls = PROVIDERS.get(name)
    if provider_cls is None:
        raise ConfigurationError(f"unknown provider: {requested}")

    try:
        inspect.signature(provider_cls).bind(parsed, **kwargs)
    except TypeError as exc:
        raise ConfigurationError(f"invalid arguments for {name} provider: {exc}") from exc

    logger.debug("Selected %s inventory provider", name)
    return provider_cls(parsed, **kwargs)
