"""Configuration management using Pydantic settings."""

import shlex
from typing import List

from pydantic_settings import BaseSettings


DEFAULT_PROVIDER = "orbstack"
WINDOWS_CREDENTIALS_PATH = "~/.secrets/bolt/windows/credentials.yaml"


class Settings(BaseSettings):
    """Settings loaded from ``BOLT_INVENTORY_*`` environment variables."""

    # Provider selection
    provider: str = DEFAULT_PROVIDER
    debug: bool = False

    # Listing commands
    fetch_timeout: float = 60.0  # seconds to wait for a provider listing
    orbstack_command: str = "orbctl list --format json"
    vmpooler_command: str = "floaty list --active --json"

    # OrbStack connection settings
    orbstack_uri_suffix: str = "orb"
    orbstack_ssh_port: int = 32222

    # Shared SSH settings
    ssh_user: str = "root"
    ssh_login_shell: str = "bash"

    # Windows targets read WinRM credentials through Bolt's yaml plugin
    windows_credentials_path: str = WINDOWS_CREDENTIALS_PATH

    class Config:
        env_prefix = "BOLT_INVENTORY_"
        env_file = ".env"
        case_sensitive = False

    def get_orbstack_argv(self) -> List[str]:
        """Split the OrbStack listing command into argv."""
        return shlex.split(self.orbstack_command)

    def get_vmpooler_argv(self) -> List[str]:
        """Split the vmpooler listing command into argv."""
        return shlex.split(self.vmpooler_command)


settings = Settings()
