"""Data models for inventory documents."""
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OSFamily(str, Enum):
    """Operating system family."""
    WINDOWS = "windows"
    LINUX = "linux"


class Target(BaseModel):
    """A single addressable inventory target.

    ``metadata`` carries provider facts used during grouping (for example the
    OS family of a pooled VM). It is not part of the serialized document.
    """
    name: str = Field(..., min_length=1, description="Short identifier of the target")
    uri: str = Field(..., min_length=1, description="Connection URI used by Bolt")
    metadata: Dict[str, str] = Field(default_factory=dict, exclude=True)


class Group(BaseModel):
    """Named group of targets with role facts and optional connection config."""
    name: str
    targets: List[str] = Field(default_factory=list)
    facts: Dict[str, str] = Field(default_factory=dict)
    config: Optional[Dict[str, Any]] = None

    def add_target(self, name: str) -> None:
        if name not in self.targets:
            self.targets.append(name)


class GroupPattern(BaseModel):
    """User supplied group whose members match ``pattern`` by name."""
    model_config = ConfigDict(frozen=True)

    group: str = Field(..., min_length=1)
    pattern: str

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value

    def matches(self, name: str) -> bool:
        return re.search(self.pattern, name) is not None


class SSHConfig(BaseModel):
    """SSH transport block as understood by Bolt."""
    model_config = ConfigDict(populate_by_name=True)

    native_ssh: bool = Field(True, alias="native-ssh")
    load_config: bool = Field(True, alias="load-config")
    login_shell: str = Field("bash", alias="login-shell")
    tty: bool = False
    host_key_check: bool = Field(False, alias="host-key-check")
    run_as: str = Field("root", alias="run-as")
    user: str = "root"
    port: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class InventoryOptions(BaseModel):
    """Construction options for an inventory provider.

    Unknown keys are kept so providers can read their own options.
    """
    model_config = ConfigDict(extra="allow")

    provider: Optional[str] = None
    group_patterns: List[GroupPattern] = Field(default_factory=list)


class InventoryDocument(BaseModel):
    """Complete inventory handed to Bolt."""
    targets: List[Target] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape, always carrying all three keys."""
        return {
            "targets": [target.model_dump() for target in self.targets],
            "groups": [group.model_dump(exclude_none=True) for group in self.groups],
            "config": self.config,
        }
