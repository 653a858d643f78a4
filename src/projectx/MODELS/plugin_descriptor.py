"""
Models for installed package records and resolved capability plugins.
"""
from enum import Enum
from typing import Any, Optional
from dataclasses import dataclass, field
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PluginSource(str, Enum):
    """
    Where a resolved plugin class came from.
    """
    CORE = "core"
    PACKAGE = "package"


class PackageRecord(BaseModel):
    """
    A single installed package entry from a package manifest.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    type: str
    namespace: str = Field(alias='autoload-namespace')

    @field_validator('namespace')
    @classmethod
    def _to_module_path(cls, value: str) -> str:
        # Accepts Acme.Plugin as well as Acme\Plugin\ style namespaces
        value = value.strip('\\').replace('\\', '.')
        if not value:
            raise ValueError("namespace must not be empty")
        return value


@dataclass(frozen=True)
class PluginDescriptor:
    """
    A capability implementation registered under a short identifier.
    """
    identifier: str
    label: str
    classname: str
    source: PluginSource
    factory: Any = field(default=None, repr=False, compare=False)
    package: Optional[str] = None

    def create(self, *args, **kwargs):
        """
        Instantiates the plugin class.
        """
        return self.factory(*args, **kwargs)
