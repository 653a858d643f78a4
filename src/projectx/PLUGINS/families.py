"""
Capability families: the pluggable roles and their builtin implementations.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from ..ENGINE.engine_type import EngineType, DockerEngineType
from ..PLATFORM.platform_type import PlatformType
from ..PROJECT.drupal import DrupalProjectType
from ..PROJECT.project_type import ProjectType

# Package type that marks an installed package as a Project-X plugin.
PLUGIN_PACKAGE_TYPE = "project-x"


@dataclass(frozen=True)
class CapabilityFamily:
    """
    A pluggable role with a fixed required interface.

    Plugin packages contribute to a family by defining classes named
    ``*<class_suffix>`` in the ``<namespace>.<subpackage>`` module.
    """
    name: str
    interface: type
    subpackage: str
    class_suffix: str
    builtins: Tuple[type, ...] = ()
    package_type: str = PLUGIN_PACKAGE_TYPE


PROJECT = CapabilityFamily(
    name="project",
    interface=ProjectType,
    subpackage="project",
    class_suffix="ProjectType",
    builtins=(DrupalProjectType,),
)

ENGINE = CapabilityFamily(
    name="engine",
    interface=EngineType,
    subpackage="engine",
    class_suffix="EngineType",
    builtins=(DockerEngineType,),
)

PLATFORM = CapabilityFamily(
    name="platform",
    interface=PlatformType,
    subpackage="platform",
    class_suffix="PlatformType",
)

FAMILIES: Dict[str, CapabilityFamily] = {
    family.name: family for family in (PROJECT, ENGINE, PLATFORM)
}
