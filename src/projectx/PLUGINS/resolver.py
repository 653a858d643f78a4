# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Resolution of capability identifiers to implementing classes, from the
builtin implementations and from installed plugin packages.
"""
import importlib
import inspect
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..errors import NotFoundError, PluginError
from ..MODELS.plugin_descriptor import PackageRecord, PluginDescriptor, PluginSource
from .families import CapabilityFamily, FAMILIES
from .manifest import EntryPointManifest

logger = logging.getLogger(__name__)

FamilyRef = Union[str, CapabilityFamily]


def classname_of(cls: type) -> str:
    """
    Fully qualified name of a class.
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def conformance_problem(family: CapabilityFamily, cls: type) -> Optional[str]:
    """
    Checks a class against the family interface.

    :param family: The capability family.
    :param cls: The candidate class.
    :return: A description of the problem, or None if the class conforms.
    """
    name = cls.__qualname__
    if not issubclass(cls, family.interface):
        return f"{name} does not extend {family.interface.__name__}"
    if inspect.isabstract(cls):
        missing = ', '.join(sorted(cls.__abstractmethods__))
        return f"{name} does not implement {missing}"
    type_id = getattr(cls, 'type_id', None)
    if not isinstance(type_id, str) or not type_id:
        return f"{name} does not define a type_id"
    return None


class CapabilityPluginResolver:
    """
    Maps capability identifiers to plugin descriptors for each family.

    Builtin implementations are registered first. Plugin packages found in
    the manifest are scanned in lexical package-name order and override
    any earlier registration with the same identifier, so a package always
    wins over the core and, among packages, the last name wins.

    Results are built once per family and cached until ``refresh()``.
    """
    def __init__(self, manifest: Any = None, families: Optional[Dict[str, CapabilityFamily]] = None):
        """
        :param manifest: Manifest reader with a ``read()`` method. Defaults to installed distributions.
        :param families: Capability families by name. Defaults to project, engine and platform.
        """
        self.manifest = manifest if manifest is not None else EntryPointManifest()
        self.families = dict(FAMILIES if families is None else families)
        self.diagnostics: List[PluginError] = []
        self._records: Optional[List[PackageRecord]] = None
        self._plugins: Dict[str, Dict[str, PluginDescriptor]] = {}

    def get_family(self, family: FamilyRef) -> CapabilityFamily:
        """
        :raises NotFoundError: If the family name is unknown.
        """
        if isinstance(family, CapabilityFamily):
            return family
        if family not in self.families:
            raise NotFoundError('capability family', family)
        return self.families[family]

    def resolve(self, family: FamilyRef) -> Dict[str, PluginDescriptor]:
        """
        All plugins of a family keyed by identifier.

        :param family: Family name or definition.
        :return: A copy of the merged plugin map.
        """
        family = self.get_family(family)
        if family.name not in self._plugins:
            self._plugins[family.name] = self._build(family)
        return dict(self._plugins[family.name])

    def types(self, family: FamilyRef) -> Dict[str, type]:
        """
        Plugin classes of a family keyed by identifier.
        """
        return {identifier: plugin.factory for identifier, plugin in self.resolve(family).items()}

    def get_options(self, family: FamilyRef) -> Dict[str, str]:
        """
        Plugin labels of a family keyed by identifier, for presentation.
        """
        return {identifier: plugin.label for identifier, plugin in self.resolve(family).items()}

    def get_plugin(self, family: FamilyRef, identifier: str) -> PluginDescriptor:
        """
        :raises NotFoundError: If nothing is registered under the identifier.
        """
        family = self.get_family(family)
        plugins = self.resolve(family)
        if identifier not in plugins:
            raise NotFoundError(family.name, identifier)
        return plugins[identifier]

    def get_classname(self, family: FamilyRef, identifier: str) -> str:
        """
        Fully qualified class name registered under an identifier.

        :raises NotFoundError: If nothing is registered under the identifier.
        """
        return self.get_plugin(family, identifier).classname

    def create_instance(self, family: FamilyRef, identifier: str, *args, **kwargs) -> Any:
        """
        Instantiates the class registered under an identifier.

        :raises NotFoundError: If nothing is registered under the identifier.
        """
        return self.get_plugin(family, identifier).create(*args, **kwargs)

    def refresh(self) -> None:
        """
        Drops cached manifest records, plugin maps and diagnostics.
        """
        self._records = None
        self._plugins = {}
        self.diagnostics = []

    def _build(self, family: CapabilityFamily) -> Dict[str, PluginDescriptor]:
        plugins: Dict[str, PluginDescriptor] = {}
        for cls in family.builtins:
            plugins[cls.type_id] = PluginDescriptor(
                identifier=cls.type_id,
                label=cls.label or cls.type_id,
                classname=classname_of(cls),
                source=PluginSource.CORE,
                factory=cls,
            )

        for record in self._package_records():
            if record.type != family.package_type:
                continue
            for plugin in self._package_plugins(family, record):
                previous = plugins.get(plugin.identifier)
                if previous is not None:
                    logger.info(
                        "%s type '%s' from %s overrides %s",
                        family.name, plugin.identifier, record.name, previous.classname,
                    )
                plugins[plugin.identifier] = plugin
        return plugins

    def _package_records(self) -> List[PackageRecord]:
        if self._records is None:
            records = []
            for entry in self.manifest.read():
                if not isinstance(entry, dict):
                    self._skip('<unknown>', "manifest entry is not a mapping")
                    continue
                try:
                    records.append(PackageRecord.model_validate(entry))
                except ValidationError as e:
                    fields = ', '.join(str(error['loc'][0]) for error in e.errors() if error['loc'])
                    self._skip(str(entry.get('name', '<unknown>')), f"malformed manifest entry ({fields})")
            self._records = sorted(records, key=lambda record: record.name)
        return self._records

    def _package_plugins(self, family: CapabilityFamily, record: PackageRecord) -> List[PluginDescriptor]:
        module_name = f"{record.namespace}.{family.subpackage}"
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            self._skip(record.name, f"unable to import {module_name}: {e}")
            return []
        except Exception as e:
            self._skip(record.name, f"error importing {module_name}: {e}")
            return []

        candidates = [
            obj for attr, obj in vars(module).items()
            if inspect.isclass(obj)
            and obj.__module__ == module.__name__
            and attr.endswith(family.class_suffix)
        ]
        if not candidates:
            self._skip(record.name, f"no *{family.class_suffix} class in {module_name}")
            return []

        plugins = []
        for cls in candidates:
            problem = conformance_problem(family, cls)
            if problem:
                self._skip(record.name, problem)
                continue
            plugins.append(PluginDescriptor(
                identifier=cls.type_id,
                label=getattr(cls, 'label', '') or cls.type_id,
                classname=classname_of(cls),
                source=PluginSource.PACKAGE,
                factory=cls,
                package=record.name,
            ))
        return plugins

    def _skip(self, package: str, message: str) -> None:
        error = PluginError(package, message)
        self.diagnostics.append(error)
        logger.warning("Skipping plugin entry: %s", error)
