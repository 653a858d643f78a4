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
Readers for installed package manifests.

Every reader returns an ordered list of raw records shaped like
``{"name": ..., "type": ..., "autoload-namespace": ...}``. Records are
validated by the resolver, so malformed entries are passed through.
"""
import json
import logging
import os
from importlib.metadata import entry_points
from typing import Any, Dict, Iterable, List, Optional

from ..errors import ConfigError
from .families import PLUGIN_PACKAGE_TYPE

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "projectx.plugins"


class StaticManifest:
    """
    In-memory manifest.
    """
    def __init__(self, records: Iterable[Dict[str, Any]] = ()):
        self.records = list(records)

    def read(self) -> List[Dict[str, Any]]:
        return list(self.records)


class JsonManifest:
    """
    Manifest stored as JSON, either a list of packages or ``{"packages": [...]}``
    as written by package managers into ``installed.json``.
    """
    def __init__(self, manifest_path: str):
        """
        :param manifest_path: Path to the manifest file.
        """
        self.manifest_path = manifest_path

    def read(self) -> List[Dict[str, Any]]:
        """
        Reads the manifest. A missing file is an empty manifest.

        :raises ConfigError: If the file is not valid JSON.
        """
        if not os.path.exists(self.manifest_path):
            logger.debug("No package manifest at %s", self.manifest_path)
            return []
        try:
            with open(self.manifest_path, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Unable to read package manifest {self.manifest_path}: {e}") from e

        if isinstance(data, dict):
            data = data.get('packages', [])
        if not isinstance(data, list):
            raise ConfigError(f"Package manifest {self.manifest_path} has no package list")
        return [self._normalize(entry) for entry in data]

    def _normalize(self, entry: Any) -> Any:
        if not isinstance(entry, dict):
            return entry
        record = dict(entry)
        namespace = record.pop('namespace', None) or record.get('autoload-namespace')
        if not namespace:
            namespace = self._autoload_namespace(record.get('autoload'))
        if namespace:
            record['autoload-namespace'] = namespace
        return record

    @staticmethod
    def _autoload_namespace(autoload: Any) -> Optional[str]:
        if not isinstance(autoload, dict):
            return None
        for key in ('psr-4', 'psr-0'):
            mapping = autoload.get(key)
            if isinstance(mapping, dict) and mapping:
                return next(iter(mapping))
        return None


class EntryPointManifest:
    """
    Manifest built from installed Python distributions.

    A distribution registers as a plugin package with an entry point in the
    ``projectx.plugins`` group whose value is its root module::

        [project.entry-points."projectx.plugins"]
        acquia = "acquia_drupal"
    """
    def __init__(self, group: str = ENTRY_POINT_GROUP):
        self.group = group

    def read(self) -> List[Dict[str, Any]]:
        records = []
        for entry_point in entry_points(group=self.group):
            dist = getattr(entry_point, 'dist', None)
            records.append({
                'name': dist.name if dist is not None else entry_point.name,
                'type': PLUGIN_PACKAGE_TYPE,
                'autoload-namespace': entry_point.module,
            })
        return records
