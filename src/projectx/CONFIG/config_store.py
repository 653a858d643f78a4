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
Loading and read access for the project-x.yml configuration.
"""
import logging
import os
from typing import Dict, Any, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from ..MODELS.project_config import ProjectConfig, HostConfig, NetworkConfig
from ..MODELS.service_info import ServiceInfo
from ..UTILS.string_interpolation import EnvironmentInterpolator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "project-x.yml"


class ConfigStore:
    """
    Read-only access to the declared project configuration.
    """
    def __init__(self, config: ProjectConfig):
        """
        Initializes the store around a validated configuration.

        :param config: The parsed project configuration.
        """
        self.config = config

    @classmethod
    def load(cls, config_path: str, context: Optional[Dict[str, str]] = None) -> "ConfigStore":
        """
        Loads a configuration file from a path.

        :param config_path: Path to the project-x.yml file.
        :param context: Environment variables used for interpolation.
        :return: The configuration store.
        :raises ConfigError: If the file is missing or invalid.
        """
        try:
            with open(config_path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Unable to read configuration {config_path}: {e}") from e
        return cls.from_string(content, context)

    @classmethod
    def from_string(cls, content: str, context: Optional[Dict[str, str]] = None) -> "ConfigStore":
        """
        Parses configuration from a YAML string.

        :param content: YAML content of the configuration.
        :param context: Environment variables used for interpolation.
        :return: The configuration store.
        :raises ConfigError: If the YAML is malformed or fails validation.
        """
        context = dict(os.environ) if context is None else dict(context)

        # Unset variables resolve to an empty string, as in compose files.
        missing = EnvironmentInterpolator.missing(content, context)
        if missing:
            logger.warning("Unset variables in configuration: %s", ", ".join(missing))
            context.update({name: '' for name in missing})
        content = EnvironmentInterpolator.interpolate(content, context)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid configuration YAML: {e}") from e
        if not data:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigStore":
        """
        Builds the store from an already parsed mapping.

        :param data: Raw configuration mapping.
        :return: The configuration store.
        :raises ConfigError: If validation fails.
        """
        try:
            config = ProjectConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return cls(config)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def type(self) -> str:
        return self.config.type

    @property
    def version(self) -> Optional[str]:
        return self.config.version

    @property
    def engine(self) -> str:
        return self.config.engine

    @property
    def platform(self) -> Optional[str]:
        return self.config.platform

    @property
    def root(self) -> str:
        return self.config.root

    @property
    def host(self) -> HostConfig:
        return self.config.host

    @property
    def network(self) -> NetworkConfig:
        return self.config.network

    @property
    def options(self) -> Dict[str, Dict[str, Any]]:
        return self.config.options

    @property
    def services(self) -> Dict[str, ServiceInfo]:
        """
        Declared services keyed by name, in declaration order.
        """
        return self.config.services

    def get_project_options(self) -> Dict[str, Any]:
        """
        Options declared for the selected project type.
        """
        return self.options.get(self.type, {})

    def get_engine_options(self) -> Dict[str, Any]:
        """
        Options declared for the selected environment engine.
        """
        return self.options.get(self.engine, {})
