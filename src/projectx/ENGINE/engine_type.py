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
Environment engine types.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple, Type

from ..CONFIG.config_store import ConfigStore
from ..errors import NotSupportedError
from ..MODELS.service_info import ServiceInfo
from .service_registry import ServiceDefinitionRegistry
from .SERVICES.base import ServiceBuilder
from .SERVICES.catalog import SERVICE_BUILDERS

logger = logging.getLogger(__name__)


class EngineType(ABC):
    """
    An environment engine, owning the service table and the builders created for it.
    """
    type_id = ""
    label = ""

    def __init__(self, config: ConfigStore):
        """
        :param config: The project configuration store.
        """
        self.config = config
        self.registry = ServiceDefinitionRegistry(config)
        self._builders: Dict[Tuple[str, Optional[str]], ServiceBuilder] = {}

    @abstractmethod
    def supported_services(self) -> Dict[str, Type[ServiceBuilder]]:
        """
        Builder classes available to this engine, keyed by service kind.
        """

    def get_builder(self, service_type: str, name: Optional[str] = None) -> ServiceBuilder:
        """
        Returns the builder for a service kind, creating it on first request.

        :param service_type: The builtin kind identifier.
        :param name: Optional service name.
        :return: The service builder.
        :raises NotSupportedError: If no builder registers the kind.
        """
        key = (service_type, name)
        if key not in self._builders:
            builder_class = self.supported_services().get(service_type)
            if builder_class is None:
                raise NotSupportedError(service_type, name)
            self._builders[key] = builder_class(self.registry, name)
        return self._builders[key]

    def get_services(self) -> Dict[str, ServiceInfo]:
        return self.registry.get_services()

    def get_service_names_by_type(self, service_type: str) -> List[str]:
        return self.registry.get_service_names_by_type(service_type)

    def find_service_name_by_type(self, service_type: str) -> Optional[str]:
        return self.registry.find_service_name_by_type(service_type)


class DockerEngineType(EngineType):
    """
    Docker compose based environment engine.
    """
    type_id = "docker"
    label = "Docker"

    def supported_services(self) -> Dict[str, Type[ServiceBuilder]]:
        return SERVICE_BUILDERS
