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
Composition of declared services into the topology handed to the container runtime.
"""
import logging
from typing import Dict, List, Optional

from ..CONFIG.config_store import ConfigStore
from ..ENGINE.engine_type import EngineType
from ..ENGINE.service_registry import ServiceDefinitionRegistry
from ..MODELS.docker_service import DockerService
from ..PLUGINS.resolver import CapabilityPluginResolver

logger = logging.getLogger(__name__)

FRONTEND_GROUP = "frontend"


class ServiceComposer:
    """
    Builds every declared service through the engine's service builders.
    """
    def __init__(self, resolver: Optional[CapabilityPluginResolver] = None):
        """
        Initializes the composer.

        :param resolver: Plugin resolver used to find the engine type.
        """
        self.resolver = resolver or CapabilityPluginResolver()

    def create_engine(self, config: ConfigStore) -> EngineType:
        """
        Instantiates the engine type selected in the configuration.

        :param config: The project configuration store.
        :return: The engine instance.
        :raises NotFoundError: If the engine identifier is not registered.
        """
        return self.resolver.create_instance('engine', config.engine, config)

    def compose(self, config: ConfigStore) -> List[DockerService]:
        """
        Assembles all declared services, in declaration order.

        :param config: The project configuration store.
        :return: The assembled services.
        :raises NotSupportedError: If a declared type has no builder.
        """
        return list(self.compose_services(config).values())

    def compose_services(self, config: ConfigStore) -> Dict[str, DockerService]:
        """
        Assembles all declared services keyed by service name.

        Builders for every declaration are resolved before any service is
        built, so an unsupported type leaves nothing half composed.
        """
        engine = self.create_engine(config)
        builders = {
            name: engine.get_builder(info.type, name)
            for name, info in engine.get_services().items()
        }

        services = {}
        for name, builder in builders.items():
            # Behind the reverse proxy only frontends are routable
            if config.network.proxy and builder.group() != FRONTEND_GROUP:
                builder.set_internal()
            services[name] = builder.get_service()
            logger.debug("Composed service %s (%s)", name, builder.KIND)
        return services

    def get_service_names_by_type(self, config: ConfigStore, service_type: str) -> List[str]:
        """
        Names of declared services of a kind, in declaration order.
        """
        return ServiceDefinitionRegistry(config).get_service_names_by_type(service_type)

    def find_service_name_by_type(self, config: ConfigStore, service_type: str) -> Optional[str]:
        """
        Name of the first declared service of a kind, or None.
        """
        return ServiceDefinitionRegistry(config).find_service_name_by_type(service_type)
