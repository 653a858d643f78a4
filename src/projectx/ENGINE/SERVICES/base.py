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
Base builder for container services, including the override merge and the
network exposure policy.
"""
import logging
from typing import Callable, Dict, List, Optional, Any, Tuple

from ...MODELS.docker_service import DockerService
from ...MODELS.service_info import ServiceInfo
from ...UTILS.once import Once
from ..service_registry import ServiceDefinitionRegistry

logger = logging.getLogger(__name__)

INTERNAL_NETWORK = "internal"
PROXY_DISABLED_LABEL = "traefik.enable=false"


def _override_ports(service: DockerService, ports: List[int]) -> DockerService:
    return service.model_copy(update={'ports': [str(port) for port in ports]})


def _override_links(service: DockerService, links: List[str]) -> DockerService:
    return service.model_copy(update={'links': list(links)})


def _override_environment(service: DockerService, environment: List[str]) -> DockerService:
    return service.model_copy(update={'environment': list(environment)})


# The only declared properties allowed to replace a builder's defaults.
OVERRIDES: Tuple[Tuple[str, Callable[[DockerService, Any], DockerService]], ...] = (
    ('ports', _override_ports),
    ('links', _override_links),
    ('environment', _override_environment),
)


class ServiceBuilder:
    """
    Builds one container service for a builtin service kind.

    Subclasses describe the kind through class attributes and the ``ports``,
    ``volumes``, ``environment`` and ``links`` hooks. The assembled service is
    built on the first ``get_service()`` call and cached for the lifetime of
    the builder, so ``set_version()`` and ``set_internal()`` only take effect
    when called before that.
    """
    KIND = ""
    GROUP = "service"
    IMAGE = ""
    DEFAULT_VERSION = "latest"

    def __init__(self, registry: ServiceDefinitionRegistry, name: Optional[str] = None):
        """
        :param registry: The owning engine's service table. Used for lookups only.
        :param name: Optional service name overriding the kind identifier.
        """
        self.registry = registry
        self.name = name
        self.version: Optional[str] = None
        self.internal = False
        self._service: Once[DockerService] = Once(self._assemble)

    @classmethod
    def group(cls) -> str:
        return cls.GROUP

    def get_name(self) -> str:
        return self.name or self.KIND

    def set_version(self, version: str) -> "ServiceBuilder":
        if self._service.is_set:
            logger.warning("Service %s is already built; version %s ignored", self.get_name(), version)
            return self
        self.version = version
        return self

    def set_internal(self, internal: bool = True) -> "ServiceBuilder":
        """
        Marks the service as reachable only from sibling services.

        Construction-time setting: once ``get_service()`` has run the cached
        service keeps the policy it was built with.
        """
        if self._service.is_set:
            logger.warning("Service %s is already built; internal flag ignored", self.get_name())
            return self
        self.internal = internal
        return self

    def get_info(self) -> Optional[ServiceInfo]:
        """
        The declaration this builder is customized by, if any.
        """
        return self.registry.get_info(self.KIND, self.name)

    def get_version(self) -> str:
        if self.version:
            return self.version
        info = self.get_info()
        if info is not None and info.version:
            return info.version
        return self.DEFAULT_VERSION

    def ports(self) -> List[int]:
        return []

    def volumes(self) -> List[str]:
        return []

    def environment(self) -> List[str]:
        return []

    def links(self) -> List[str]:
        return []

    def template_files(self) -> Dict[str, Dict[str, Any]]:
        """
        Template files the service relies on, keyed by filename.
        """
        return {}

    def service(self) -> DockerService:
        """
        The base service before declared overrides and exposure policy.
        """
        return DockerService(
            image=self.IMAGE,
            version=self.get_version(),
            ports=[str(port) for port in self.ports()],
            volumes=self.volumes(),
            environment=self.environment(),
            links=self.links(),
        )

    def get_service(self) -> DockerService:
        """
        The fully assembled service. Built once, then returned from cache.
        """
        return self._service.get()

    def apply_overrides(self, service: DockerService, info: Optional[ServiceInfo]) -> DockerService:
        """
        Replaces whitelisted properties with their declared values.

        :param service: The base service.
        :param info: The matching declaration, or None.
        :return: The service with overrides applied.
        """
        if info is None:
            return service
        for prop, apply in OVERRIDES:
            value = getattr(info, prop)
            if value:
                service = apply(service, value)
        return service

    def apply_exposure(self, service: DockerService) -> DockerService:
        """
        Applies the internal or external network policy.
        """
        if self.internal:
            labels = list(service.labels)
            if PROXY_DISABLED_LABEL not in labels:
                labels.append(PROXY_DISABLED_LABEL)
            return service.model_copy(update={
                'ports': [],
                'networks': [INTERNAL_NETWORK],
                'labels': labels,
            })

        ports = []
        for port in service.ports:
            container_port = port.rsplit(':', 1)[-1]
            ports.append(f"{container_port}:{container_port}")
        return service.model_copy(update={'ports': ports})

    def get_environment_value(self, name: str) -> Optional[str]:
        """
        Case-insensitive lookup of an environment value on the assembled service.
        """
        name = name.lower()
        for entry in self.get_service().environment:
            key, _, value = entry.partition('=')
            if key.lower() == name:
                return value
        return None

    def get_host_ports(self) -> List[str]:
        """
        Host side of every published port.
        """
        return [port.split(':', 1)[0] for port in self.get_service().ports]

    def _assemble(self) -> DockerService:
        info = self.get_info()
        service = self.service()
        service = self.apply_overrides(service, info)
        service = self.apply_exposure(service)
        logger.debug("Built service %s from %s", self.get_name(), service.image_reference)
        return service
