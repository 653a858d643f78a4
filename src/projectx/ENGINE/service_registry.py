"""
Engine-level view of the declared service table.
"""
from typing import Dict, List, Optional
from ..CONFIG.config_store import ConfigStore
from ..MODELS.service_info import ServiceInfo


class ServiceDefinitionRegistry:
    """
    Lookups over the services declared in a ConfigStore.

    Every method is a pure projection; nothing here mutates the store.
    """
    def __init__(self, config: ConfigStore):
        """
        :param config: The project configuration store.
        """
        self.config = config

    def get_services(self) -> Dict[str, ServiceInfo]:
        """
        All declared services keyed by name, in declaration order.
        """
        return self.config.services

    def get_service_types(self) -> Dict[str, str]:
        """
        Maps each declared service name to its builtin kind.
        """
        return {name: info.type for name, info in self.get_services().items()}

    def get_info(self, service_type: str, name: Optional[str] = None) -> Optional[ServiceInfo]:
        """
        Finds the declaration for a builtin service kind.

        A declaration whose name matches ``name`` is preferred; otherwise the
        first declaration of that kind is returned.

        :param service_type: The builtin kind identifier.
        :param name: Optional service name of the requesting builder.
        :return: The matching declaration, or None if the kind is not declared.
        """
        services = self.get_services()
        if name is not None:
            info = services.get(name)
            if info is not None and info.type == service_type:
                return info
        for info in services.values():
            if info.type == service_type:
                return info
        return None

    def get_service_names_by_type(self, service_type: str) -> List[str]:
        """
        Names of all declared services of a kind, in declaration order.
        """
        return [name for name, info in self.get_services().items() if info.type == service_type]

    def find_service_name_by_type(self, service_type: str) -> Optional[str]:
        """
        Name of the first declared service of a kind, or None.
        """
        names = self.get_service_names_by_type(service_type)
        return names[0] if names else None
