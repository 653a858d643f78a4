"""
Project types describe the application a project is built around.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from ..CONFIG.config_store import ConfigStore
from ..MODELS.service_info import ServiceInfo


class ProjectType(ABC):
    """
    Base class for project types.

    Plugin packages provide additional project types by subclassing this
    class in their ``project`` module.
    """
    type_id = ""
    label = ""

    INSTALL_ROOT = "/docroot"
    DEFAULT_VERSION: Optional[str] = None
    SUPPORTED_VERSIONS: Dict[str, str] = {}

    def __init__(self, config: ConfigStore):
        """
        :param config: The project configuration store.
        """
        self.config = config
        self.supports_docker = False

    @abstractmethod
    def default_services(self) -> Dict[str, ServiceInfo]:
        """
        Services a new project of this type starts with, keyed by name.
        """

    def has_docker_support(self) -> bool:
        return self.supports_docker

    def get_install_root(self, strip_slash: bool = False) -> str:
        """
        The configured install root, always starting with a slash.

        :param strip_slash: Drop the leading slash from the result.
        """
        root = self.config.root or self.INSTALL_ROOT
        if not root.startswith('/'):
            root = f"/{root}"
        return root[1:] if strip_slash else root

    def get_project_version(self) -> Optional[str]:
        return self.config.version or self.DEFAULT_VERSION

    def get_project_option(self, key: str, default: Any = None) -> Any:
        return self.config.get_project_options().get(key, default)
