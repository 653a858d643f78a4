"""
Platform types describe the hosting platform a project is deployed to.
"""
from abc import ABC, abstractmethod
from typing import List

from ..CONFIG.config_store import ConfigStore


class PlatformType(ABC):
    """
    Base class for hosting platforms. No platform ships with the core;
    plugin packages provide them in their ``platform`` module.
    """
    type_id = ""
    label = ""

    def __init__(self, config: ConfigStore):
        self.config = config

    @abstractmethod
    def environments(self) -> List[str]:
        """
        Names of the remote environments the platform hosts.
        """
