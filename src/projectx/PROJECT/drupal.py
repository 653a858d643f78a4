"""
Drupal project type.
"""
from typing import Dict

from ..CONFIG.config_store import ConfigStore
from ..MODELS.service_info import ServiceInfo
from .project_type import ProjectType


class DrupalProjectType(ProjectType):
    type_id = "drupal"
    label = "Drupal"

    DEFAULT_VERSION = "8"
    SUPPORTED_VERSIONS = {
        "7": "7.x",
        "8": "8.x",
    }

    def __init__(self, config: ConfigStore):
        super().__init__(config)
        self.supports_docker = True

    def default_services(self) -> Dict[str, ServiceInfo]:
        return {
            'web': ServiceInfo(name='web', type='apache'),
            'php': ServiceInfo(name='php', type='php', version='7.1'),
            'database': ServiceInfo(name='database', type='mysql', version='5.6'),
        }
