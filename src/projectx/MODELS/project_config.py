"""
Models for the overall project configuration.
"""
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field, field_validator
from .service_info import ServiceInfo


class HostConfig(BaseModel):
    """
    Local hostname settings for the project.
    """
    name: str = "localhost"
    open_on_startup: bool = False


class NetworkConfig(BaseModel):
    """
    Network settings. With ``proxy`` enabled only frontend services are routable.
    """
    proxy: bool = False


class ProjectConfig(BaseModel):
    """
    Complete project configuration.
    Equivalent to a parsed project-x.yml file.
    """
    name: str
    type: str = "drupal"
    version: Optional[str] = None
    engine: str = "docker"
    platform: Optional[str] = None
    root: str = "/docroot"
    host: HostConfig = Field(default_factory=HostConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    options: Dict[str, Dict[str, Any]] = {}
    services: Dict[str, ServiceInfo] = {}

    @field_validator('version', mode='before')
    @classmethod
    def _version_to_string(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator('services', mode='before')
    @classmethod
    def _name_services(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        services = {}
        for name, spec in value.items():
            if isinstance(spec, dict):
                spec = {**spec, 'name': name}
            services[name] = spec
        return services
