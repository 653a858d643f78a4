"""
Models for services declared in the project configuration.
"""
from typing import List, Optional, Any
from pydantic import BaseModel, ConfigDict, field_validator


class ServiceInfo(BaseModel):
    """
    A single service declaration, keyed by name in the project configuration.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    version: Optional[str] = None
    ports: List[int] = []
    volumes: List[str] = []
    environment: List[str] = []
    links: List[str] = []

    @field_validator('version', mode='before')
    @classmethod
    def _version_to_string(cls, value: Any) -> Optional[str]:
        # YAML reads 5.6 as a float
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator('environment', mode='before')
    @classmethod
    def _environment_to_list(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return [f"{key}={val}" for key, val in value.items()]
        return value

    @field_validator('ports', 'volumes', 'environment', 'links', mode='before')
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value
