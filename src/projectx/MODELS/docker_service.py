"""
Models for the assembled service entity handed to the container runtime driver.
"""
from typing import List, Dict, Any
from pydantic import BaseModel, ConfigDict


class DockerService(BaseModel):
    """
    A fully assembled container service.

    Instances are frozen; builders derive new instances with ``model_copy``
    while assembling and cache the final one.
    """
    model_config = ConfigDict(frozen=True)

    image: str
    version: str = "latest"
    ports: List[str] = []
    volumes: List[str] = []
    environment: List[str] = []
    networks: List[str] = []
    labels: List[str] = []
    links: List[str] = []

    @property
    def image_reference(self) -> str:
        """
        The image name joined with its version tag.
        """
        return f"{self.image}:{self.version}"

    def as_dict(self) -> Dict[str, Any]:
        """
        Compose-style mapping of the service, omitting empty properties.

        :return: The service as a plain dictionary.
        """
        data: Dict[str, Any] = {'image': self.image_reference}
        for key in ('ports', 'volumes', 'environment', 'networks', 'labels', 'links'):
            value = getattr(self, key)
            if value:
                data[key] = list(value)
        return data
