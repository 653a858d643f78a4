"""
PHP-FPM service.
"""
from typing import List
from .base import ServiceBuilder


class PhpService(ServiceBuilder):
    KIND = "php"
    GROUP = "backend"
    IMAGE = "php"
    DEFAULT_VERSION = "7.1"

    def get_version(self) -> str:
        # Only the FPM variant of the image is usable behind a web server
        version = super().get_version()
        return version if version.endswith('fpm') else f"{version}-fpm"

    def ports(self) -> List[int]:
        return [9000]

    def volumes(self) -> List[str]:
        return ['./:/var/www/html']
