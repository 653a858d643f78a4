"""
Nginx web server service.
"""
from typing import Dict, Any, List
from .base import ServiceBuilder


class NginxService(ServiceBuilder):
    KIND = "nginx"
    GROUP = "frontend"
    IMAGE = "nginx"
    DEFAULT_VERSION = "stable"

    def ports(self) -> List[int]:
        return [80]

    def volumes(self) -> List[str]:
        return [
            './:/var/www/html',
            './docker/services/nginx/default.conf:/etc/nginx/conf.d/default.conf',
        ]

    def links(self) -> List[str]:
        php = self.registry.find_service_name_by_type('php')
        return [php] if php else []

    def template_files(self) -> Dict[str, Dict[str, Any]]:
        return {
            'default.conf': {
                'variables': {
                    'PHP_SERVICE': self.registry.find_service_name_by_type('php') or 'php',
                },
                'overwrite': True,
            },
        }
