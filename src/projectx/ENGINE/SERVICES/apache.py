"""
Apache HTTP server service.
"""
from typing import Dict, Any, List
from .base import ServiceBuilder


class ApacheService(ServiceBuilder):
    """
    Frontend web server proxying PHP requests to the declared php service.
    """
    KIND = "apache"
    GROUP = "frontend"
    IMAGE = "httpd"
    DEFAULT_VERSION = "2.4"

    def ports(self) -> List[int]:
        return [80]

    def volumes(self) -> List[str]:
        return [
            './:/var/www/html',
            './docker/services/apache/httpd.conf:/usr/local/apache2/conf/httpd.conf',
        ]

    def links(self) -> List[str]:
        php = self.registry.find_service_name_by_type('php')
        return [php] if php else []

    def template_files(self) -> Dict[str, Dict[str, Any]]:
        return {
            'httpd.conf': {
                'variables': {
                    'PHP_SERVICE': self.registry.find_service_name_by_type('php') or 'php',
                },
                'overwrite': True,
            },
        }
