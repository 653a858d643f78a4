# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Unit tests for the service builder override merge and exposure policy.
"""
import threading
import pytest
from pydantic import ValidationError
from projectx.ENGINE.service_registry import ServiceDefinitionRegistry
from projectx.ENGINE.SERVICES.apache import ApacheService
from projectx.ENGINE.SERVICES.base import INTERNAL_NETWORK, PROXY_DISABLED_LABEL
from projectx.ENGINE.SERVICES.catalog import SERVICE_BUILDERS


class CountingApacheService(ApacheService):
    """Apache builder that counts override merges."""

    def __init__(self, registry, name=None):
        super().__init__(registry, name)
        self.merges = 0

    def apply_overrides(self, service, info):
        self.merges += 1
        return super().apply_overrides(service, info)


def registry_for(make_config, **services):
    return ServiceDefinitionRegistry(make_config(services=services))


class TestMemoization:
    """Tests for the build-once service cache."""

    def test_get_service_returns_identical_object(self, make_config):
        """Test that repeated calls return the same cached service."""
        builder = CountingApacheService(registry_for(make_config, web={'type': 'apache'}), 'web')
        first = builder.get_service()
        second = builder.get_service()
        assert first is second
        assert builder.merges == 1

    def test_concurrent_callers_merge_once(self, make_config):
        """Test that concurrent callers share a single build."""
        builder = CountingApacheService(registry_for(make_config, web={'type': 'apache'}), 'web')
        results = []
        threads = [threading.Thread(target=lambda: results.append(builder.get_service())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert builder.merges == 1
        assert all(result is results[0] for result in results)

    def test_set_internal_after_build_has_no_effect(self, make_config):
        """Test that the exposure policy is fixed once the service is built."""
        builder = ApacheService(registry_for(make_config, web={'type': 'apache'}), 'web')
        service = builder.get_service()
        builder.set_internal()
        assert builder.get_service() is service
        assert builder.get_service().ports == ['80:80']
        assert builder.internal is False

    def test_set_version_after_build_has_no_effect(self, make_config):
        """Test that the version is fixed once the service is built."""
        builder = ApacheService(registry_for(make_config, web={'type': 'apache'}), 'web')
        service = builder.get_service()
        builder.set_version('2.2')
        assert builder.get_version() == '2.4'
        assert builder.get_service().version == '2.4'
        assert builder.get_service() is service

    def test_assembled_service_is_frozen(self, make_config):
        """Test that callers cannot mutate the cached service attributes."""
        builder = ApacheService(registry_for(make_config), None)
        with pytest.raises(ValidationError):
            builder.get_service().image = 'nginx'


class TestOverrides:
    """Tests for the override whitelist."""

    def test_no_declaration_uses_defaults(self, make_config):
        """Test that a builder without a declaration keeps its defaults."""
        builder = ApacheService(registry_for(make_config, cache={'type': 'redis'}))
        service = builder.get_service()
        assert service.image == 'httpd'
        assert service.version == '2.4'
        assert service.ports == ['80:80']
        assert service.links == []

    def test_whitelisted_properties_replace_defaults(self, make_config):
        """Test that ports, links and environment fully replace defaults."""
        builder = ApacheService(registry_for(
            make_config,
            web={
                'type': 'apache',
                'ports': [8080, 8443],
                'links': ['database'],
                'environment': ['APACHE_LOG_DIR=/var/log'],
            },
        ), 'web')
        service = builder.get_service()
        assert service.ports == ['8080:8080', '8443:8443']
        assert service.links == ['database']
        assert service.environment == ['APACHE_LOG_DIR=/var/log']

    def test_volumes_are_not_overridable(self, make_config):
        """Test that declared volumes never change the builder's volumes."""
        builder = ApacheService(registry_for(
            make_config,
            web={'type': 'apache', 'volumes': ['./custom:/srv']},
        ), 'web')
        assert builder.get_service().volumes == [
            './:/var/www/html',
            './docker/services/apache/httpd.conf:/usr/local/apache2/conf/httpd.conf',
        ]

    def test_empty_declared_values_keep_defaults(self, make_config):
        """Test that empty declared lists do not clear defaults."""
        builder = ApacheService(registry_for(make_config, web={'type': 'apache', 'ports': []}), 'web')
        assert builder.get_service().ports == ['80:80']

    def test_declaration_matched_by_type(self, make_config):
        """Test that an unnamed builder finds the declaration of its kind."""
        builder = ApacheService(registry_for(
            make_config,
            cache={'type': 'redis', 'ports': [7000]},
            frontend={'type': 'apache', 'ports': [8080]},
        ))
        assert builder.get_service().ports == ['8080:8080']


class TestVersion:
    """Tests for version precedence."""

    def test_default_version(self, make_config):
        builder = ApacheService(registry_for(make_config, web={'type': 'apache'}), 'web')
        assert builder.get_version() == '2.4'

    def test_declared_version(self, make_config):
        builder = ApacheService(registry_for(make_config, web={'type': 'apache', 'version': '2.2'}), 'web')
        assert builder.get_service().version == '2.2'

    def test_builder_version_wins(self, make_config):
        builder = ApacheService(registry_for(make_config, web={'type': 'apache', 'version': '2.2'}), 'web')
        builder.set_version('2.3')
        assert builder.get_service().version == '2.3'


class TestExposure:
    """Tests for the internal/external exposure policy."""

    @pytest.mark.parametrize('kind', sorted(SERVICE_BUILDERS))
    def test_internal_services_publish_no_ports(self, make_config, kind):
        """Test that internal services are unroutable and unpublished."""
        builder = SERVICE_BUILDERS[kind](registry_for(make_config)).set_internal()
        service = builder.get_service()
        assert service.ports == []
        assert service.networks == [INTERNAL_NETWORK]
        assert PROXY_DISABLED_LABEL in service.labels

    @pytest.mark.parametrize('kind', sorted(SERVICE_BUILDERS))
    def test_external_services_publish_every_port(self, make_config, kind):
        """Test that external services map each base port to itself."""
        builder = SERVICE_BUILDERS[kind](registry_for(make_config))
        service = builder.get_service()
        assert service.ports == [f"{port}:{port}" for port in builder.ports()]
        assert service.networks == []

    def test_internal_ignores_declared_ports(self, make_config):
        """Test that declared ports are not published for internal services."""
        builder = ApacheService(registry_for(make_config, web={'type': 'apache', 'ports': [8080]}), 'web')
        builder.set_internal()
        assert builder.get_service().ports == []

    def test_host_ports(self, make_config):
        builder = ApacheService(registry_for(make_config, web={'type': 'apache', 'ports': [8080]}), 'web')
        assert builder.get_host_ports() == ['8080']

    def test_environment_value(self, make_config):
        builder = ApacheService(registry_for(
            make_config, web={'type': 'apache', 'environment': ['Server_Name=acme.test']},
        ), 'web')
        assert builder.get_environment_value('SERVER_NAME') == 'acme.test'
        assert builder.get_environment_value('missing') is None
