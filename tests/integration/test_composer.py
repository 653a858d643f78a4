"""
Integration tests for composing a full service topology.
"""
import pytest
from projectx.CONFIG.config_store import ConfigStore
from projectx.ENGINE.SERVICES.base import ServiceBuilder, PROXY_DISABLED_LABEL
from projectx.errors import NotFoundError, NotSupportedError
from projectx.MANAGERS.service_composer import ServiceComposer
from projectx.PLUGINS.manifest import StaticManifest
from projectx.PLUGINS.resolver import CapabilityPluginResolver

PROJECT_YAML = """
name: acme
type: drupal
engine: docker
services:
  web:
    type: apache
    ports: [8080]
  php:
    type: php
    version: "7.2"
  database:
    type: mysql
    environment:
      - MYSQL_DATABASE=acme
  cache:
    type: redis
"""


@pytest.fixture
def composer():
    return ServiceComposer(CapabilityPluginResolver(StaticManifest()))


def test_compose_in_declaration_order(composer):
    config = ConfigStore.from_string(PROJECT_YAML, context={})
    services = composer.compose(config)
    assert [service.image for service in services] == ['httpd', 'php', 'mysql', 'redis']


def test_compose_external_web(composer, make_config):
    config = make_config(services={'web': {'type': 'apache', 'ports': [8080]}})
    (web,) = composer.compose(config)
    assert web.ports == ['8080:8080']
    assert web.networks == []


def test_compose_internal_web(composer, make_config):
    config = make_config(services={'web': {'type': 'apache', 'ports': [8080]}})
    engine = composer.create_engine(config)
    builder = engine.get_builder('apache', 'web').set_internal()
    web = builder.get_service()
    assert web.ports == []
    assert web.networks == ['internal']
    assert PROXY_DISABLED_LABEL in web.labels


def test_compose_services_mapping(composer):
    config = ConfigStore.from_string(PROJECT_YAML, context={})
    services = composer.compose_services(config)
    assert list(services) == ['web', 'php', 'database', 'cache']
    assert services['web'].links == ['php']
    assert services['php'].image_reference == 'php:7.2-fpm'
    assert services['database'].environment == ['MYSQL_DATABASE=acme']
    assert services['database'].volumes == ['database-data:/var/lib/mysql']


def test_proxy_network_keeps_only_frontends_routable(composer):
    config = ConfigStore.from_string(PROJECT_YAML + "network:\n  proxy: true\n", context={})
    services = composer.compose_services(config)
    assert services['web'].ports == ['8080:8080']
    for name in ('php', 'database', 'cache'):
        assert services[name].ports == []
        assert services[name].networks == ['internal']


def test_unsupported_type_fails_before_building(composer, make_config, monkeypatch):
    built = []
    original = ServiceBuilder.get_service
    monkeypatch.setattr(ServiceBuilder, 'get_service', lambda self: built.append(self) or original(self))

    config = make_config(services={
        'web': {'type': 'apache'},
        'proxy': {'type': 'varnish'},
    })
    with pytest.raises(NotSupportedError) as excinfo:
        composer.compose(config)
    assert excinfo.value.service_name == 'proxy'
    assert built == []


def test_unknown_engine(composer, make_config):
    with pytest.raises(NotFoundError):
        composer.compose(make_config(engine='vagrant'))


def test_service_name_lookups(composer):
    config = ConfigStore.from_string(PROJECT_YAML, context={})
    assert composer.get_service_names_by_type(config, 'mysql') == ['database']
    assert composer.find_service_name_by_type(config, 'php') == 'php'
    assert composer.find_service_name_by_type(config, 'postgres') is None


def test_compose_with_plugin_engine(plugin_package, make_config):
    plugin_package('podman_engine', {'engine': '''
        from projectx.ENGINE.engine_type import EngineType
        from projectx.ENGINE.SERVICES.cache import RedisService


        class PodmanEngineType(EngineType):
            type_id = "podman"
            label = "Podman"

            def supported_services(self):
                return {'redis': RedisService}
    '''})
    resolver = CapabilityPluginResolver(StaticManifest([
        {'name': 'acme/podman', 'type': 'project-x', 'autoload-namespace': 'podman_engine'},
    ]))
    composer = ServiceComposer(resolver)
    config = make_config(engine='podman', services={'cache': {'type': 'redis'}})
    (cache,) = composer.compose(config)
    assert cache.ports == ['6379:6379']

    with pytest.raises(NotSupportedError):
        composer.compose(make_config(engine='podman', services={'web': {'type': 'apache'}}))
