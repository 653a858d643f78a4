"""
Shared fixtures for the Project-X test suite.
"""
import importlib
import sys
import textwrap

import pytest

from projectx.CONFIG.config_store import ConfigStore


@pytest.fixture
def make_config():
    """Builds a ConfigStore from keyword sections."""
    def make(services=None, **sections):
        data = {'name': 'example', **sections}
        data['services'] = services or {}
        return ConfigStore.from_dict(data)
    return make


@pytest.fixture
def plugin_package(tmp_path, monkeypatch):
    """Creates importable plugin packages under a temporary directory."""
    roots = set()
    monkeypatch.syspath_prepend(str(tmp_path))

    def create(namespace, modules):
        parts = namespace.split('.')
        for depth in range(1, len(parts) + 1):
            directory = tmp_path.joinpath(*parts[:depth])
            directory.mkdir(exist_ok=True)
            init = directory / '__init__.py'
            if not init.exists():
                init.write_text('')
        package_dir = tmp_path.joinpath(*parts)
        for module, source in modules.items():
            (package_dir / f"{module}.py").write_text(textwrap.dedent(source))
        roots.add(parts[0])
        importlib.invalidate_caches()

    yield create

    for name in list(sys.modules):
        if name.split('.')[0] in roots:
            del sys.modules[name]
