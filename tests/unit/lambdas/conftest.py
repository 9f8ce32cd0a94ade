from typing import cast

import pytest

from linkshortener.types import LambdaContext, LambdaConfiguration
from linkshortener.services import LinkStore, RedirectResolver, Services
from linkshortener.utils.config import LinkSettings


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'test_lambda'})


@pytest.fixture
def config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'active_backend': 'memory', 'memory': {}, 'links': {}})


@pytest.fixture
def services(store: LinkStore, event_log) -> Services:
    """Services over the isolated memory backend from the unit conftest."""
    return Services(settings=LinkSettings(), event_log=event_log, store=store, resolver=RedirectResolver(store))


@pytest.fixture
def patch_lambda(monkeypatch, config, services):
    """Patch a lambda app module's configuration and service wiring."""

    def patch(app) -> None:
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'build_services', lambda *a, **kw: services)

    return patch
