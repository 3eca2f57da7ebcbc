import logging

from fastapi.testclient import TestClient

from firewatch.api.main import create_app
from firewatch.logging_config import JSONFormatter


class IdleFireProvider:
    async def fetch_fires(self, **kwargs):
        raise AssertionError("no fetch expected")


def test_building_the_app_leaves_root_logging_untouched():
    root = logging.getLogger()
    handlers = list(root.handlers)
    create_app(provider=IdleFireProvider())
    assert root.handlers == handlers


def test_startup_installs_json_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    app = create_app(provider=IdleFireProvider())
    try:
        with TestClient(app):
            assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_startup_can_skip_logging_setup():
    root = logging.getLogger()
    handlers = list(root.handlers)
    with TestClient(create_app(provider=IdleFireProvider(), configure_logging=False)):
        assert root.handlers == handlers
