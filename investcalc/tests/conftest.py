from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from investcalc.app import create_app
from investcalc.config import Settings
from investcalc.core.cache import ResponseCache


@pytest.fixture()
def cache() -> ResponseCache:
    return ResponseCache(max_entries=32, ttl_seconds=60)


@pytest.fixture()
def app(cache):
    flask_app = create_app(Settings(log_level="WARNING"), cache=cache)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
