from datetime import datetime, timezone

import pytest

from app import create_app
from config import AppConfig
from store.collection import CollectionAccessor
from store.events import PERMISSION_ERROR, WRITE_ERROR, ErrorEmitter
from store.memory import MemoryStore

FIXED_NOW = datetime(2025, 3, 2, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def emitter():
    return ErrorEmitter()


@pytest.fixture
def events(emitter):
    """Every error published on the emitter, as (event, payload)."""
    seen = []
    emitter.on(PERMISSION_ERROR, lambda e: seen.append((PERMISSION_ERROR, e)))
    emitter.on(WRITE_ERROR, lambda e: seen.append((WRITE_ERROR, e)))
    return seen


@pytest.fixture
def accessor(store, emitter):
    return CollectionAccessor(store, emitter, clock=lambda: FIXED_NOW)


@pytest.fixture
def config():
    return AppConfig(use_memory_store=True, ward_timezone="UTC", google_api_key="test-key")


@pytest.fixture
def app(config, store):
    app = create_app(config, store=store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def actor():
    return {"X-User-Id": "u1"}
