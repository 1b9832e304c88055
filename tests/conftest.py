"""
Pytest configuration and shared fixtures for inventory catalog tests.
"""
import os
import random
import tempfile
from datetime import datetime, timezone

import pytest

from catalog import create_app
from catalog.extensions import db
from catalog.services.custom_id import InventoryNotFound


@pytest.fixture(scope='function')
def app():
    """Create and configure a new app instance for each test."""
    db_fd, db_path = tempfile.mkstemp()

    app = create_app({
        'TESTING': True,
        'DATABASE_URL': f'sqlite:///{db_path}',
        'SECRET_KEY': 'test-secret-key',
    })

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()

    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


class FakeCustomIdStore:
    """In-memory custom ID store keyed by inventory ID."""

    def __init__(self):
        self.documents = {}
        self.items = {}
        self.count_calls = 0

    def add_inventory(self, inventory_id, document=None):
        self.documents[inventory_id] = document
        self.items.setdefault(inventory_id, {})

    def add_item(self, inventory_id, item_id, custom_id):
        self.items.setdefault(inventory_id, {})[item_id] = custom_id

    async def get_item_count(self, inventory_id):
        self.count_calls += 1
        return len(self.items.get(inventory_id, {}))

    async def item_identifier_exists(self, inventory_id, candidate, excluded_item_id=None):
        return any(
            custom_id == candidate and item_id != excluded_item_id
            for item_id, custom_id in self.items.get(inventory_id, {}).items()
        )

    async def get_template_document(self, inventory_id):
        if inventory_id not in self.documents:
            raise InventoryNotFound(inventory_id)
        return self.documents[inventory_id]


@pytest.fixture
def fake_store():
    return FakeCustomIdStore()


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=timezone.utc)


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
