"""
Pytest configuration and shared fixtures for both services
"""
import os

# Both packages read the store URI at import time
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from simple_websocket import ConnectionClosed

from matcher import app as matcher_app, db as matcher_db
from matcher.cache import NgoRegistry
from tracker import app as tracker_app, db as tracker_db
from tracker.live import ViewerRegistry


class FakeSocket:
    """Stands in for a viewer's WebSocket; plays back queued frames, then closes"""

    def __init__(self, incoming=(), fail_on_send=False):
        self.connected = True
        self.incoming = list(incoming)
        self.fail_on_send = fail_on_send
        self.sent = []

    def send(self, data):
        if self.fail_on_send:
            raise BrokenPipeError("viewer went away")
        self.sent.append(data)

    def receive(self, timeout=None):
        if self.incoming:
            return self.incoming.pop(0)
        self.connected = False
        raise ConnectionClosed()


@pytest.fixture
def tracker_client():
    """Tracker test client over an empty donations table"""
    with tracker_app.app_context():
        tracker_db.drop_all()
        tracker_db.create_all()
    tracker_app.extensions['viewers'] = ViewerRegistry()

    yield tracker_app.test_client()

    tracker_app.extensions['viewers'].clear()


@pytest.fixture
def viewer(tracker_client):
    """A connected live-update viewer"""
    ws = FakeSocket()
    tracker_app.extensions['viewers'].add(ws)
    return ws


@pytest.fixture
def registry(tmp_path):
    """A cold NGO registry mirrored to a temporary file"""
    with matcher_app.app_context():
        matcher_db.drop_all()
        matcher_db.create_all()
    ngo_registry = NgoRegistry(matcher_db, str(tmp_path / "ngos.json"))
    matcher_app.extensions['ngo_registry'] = ngo_registry

    yield ngo_registry

    ngo_registry.clear()


@pytest.fixture
def matcher_client(registry):
    return matcher_app.test_client()


@pytest.fixture
def sample_ngo():
    return {
        'name': 'Annapurna Kitchen',
        'contact_person': 'Meera Iyer',
        'email': 'meera@annapurna.org',
        'phone': '9876543210',
        'address': 'MG Road, Bengaluru',
        'needs': 'Rice, lentils',
        'lat': 12.9716,
        'lon': 77.5946,
    }
