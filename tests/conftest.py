"""
Pytest configuration and fixtures for the PhysicsHub translation service.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from physicshub import create_app, db
from physicshub.constants import STRING_KEYS
from physicshub.language import (
    SqlKeyValueBackend,
    StringTable,
    TranslationCacheController,
    TranslationPair,
    TranslationStore,
)
from physicshub.models import Translation

fake = Faker()

ADMIN_SECRET = 'test-admin-secret'



# ============================================================
#  SERVER
# ============================================================

@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing')
    app.config['ADMIN_SECRET'] = ADMIN_SECRET

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Start every test with an empty translations table."""
    with app.app_context():
        Translation.query.delete()
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def admin_headers():
    return {'X-Admin-Secret': ADMIN_SECRET}


# ============================================================
#  CLIENT CORE
# ============================================================

class FakeClock:
    """Epoch-millisecond clock the tests can move by hand."""

    def __init__(self, now_ms=1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self):
        return self.now_ms

    def advance(self, ms):
        self.now_ms += ms


class StubFetcher:
    """Stands in for TranslationFetcher and counts round-trips."""

    def __init__(self, translations=None, error=None):
        self.translations = translations
        self.error = error
        self.calls = 0

    def fetch_remote(self):
        self.calls += 1
        if self.error is not None:
            return None, self.error
        return self.translations, None


def random_table(fill_ratio=1.0):
    """StringTable with random text in (roughly) fill_ratio of the keys."""
    values = {}
    for key in STRING_KEYS:
        if fake.pyfloat(min_value=0, max_value=1) <= fill_ratio:
            values[key] = fake.sentence(nb_words=3)
    return StringTable(values)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store_url(tmp_path):
    return f"sqlite:///{(tmp_path / 'client.db').as_posix()}"


@pytest.fixture
def backend(store_url):
    return SqlKeyValueBackend(store_url)


@pytest.fixture
def store(backend):
    return TranslationStore(backend)


@pytest.fixture
def remote_pair():
    return TranslationPair(en=random_table(), vn=random_table())


@pytest.fixture
def fetcher(remote_pair):
    return StubFetcher(translations=remote_pair)


@pytest.fixture
def controller(store, fetcher, clock):
    controller = TranslationCacheController(store, fetcher, clock=clock)
    yield controller
    controller.shutdown()


@pytest.fixture
def make_fetcher():
    """Factory for StubFetcher(translations=..., error=...)."""
    return StubFetcher


@pytest.fixture
def make_table():
    """Factory for random StringTables."""
    return random_table
