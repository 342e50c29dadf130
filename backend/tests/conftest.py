import os
import random
import sys
from types import SimpleNamespace

import pytest

# Ensure the backend root (containing the `creative_arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from creative_arena import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORAGE_BACKEND = 'sql'
    GENERATION_MODE = 'degraded'
    OPENAI_API_KEY = ''
    OPENAI_MODEL = 'gpt-4o'
    MIN_SUBMISSION_LENGTH = 10
    JUDGE_MIN_SOLUTION_LENGTH = 20
    JUDGE_CHALLENGER_WIN_PROBABILITY = 0.8
    RANDOM_SEED = 1234
    LOG_LEVEL = 'DEBUG'


class MemoryTestConfig(TestConfig):
    STORAGE_BACKEND = 'memory'


class FixedDraw(random.Random):
    """Seeded generator whose random() always returns the same draw."""

    def __init__(self, draw, seed=7):
        super().__init__(seed)
        self.draw = draw

    def random(self):
        return self.draw


class StubCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if self.replies else ''
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


class StubClient:
    """Stands in for openai.OpenAI: replies are returned (or raised) in order."""

    def __init__(self, *replies):
        self.completions = StubCompletions(replies)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture(params=['sql', 'memory'])
def flask_app(request):
    config = TestConfig if request.param == 'sql' else MemoryTestConfig
    application = create_app(config)
    with application.app_context():
        # Ensure models are imported so tables are created
        import creative_arena.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app, client):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=client,
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def lifecycle(flask_app):
    return flask_app.extensions['battle_lifecycle']


@pytest.fixture(params=['memory', 'sql'])
def store(request):
    from creative_arena.storage import InMemoryRecordStore, SqlRecordStore
    if request.param == 'memory':
        yield InMemoryRecordStore()
        return
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield SqlRecordStore()
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def memory_store():
    from creative_arena.storage import InMemoryRecordStore
    return InMemoryRecordStore()


@pytest.fixture()
def stub_client():
    return StubClient


@pytest.fixture()
def fixed_draw():
    return FixedDraw
