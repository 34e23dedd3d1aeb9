import json
import os
import sys
import pytest

# Ensure the backend root (containing the `livequiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from livequiz import create_app, socketio
from livequiz.services.quiz.scheduler import DeadlineHandle
from livequiz.services.quiz.scoreboard import ScoreBoard
from livequiz.services.quiz.session import QuestionSession


SAMPLE_QUESTIONS = [
    {'id': 1, 'text': '2+2?', 'options': ['3', '4'], 'correct': '4'},
    {'id': 2, 'text': 'Capital of France?', 'options': ['Paris', 'Rome', 'Madrid'], 'correct': 'Paris'},
]


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class ManualScheduler:
    """Deadline scheduler that only fires when a test says so."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay, callback):
        handle = DeadlineHandle(delay, callback)
        self.handles.append(handle)
        return handle

    def pending(self):
        return [h for h in self.handles if h.pending]

    def fire_pending(self):
        return sum(1 for h in list(self.handles) if h.fire())


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    QUESTION_TIME_SEC = 15
    QUESTIONS_PATH = None
    PUBLIC_DIR = None
    CORS_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    QUESTION_LIST_INCLUDES_ANSWERS = False
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def session(scheduler, clock):
    return QuestionSession(ScoreBoard(), scheduler, duration=15, clock=clock)


@pytest.fixture()
def bank_path(tmp_path):
    path = tmp_path / 'questions.json'
    path.write_text(json.dumps(SAMPLE_QUESTIONS), encoding='utf-8')
    return str(path)


@pytest.fixture()
def public_dir(tmp_path):
    public = tmp_path / 'public'
    public.mkdir()
    for page in ('index', 'admin', 'player', 'projector'):
        (public / f'{page}.html').write_text(f'<h1>{page}</h1>', encoding='utf-8')
    return str(public)


@pytest.fixture()
def config_class(bank_path, public_dir):
    class _Config(TestConfig):
        QUESTIONS_PATH = bank_path
        PUBLIC_DIR = public_dir
    return _Config


@pytest.fixture()
def flask_app(config_class, scheduler, clock):
    application = create_app(config_class, scheduler=scheduler, clock=clock)
    with application.app_context():
        yield application


@pytest.fixture()
def quiz(flask_app):
    return flask_app.extensions['livequiz']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, namespace='/')
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            test_client.disconnect(namespace='/')
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()
