import os

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _flag(name, default='0'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # Per-question answer window (seconds)
    QUESTION_TIME_SEC = float(os.environ.get('QUESTION_TIME_SEC', '15'))
    QUESTIONS_PATH = os.environ.get('QUESTIONS_PATH') or os.path.join(BASE_DIR, 'questions.json')
    PUBLIC_DIR = os.environ.get('PUBLIC_DIR') or os.path.join(BASE_DIR, 'public')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Off: the question list sent on connect omits the correct option
    QUESTION_LIST_INCLUDES_ANSWERS = _flag('QUESTION_LIST_INCLUDES_ANSWERS')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
