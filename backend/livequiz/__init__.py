import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click

from livequiz.config import Config

socketio = SocketIO(async_mode=None)


def _cors_origins(value):
    if isinstance(value, str) and value != '*':
        return [o.strip() for o in value.split(',') if o.strip()]
    return value


def create_app(config_class=Config, scheduler=None, clock=None):
    """Build the quiz server.

    ``scheduler`` and ``clock`` replace the Socket.IO deadline scheduler and
    the monotonic clock; tests use them to drive time by hand.
    """
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))
    # Service modules log under the same hierarchy as the app logger
    logging.getLogger('livequiz.services').setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _cors_origins(flask_app.config.get('CORS_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from livequiz.services.quiz import QuizContext
    from livequiz.services.quiz.question_bank import load_question_bank
    from livequiz.services.quiz.scheduler import SocketIOScheduler

    bank = load_question_bank(flask_app.config.get('QUESTIONS_PATH'))
    context_kwargs = {'duration': float(flask_app.config.get('QUESTION_TIME_SEC', 15))}
    if clock is not None:
        context_kwargs['clock'] = clock
    context = QuizContext(bank, scheduler or SocketIOScheduler(socketio), **context_kwargs)
    flask_app.extensions['livequiz'] = context

    if flask_app.config.get('QUESTION_LIST_INCLUDES_ANSWERS'):
        flask_app.logger.warning(
            "QUESTION_LIST_INCLUDES_ANSWERS is on: every client receives the correct answers on connect"
        )

    from livequiz.main import main
    flask_app.register_blueprint(main)

    from livequiz.api.quiz import quiz
    flask_app.register_blueprint(quiz, url_prefix='/api/quiz')

    from livequiz.socketio_events import make_expiry_listener, register_socketio_handlers
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    register_socketio_handlers(namespace=namespace)
    context.session.on_expire = make_expiry_listener(flask_app, namespace)

    @click.command('questions')
    def list_questions_command():
        """Lists the loaded question bank, marking the correct option."""
        if not len(context.bank):
            click.echo('Question bank is empty.')
            return
        for index, question in enumerate(context.bank):
            click.echo(f'[{index}] (id={question.id}) {question.text}')
            for option in question.options:
                marker = '*' if option == question.correct else ' '
                click.echo(f'    {marker} {option}')

    flask_app.cli.add_command(list_questions_command)

    return flask_app
