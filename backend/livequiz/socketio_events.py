from flask import current_app, request
from flask_socketio import emit

from livequiz import socketio
from livequiz.errors import QuizError
from livequiz.models import QuestionSummary
from livequiz.services.quiz import QuizContext


def get_context() -> QuizContext:
    return current_app.extensions['livequiz']


def _namespace() -> str:
    return current_app.config.get('SOCKETIO_NAMESPACE', '/')


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


# ---- Operations shared by socket handlers and HTTP routes ----

def broadcast_scores(ctx: QuizContext, namespace: str) -> None:
    socketio.emit('scoreUpdate', ctx.scoreboard.to_dict(), namespace=namespace)


def start_question(ctx: QuizContext, index, namespace: str = '/'):
    """Start ``bank[index]`` and announce it. Raises InvalidQuestionIndex."""
    question = ctx.bank.get(index)
    ctx.session.start(question)
    socketio.emit('newQuestion', question.public_view(), namespace=namespace)
    broadcast_scores(ctx, namespace)
    return question


def end_question(ctx: QuizContext, namespace: str = '/'):
    """End the active question and reveal it. No-op when nothing is running."""
    summary = ctx.session.end()
    if summary is not None:
        socketio.emit('questionEnded', summary.to_dict(), namespace=namespace)
    return summary


def make_expiry_listener(app, namespace: str):
    """Build the callback the session runs when a deadline ends a question.

    It runs on a background task, outside any request context.
    """
    def _on_expire(summary: QuestionSummary) -> None:
        app.logger.info(f"[question-end] id={summary.question_id} ended by deadline")
        socketio.emit('questionEnded', summary.to_dict(), namespace=namespace)

    return _on_expire


# ---- Socket handlers ----

def _reject(exc: QuizError) -> None:
    current_app.logger.info(f"[rejected] sid={_get_sid()} {type(exc).__name__}: {exc.reason}")
    emit('errorMessage', exc.reason)


def handle_connect(auth=None):
    ctx = get_context()
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    include_answers = bool(current_app.config.get('QUESTION_LIST_INCLUDES_ANSWERS'))
    emit('questionsList', ctx.bank.to_list(include_answers=include_answers))
    emit('scoreUpdate', ctx.scoreboard.to_dict())


def handle_disconnect(reason=None):
    # The score entry stays; only the socket's identity is dropped
    name = get_context().forget(_get_sid())
    current_app.logger.info(f"[disconnect] sid={_get_sid()} player={name}")


def handle_join(name):
    if not isinstance(name, str) or not name.strip():
        return
    ctx = get_context()
    name = name.strip()
    ctx.join(_get_sid(), name)
    current_app.logger.info(f"[join] sid={_get_sid()} player={name}")
    broadcast_scores(ctx, _namespace())


def handle_start_question(index):
    try:
        question = start_question(get_context(), index, _namespace())
    except QuizError as exc:
        _reject(exc)
        return
    current_app.logger.info(f"[question-start] admin sent id={question.id} text={question.text!r}")


def handle_end_question(data=None):
    end_question(get_context(), _namespace())


def handle_submit_answer(option):
    ctx = get_context()
    try:
        record = ctx.session.submit(ctx.player_for(_get_sid()), option)
    except QuizError as exc:
        _reject(exc)
        return
    emit('yourPoints', {'points': record.points})
    namespace = _namespace()
    broadcast_scores(ctx, namespace)
    socketio.emit(
        'answerUpdate',
        {'player': record.player, 'option': record.option, 'correct': record.correct},
        namespace=namespace,
    )


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    ``sendQuestion`` is kept as an alias of ``startQuestion`` for older
    admin pages.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join', handle_join, namespace=namespace)
    socketio.on_event('startQuestion', handle_start_question, namespace=namespace)
    socketio.on_event('sendQuestion', handle_start_question, namespace=namespace)
    socketio.on_event('endQuestion', handle_end_question, namespace=namespace)
    socketio.on_event('submitAnswer', handle_submit_answer, namespace=namespace)
