from flask import Blueprint, current_app, jsonify, request

from livequiz.errors import QuizError
from livequiz.socketio_events import end_question, get_context, start_question

quiz = Blueprint('quiz', __name__)


def _namespace():
    return current_app.config.get('SOCKETIO_NAMESPACE', '/')


@quiz.route('/questions', methods=['GET'])
def list_questions():
    return jsonify(get_context().bank.to_list(include_answers=False))


@quiz.route('/state', methods=['GET'])
def get_state():
    ctx = get_context()
    state = ctx.session.public_state()
    state.update(ctx.scoreboard.to_dict())
    return jsonify(state)


@quiz.route('/start', methods=['POST'])
def start():
    """
    Starts the question at ``index`` and broadcasts it, same as the
    ``startQuestion`` socket event.
    """
    data = request.get_json(silent=True) or {}
    try:
        question = start_question(get_context(), data.get('index'), _namespace())
    except QuizError as exc:
        return jsonify({'error': exc.reason}), 400
    current_app.logger.info(f"[question-start] http start id={question.id}")
    return jsonify(question.public_view()), 200


@quiz.route('/end', methods=['POST'])
def end():
    summary = end_question(get_context(), _namespace())
    if summary is None:
        return jsonify({'ended': False}), 200
    payload = summary.to_dict()
    payload['ended'] = True
    return jsonify(payload), 200
