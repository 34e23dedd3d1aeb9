"""Recoverable quiz errors.

Every error carries a ``reason`` that is safe to send back to the client
that triggered it. None of them should ever take down the server.
"""


class QuizError(Exception):
    reason = 'Request could not be processed.'

    def __init__(self, reason=None):
        if reason:
            self.reason = reason
        super().__init__(self.reason)


class NotJoined(QuizError):
    reason = 'Please join with a name before answering.'


class NoActiveQuestion(QuizError):
    reason = 'There is no active question right now.'


class DuplicateAnswer(QuizError):
    reason = 'You already answered this question.'


class InvalidQuestionIndex(QuizError):
    reason = 'No question exists at that index.'


class QuestionBankLoadFailure(QuizError):
    reason = 'Question bank could not be loaded.'
