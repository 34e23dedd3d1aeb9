import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence

from livequiz.errors import InvalidQuestionIndex, QuestionBankLoadFailure
from livequiz.models import Question

logger = logging.getLogger(__name__)


class QuestionBank:
    """Read-only, ordered collection of questions."""

    def __init__(self, questions: Sequence[Question] = ()) -> None:
        self._questions = tuple(questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def get(self, index: Any) -> Question:
        # bool is an int subclass; True must not select question 1
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidQuestionIndex(f'Question index must be an integer, got {index!r}.')
        if not 0 <= index < len(self._questions):
            raise InvalidQuestionIndex(f'No question at index {index}.')
        return self._questions[index]

    def to_list(self, include_answers: bool = False) -> List[Dict[str, Any]]:
        return [q.to_dict(include_answer=include_answers) for q in self._questions]


def parse_question(record: Any, position: int) -> Question:
    if not isinstance(record, dict):
        raise QuestionBankLoadFailure(f'Question #{position} is not an object.')
    text = record.get('text')
    options = record.get('options')
    correct = record.get('correct')
    if not isinstance(text, str) or not text:
        raise QuestionBankLoadFailure(f'Question #{position} has no text.')
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise QuestionBankLoadFailure(f'Question #{position} options must be a list of strings.')
    if not isinstance(correct, str):
        raise QuestionBankLoadFailure(f'Question #{position} has no correct option.')
    qid = record.get('id')
    return Question(
        id=position if qid is None else qid,
        text=text,
        options=tuple(options),
        correct=correct,
    )


def read_question_bank(path: str) -> QuestionBank:
    """Strict loader: raises QuestionBankLoadFailure on any problem."""
    try:
        with open(path, encoding='utf-8') as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as exc:
        raise QuestionBankLoadFailure(f'Could not read {path}: {exc}') from exc
    if not isinstance(raw, list):
        raise QuestionBankLoadFailure(f'{path} must contain a list of questions.')
    return QuestionBank(parse_question(record, i) for i, record in enumerate(raw))


def load_question_bank(path: Optional[str]) -> QuestionBank:
    """Load the bank for startup, falling back to an empty one on failure."""
    if not path:
        logger.warning('[bank-load] no question file configured, starting with an empty bank')
        return QuestionBank()
    try:
        bank = read_question_bank(path)
    except QuestionBankLoadFailure as exc:
        logger.error(f'[bank-load] failed, starting with an empty bank: {exc.reason}')
        return QuestionBank()
    logger.info(f'[bank-load] loaded {len(bank)} questions from {path}')
    return bank
