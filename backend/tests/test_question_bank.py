import json

import pytest

from livequiz.errors import InvalidQuestionIndex, QuestionBankLoadFailure
from livequiz.services.quiz.question_bank import (
    QuestionBank,
    load_question_bank,
    read_question_bank,
)


def _write(tmp_path, payload):
    path = tmp_path / 'bank.json'
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding='utf-8')
    return str(path)


def test_loads_questions_in_order(bank_path):
    bank = load_question_bank(bank_path)
    assert len(bank) == 2
    first = bank.get(0)
    assert first.id == 1
    assert first.options == ('3', '4')
    assert first.correct == '4'
    assert [q.text for q in bank] == ['2+2?', 'Capital of France?']


def test_missing_id_falls_back_to_position(tmp_path):
    path = _write(tmp_path, [
        {'text': 'a?', 'options': ['x', 'y'], 'correct': 'x'},
        {'text': 'b?', 'options': ['x', 'y'], 'correct': 'y'},
    ])
    bank = read_question_bank(path)
    assert [q.id for q in bank] == [0, 1]


@pytest.mark.parametrize('payload', [
    'not json',
    {'text': 'not a list'},
    [{'text': 'no options', 'correct': 'x'}],
    [{'text': 'bad options', 'options': [1, 2], 'correct': '1'}],
    [{'options': ['x'], 'correct': 'x'}],
    ['just a string'],
])
def test_malformed_source_raises_in_strict_loader(tmp_path, payload):
    with pytest.raises(QuestionBankLoadFailure):
        read_question_bank(_write(tmp_path, payload))


def test_failed_load_degrades_to_empty_bank(tmp_path, caplog):
    bank = load_question_bank(str(tmp_path / 'missing.json'))
    assert len(bank) == 0
    assert any('[bank-load]' in r.message for r in caplog.records)
    assert len(load_question_bank(_write(tmp_path, '[{'))) == 0
    assert len(load_question_bank(None)) == 0


@pytest.mark.parametrize('index', [-1, 2, 99, '0', None, True, 1.0])
def test_get_rejects_bad_indexes(bank_path, index):
    bank = load_question_bank(bank_path)
    with pytest.raises(InvalidQuestionIndex):
        bank.get(index)


def test_empty_bank_rejects_every_index():
    with pytest.raises(InvalidQuestionIndex):
        QuestionBank().get(0)


def test_to_list_withholds_answers_by_default(bank_path):
    bank = load_question_bank(bank_path)
    assert all('correct' not in q for q in bank.to_list())
    assert bank.to_list(include_answers=True)[0]['correct'] == '4'
