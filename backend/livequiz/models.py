from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Question:
    id: Any
    text: str
    options: Tuple[str, ...]
    correct: str

    def public_view(self) -> Dict[str, Any]:
        """What players may see while the question is running."""
        return {
            'id': self.id,
            'text': self.text,
            'options': list(self.options),
        }

    def to_dict(self, include_answer: bool = True) -> Dict[str, Any]:
        data = self.public_view()
        if include_answer:
            data['correct'] = self.correct
        return data


@dataclass
class AnswerRecord:
    player: str
    option: str
    time_taken: float
    correct: bool
    # Not part of the broadcast form; handed back to the submitter only
    points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': self.player,
            'option': self.option,
            'timeTaken': self.time_taken,
            'correct': self.correct,
        }


@dataclass
class ScoreEntry:
    player: str
    score: int = 0
    last_latency: Optional[float] = None


@dataclass
class QuestionSummary:
    """Final tally of one question, produced when it ends."""

    question_id: Any
    question_text: str
    answers: List[AnswerRecord] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'question': {'id': self.question_id, 'text': self.question_text},
            'answers': [a.to_dict() for a in self.answers],
            'scores': dict(self.scores),
        }
