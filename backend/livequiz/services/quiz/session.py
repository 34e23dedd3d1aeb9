import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Set

from livequiz.errors import DuplicateAnswer, NoActiveQuestion, NotJoined
from livequiz.models import AnswerRecord, Question, QuestionSummary
from .scheduler import DeadlineHandle
from .scoreboard import ScoreBoard
from .scoring import points_for_answer

logger = logging.getLogger(__name__)

IDLE = 'idle'
ACTIVE = 'active'

DEFAULT_QUESTION_TIME_SEC = 15.0


class QuestionSession:
    """The single active-question state machine.

    idle -> active on ``start``; active -> idle on ``end`` or when the
    deadline fires. Starting while active supersedes the running question
    without producing a summary for it.

    Every transition runs under one lock, so the order in which submissions
    acquire it is the arrival order used for ranking.
    """

    def __init__(
        self,
        scoreboard: ScoreBoard,
        scheduler,
        duration: float = DEFAULT_QUESTION_TIME_SEC,
        clock: Callable[[], float] = time.monotonic,
        on_expire: Optional[Callable[[QuestionSummary], None]] = None,
    ) -> None:
        self.scoreboard = scoreboard
        self.duration = duration
        self.on_expire = on_expire
        self._scheduler = scheduler
        self._clock = clock
        self._lock = threading.RLock()
        self._question: Optional[Question] = None
        self._started_at: Optional[float] = None
        self._answers: List[AnswerRecord] = []
        self._answered: Set[str] = set()
        self._deadline: Optional[DeadlineHandle] = None

    @property
    def state(self) -> str:
        return ACTIVE if self._question is not None else IDLE

    @property
    def active_question(self) -> Optional[Question]:
        return self._question

    @property
    def answers(self) -> List[AnswerRecord]:
        with self._lock:
            return list(self._answers)

    @property
    def deadline(self) -> Optional[DeadlineHandle]:
        return self._deadline

    def start(self, question: Question) -> None:
        with self._lock:
            superseded = self._question
            self._cancel_deadline()
            self._question = question
            self._answers = []
            self._answered = set()
            self._started_at = self._clock()
            self._deadline = self._scheduler.call_later(self.duration, self._expire)
        if superseded is not None:
            logger.info(f'[question-start] superseding id={superseded.id} without reveal')
        logger.info(f'[question-start] id={question.id} duration={self.duration}s')

    def submit(self, player: Optional[str], option: Any) -> AnswerRecord:
        """Record ``player``'s answer and award its points.

        Returns the stored record; ``record.points`` is what it earned.
        """
        if not player:
            raise NotJoined()
        with self._lock:
            if self._question is None:
                raise NoActiveQuestion()
            if player in self._answered:
                raise DuplicateAnswer()
            time_taken = max(0.0, self._clock() - self._started_at)
            correct = option == self._question.correct
            # Rank against the log before this answer joins it
            points = points_for_answer(self._answers, correct)
            record = AnswerRecord(
                player=player,
                option=option,
                time_taken=time_taken,
                correct=correct,
                points=points,
            )
            self._answers.append(record)
            self._answered.add(player)
            self.scoreboard.record_latency(player, time_taken)
            if points:
                self.scoreboard.award(player, points)
        logger.info(f'[answer] player={player} option={option!r} correct={correct} points={points} t={time_taken:.3f}s')
        return record

    def end(self) -> Optional[QuestionSummary]:
        """End the active question. Returns None when already idle."""
        with self._lock:
            return self._finish()

    def remaining_seconds(self) -> float:
        with self._lock:
            if self._question is None:
                return 0.0
            return max(0.0, self.duration - (self._clock() - self._started_at))

    def public_state(self) -> Dict[str, Any]:
        with self._lock:
            question = self._question
            return {
                'active': question is not None,
                'question': question.public_view() if question else None,
                'answered': len(self._answers),
                'remaining': round(self.remaining_seconds(), 3),
            }

    def _finish(self) -> Optional[QuestionSummary]:
        if self._question is None:
            return None
        self._cancel_deadline()
        summary = QuestionSummary(
            question_id=self._question.id,
            question_text=self._question.text,
            answers=list(self._answers),
            scores=self.scoreboard.scores(),
        )
        self._question = None
        self._started_at = None
        self._answers = []
        self._answered = set()
        logger.info(f'[question-end] id={summary.question_id} answers={len(summary.answers)}')
        return summary

    def _cancel_deadline(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    def _expire(self, handle: DeadlineHandle) -> None:
        with self._lock:
            if handle is not self._deadline:
                logger.info('[timer-stale] deadline no longer current, ignoring')
                return
            logger.info(f'[timer-fire] deadline reached after {handle.delay}s')
            summary = self._finish()
        if summary is not None and self.on_expire is not None:
            self.on_expire(summary)
