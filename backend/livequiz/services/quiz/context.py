import time
from typing import Callable, Dict, Optional

from .question_bank import QuestionBank
from .scoreboard import ScoreBoard
from .session import DEFAULT_QUESTION_TIME_SEC, QuestionSession


class QuizContext:
    """Everything one running quiz owns, handed to every handler.

    Stored on the Flask app under ``app.extensions['livequiz']``.
    """

    def __init__(
        self,
        bank: QuestionBank,
        scheduler,
        duration: float = DEFAULT_QUESTION_TIME_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.bank = bank
        self.scoreboard = ScoreBoard()
        self.session = QuestionSession(self.scoreboard, scheduler, duration=duration, clock=clock)
        # socket sid -> display name declared on join
        self.players: Dict[str, str] = {}

    def join(self, sid: str, name: str) -> None:
        self.players[sid] = name
        self.scoreboard.ensure(name)

    def player_for(self, sid: str) -> Optional[str]:
        return self.players.get(sid)

    def forget(self, sid: str) -> Optional[str]:
        return self.players.pop(sid, None)
