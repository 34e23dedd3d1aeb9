"""Quiz domain services: question bank, scoring, scoreboard and timers.

This package contains the core quiz mechanics that socket handlers and HTTP
routes call into, keeping transport concerns separated from the question
lifecycle.
"""

from .context import QuizContext

__all__ = ['QuizContext']
