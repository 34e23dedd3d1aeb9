from typing import Dict, Optional

from livequiz.models import ScoreEntry


class ScoreBoard:
    """Running totals per player. Entries are never removed."""

    def __init__(self) -> None:
        self._entries: Dict[str, ScoreEntry] = {}

    def ensure(self, player: str) -> ScoreEntry:
        entry = self._entries.get(player)
        if entry is None:
            entry = ScoreEntry(player=player)
            self._entries[player] = entry
        return entry

    def award(self, player: str, points: int) -> int:
        if points < 0:
            raise ValueError('points must not be negative')
        entry = self.ensure(player)
        entry.score += points
        return entry.score

    def record_latency(self, player: str, seconds: float) -> None:
        self.ensure(player).last_latency = seconds

    def score_of(self, player: str) -> int:
        entry = self._entries.get(player)
        return entry.score if entry else 0

    def latency_of(self, player: str) -> Optional[float]:
        entry = self._entries.get(player)
        return entry.last_latency if entry else None

    def __contains__(self, player: str) -> bool:
        return player in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def scores(self) -> Dict[str, int]:
        return {name: e.score for name, e in list(self._entries.items())}

    def latencies(self) -> Dict[str, float]:
        return {
            name: round(e.last_latency, 3)
            for name, e in list(self._entries.items())
            if e.last_latency is not None
        }

    def to_dict(self) -> Dict[str, Dict]:
        """Payload for the ``scoreUpdate`` event."""
        return {'scores': self.scores(), 'lastLatencies': self.latencies()}
