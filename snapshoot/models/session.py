"""
Game session model for SnapShoot.

A session is one run of play, from the first shot to game over. It
consumes the controller's outcomes, keeps the score and the streak of
consecutive misses, and decides when the game is over.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from statistics import mean

from snapshoot.models.shot import ShotOutcome, ShotRecord, ShotResult
from snapshoot.utils.constants import MAX_FAILS_ALLOWED


@dataclass
class GameSession:
    """A run of play.

    Attributes:
        start_time: When the session started.
        end_time: When the session ended (None while playing).
        records: Resolved shots in order.
        score: Goals scored.
        consecutive_fails: Misses since the last goal or continue.
        max_fails_allowed: Consecutive misses tolerated; one more ends the game.
    """
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    records: list[ShotRecord] = field(default_factory=list)
    score: int = 0
    consecutive_fails: int = 0
    max_fails_allowed: int = MAX_FAILS_ALLOWED

    def record(self, result: ShotResult, outcome: ShotOutcome) -> ShotRecord:
        """Add a resolved shot and update score and fail streak."""
        record = ShotRecord(result=result, outcome=outcome)
        self.records.append(record)
        if outcome == ShotOutcome.SCORED:
            self.score += 1
            self.consecutive_fails = 0
        else:
            self.consecutive_fails += 1
        if self.is_game_over and self.end_time is None:
            self.end_time = datetime.now()
        return record

    def continue_game(self):
        """Player chose to continue after a miss: clear the fail streak."""
        self.consecutive_fails = 0
        self.end_time = None

    @property
    def is_game_over(self) -> bool:
        return self.consecutive_fails > self.max_fails_allowed

    @property
    def num_shots(self) -> int:
        return len(self.records)

    @property
    def misses(self) -> int:
        return sum(1 for r in self.records if not r.scored)

    @property
    def duration_minutes(self) -> float:
        """Duration of the session in minutes."""
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds() / 60

    def get_stats(self) -> dict:
        """Compute aggregate statistics for the session."""
        if not self.records:
            return {}

        powers = [r.result.analysis.power for r in self.records]
        types = Counter(r.result.shot_type.value for r in self.records)

        return {
            "num_shots": self.num_shots,
            "score": self.score,
            "misses": self.misses,
            "accuracy": round(self.score / self.num_shots, 2),
            "avg_power": round(mean(powers), 2),
            "shot_types": dict(types),
            "duration_minutes": round(self.duration_minutes, 1),
        }
