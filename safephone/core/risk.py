from enum import Enum
from typing import Iterable


class RiskLevel(str, Enum):
    """
    Tri-state severity shared by every classifier.
    Ordered by severity: SAFE < WARNING < DANGER.
    """
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def rank(self) -> int:
        return _RANKS[self.value]

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Shared thresholds for the additive URL and app scores"""
        if score >= DANGER_THRESHOLD:
            return cls.DANGER
        if score >= WARNING_THRESHOLD:
            return cls.WARNING
        return cls.SAFE


_RANKS = {"safe": 0, "warning": 1, "danger": 2}

DANGER_THRESHOLD = 4
WARNING_THRESHOLD = 2


def worst(levels: Iterable[RiskLevel]) -> RiskLevel:
    """Most severe level in levels (SAFE when empty)"""
    return max(levels, default=RiskLevel.SAFE)
