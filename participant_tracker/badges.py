"""Badge lookup for participant scores."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Badge:
    """A contiguous inclusive score band mapped to one badge."""

    min: float
    max: float
    emoji: str
    title: str

    def contains(self, score: float) -> bool:
        return self.min <= score <= self.max

    def __str__(self) -> str:
        return f"{self.emoji} {self.title}"


# Ascending, non-overlapping; the last band is unbounded above.
BADGES: tuple[Badge, ...] = (
    Badge(0, 9, "🌱", "새싹"),
    Badge(10, 19, "🌿", "성장중"),
    Badge(20, 29, "🌳", "나무"),
    Badge(30, 39, "🌲", "성숙한 나무"),
    Badge(40, 49, "🌴", "야자나무"),
    Badge(50, 59, "🎄", "크리스마스 트리"),
    Badge(60, 69, "🌸", "꽃"),
    Badge(70, 79, "🌺", "벚꽃"),
    Badge(80, 89, "🌹", "장미"),
    Badge(90, 99, "🌻", "해바라기"),
    Badge(100, math.inf, "☀️", "태양"),
)


def find_badge(score: float) -> Badge | None:
    """Return the first band containing ``score``, or None."""
    for badge in BADGES:
        if badge.contains(score):
            return badge
    return None


def get_badge(score: float) -> str:
    """
    Get the badge display string for a score.

    Args:
        score: Participant score (non-negative in practice)

    Returns:
        "<emoji> <title>" for the matching band, or "" when no band matches
        (negative scores)

    Example:
        >>> get_badge(5)
        '🌱 새싹'
    """
    badge = find_badge(score)
    return str(badge) if badge else ""
