from __future__ import annotations

from enum import Enum


class AgeGroup(str, Enum):
    """Ordered audience bucket used for catalog filtering."""

    PRESCHOOLERS = "preschoolers"
    LITTLE_KIDS = "littleKids"
    BIG_KIDS = "bigKids"
    TWEENS = "tweens"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def age_range(self) -> str:
        return _AGE_RANGE[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAME[self]

    @property
    def description(self) -> str:
        return f"{self.emoji} {self.display_name} ({self.age_range})"

    def __str__(self) -> str:
        return self.description

    # str-mixin enums compare by value; age groups compare by declared order.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AgeGroup):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, AgeGroup):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, AgeGroup):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, AgeGroup):
            return NotImplemented
        return self.rank >= other.rank


_ORDER = [AgeGroup.PRESCHOOLERS, AgeGroup.LITTLE_KIDS, AgeGroup.BIG_KIDS, AgeGroup.TWEENS]

_EMOJI = {
    AgeGroup.PRESCHOOLERS: "🧸",
    AgeGroup.LITTLE_KIDS: "🎨",
    AgeGroup.BIG_KIDS: "🚀",
    AgeGroup.TWEENS: "🎭",
}

_AGE_RANGE = {
    AgeGroup.PRESCHOOLERS: "2-4",
    AgeGroup.LITTLE_KIDS: "5-7",
    AgeGroup.BIG_KIDS: "8-9",
    AgeGroup.TWEENS: "10-12",
}

_DISPLAY_NAME = {
    AgeGroup.PRESCHOOLERS: "Preschoolers",
    AgeGroup.LITTLE_KIDS: "Little Kids",
    AgeGroup.BIG_KIDS: "Big Kids",
    AgeGroup.TWEENS: "Tweens",
}
