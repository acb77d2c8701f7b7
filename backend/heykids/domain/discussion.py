from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID, uuid5

from heykids.domain.age_group import AgeGroup

_QUESTION_NAMESPACE = UUID("8d3c5a52-5f0e-4b7e-9f4e-6a1f3c2b9d10")


class QuestionCategory(str, Enum):
    EMOTIONS = "emotions"
    MORALS = "morals"
    CREATIVITY = "creativity"
    LEARNING = "learning"
    FAMILY = "family"
    FRIENDSHIP = "friendship"
    ADVENTURE = "adventure"
    GENERAL = "general"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class QuestionDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def question_id_for(text: str) -> UUID:
    """Stable id so saved answers keep pointing at the same built-in question."""
    return uuid5(_QUESTION_NAMESPACE, (text or "").strip().lower())


@dataclass(frozen=True)
class DiscussionQuestion:
    text: str
    category: QuestionCategory
    difficulty: QuestionDifficulty
    age_group: AgeGroup
    id: UUID = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.id is None:
            object.__setattr__(self, "id", question_id_for(self.text))


DEFAULT_QUESTIONS: tuple[DiscussionQuestion, ...] = (
    DiscussionQuestion(
        text="What was your favorite part of the movie?",
        category=QuestionCategory.EMOTIONS,
        difficulty=QuestionDifficulty.EASY,
        age_group=AgeGroup.PRESCHOOLERS,
    ),
    DiscussionQuestion(
        text="Which animal or character would you like to be friends with?",
        category=QuestionCategory.FRIENDSHIP,
        difficulty=QuestionDifficulty.EASY,
        age_group=AgeGroup.PRESCHOOLERS,
    ),
    DiscussionQuestion(
        text="How do you think the character felt when they faced their challenge?",
        category=QuestionCategory.EMOTIONS,
        difficulty=QuestionDifficulty.MEDIUM,
        age_group=AgeGroup.LITTLE_KIDS,
    ),
    DiscussionQuestion(
        text="Who helped the hero, and how did they help?",
        category=QuestionCategory.FAMILY,
        difficulty=QuestionDifficulty.EASY,
        age_group=AgeGroup.LITTLE_KIDS,
    ),
    DiscussionQuestion(
        text="What would you have done differently if you were the main character?",
        category=QuestionCategory.CREATIVITY,
        difficulty=QuestionDifficulty.MEDIUM,
        age_group=AgeGroup.BIG_KIDS,
    ),
    DiscussionQuestion(
        text="Where would you go if you could join the adventure?",
        category=QuestionCategory.ADVENTURE,
        difficulty=QuestionDifficulty.MEDIUM,
        age_group=AgeGroup.BIG_KIDS,
    ),
    DiscussionQuestion(
        text="What lesson do you think the movie was trying to teach us?",
        category=QuestionCategory.MORALS,
        difficulty=QuestionDifficulty.HARD,
        age_group=AgeGroup.TWEENS,
    ),
    DiscussionQuestion(
        text="Did you learn something new about the world from this movie?",
        category=QuestionCategory.LEARNING,
        difficulty=QuestionDifficulty.HARD,
        age_group=AgeGroup.TWEENS,
    ),
)
