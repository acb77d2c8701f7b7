from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from heykids.domain.age_group import AgeGroup
from heykids.domain.discussion import DEFAULT_QUESTIONS, DiscussionQuestion, QuestionCategory


class DiscussionQuestionService:
    def __init__(self, questions: Optional[Iterable[DiscussionQuestion]] = None) -> None:
        self._questions = tuple(DEFAULT_QUESTIONS if questions is None else questions)

    def get_all_questions(self) -> list[DiscussionQuestion]:
        return list(self._questions)

    def get_questions_for(self, age_group: AgeGroup) -> list[DiscussionQuestion]:
        return [q for q in self._questions if q.age_group == age_group]

    def get_questions_by_category(self, category: QuestionCategory) -> list[DiscussionQuestion]:
        return [q for q in self._questions if q.category == category]

    def get_question(self, question_id: UUID) -> Optional[DiscussionQuestion]:
        return next((q for q in self._questions if q.id == question_id), None)
