"""
Service layer for questions addressed to the exhibition organisers.
"""

from __future__ import annotations

import logging
from typing import List

from ..core.identity import generate_id, utcnow
from ..core.storage import Storage
from ..schemas.question import QuestionCreate, QuestionRead
from .errors import require

logger = logging.getLogger(__name__)


class QuestionService:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def ask_question(self, data: QuestionCreate) -> str:
        require(data.question, data.useremail)
        question = QuestionRead(
            id=generate_id(),
            question=data.question,
            useremail=data.useremail,
            created_at=utcnow(),
        )
        self.storage.questions.insert(question.id, question)
        logger.info("Stored question %s from %s", question.id, data.useremail)
        return "Your question has been received. We will provide feedback as soon as possible."

    async def list_questions(self) -> List[QuestionRead]:
        return self.storage.questions.values()
