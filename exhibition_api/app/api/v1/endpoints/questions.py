"""
Question endpoints for API v1.

Visitors submit general questions with a reply email; organisers read
them back in submission order.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from exhibition_api.app.api.deps import get_registry, http_error
from exhibition_api.app.schemas.common import Confirmation
from exhibition_api.app.schemas.question import QuestionCreate, QuestionRead
from exhibition_api.app.services.errors import RegistryError
from exhibition_api.app.services.registry import ExhibitionRegistry

router = APIRouter()


@router.post("/", response_model=Confirmation, status_code=status.HTTP_201_CREATED)
async def ask_question(
    question: QuestionCreate,
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    try:
        message = await registry.questions.ask_question(question)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.get("/", response_model=List[QuestionRead])
async def list_questions(registry: ExhibitionRegistry = Depends(get_registry)) -> List[QuestionRead]:
    return await registry.questions.list_questions()
