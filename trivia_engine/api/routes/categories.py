from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from trivia_engine.api.routes.helpers import require_caller
from trivia_engine.db.session import SessionLocal
from trivia_engine.game.games.service import list_categories

router = APIRouter(tags=["categories"])


class CategoryResponse(BaseModel):
    name: str
    active_questions: int = Field(ge=0)


@router.get("/categories", response_model=list[CategoryResponse])
async def get_categories(request: Request) -> list[CategoryResponse]:
    require_caller(request)
    async with SessionLocal.begin() as session:
        categories = await list_categories(session)
    return [
        CategoryResponse(name=category.name, active_questions=category.active_questions)
        for category in categories
    ]
