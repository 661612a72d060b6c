from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from trivia_engine.api.routes.helpers import require_caller
from trivia_engine.db.session import SessionLocal
from trivia_engine.game.stats.service import get_user_stats

router = APIRouter(tags=["players"])


class RecentGameResponse(BaseModel):
    session_id: UUID
    game_id: UUID
    total_score: int
    ended_at: datetime | None = None


class PlayerStatsResponse(BaseModel):
    user_id: int
    games_completed: int = Field(ge=0)
    games_hosted: int = Field(ge=0)
    total_score: int = Field(ge=0)
    best_score: int = Field(ge=0)
    correct_answers: int = Field(ge=0)
    questions_answered: int = Field(ge=0)
    average_accuracy: float = Field(ge=0.0, le=100.0)
    total_play_ms: int = Field(ge=0)
    favorite_category: str | None = None
    last_completed_at: datetime | None = None
    recent_games: list[RecentGameResponse]


@router.get("/players/me/stats", response_model=PlayerStatsResponse)
async def get_my_stats(request: Request) -> PlayerStatsResponse:
    user_id = require_caller(request)
    async with SessionLocal.begin() as session:
        stats = await get_user_stats(session, user_id=user_id)
    return PlayerStatsResponse(
        user_id=stats.user_id,
        games_completed=stats.games_completed,
        games_hosted=stats.games_hosted,
        total_score=stats.total_score,
        best_score=stats.best_score,
        correct_answers=stats.correct_answers,
        questions_answered=stats.questions_answered,
        average_accuracy=stats.average_accuracy,
        total_play_ms=stats.total_play_ms,
        favorite_category=stats.favorite_category,
        last_completed_at=stats.last_completed_at,
        recent_games=[
            RecentGameResponse(
                session_id=game.session_id,
                game_id=game.game_id,
                total_score=game.total_score,
                ended_at=game.ended_at,
            )
            for game in stats.recent_games
        ],
    )
