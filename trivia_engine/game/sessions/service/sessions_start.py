from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.answer_records import AnswerRecord
from trivia_engine.db.repo.answer_records_repo import AnswerRecordsRepo
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.db.repo.rounds_repo import GameRoundsRepo
from trivia_engine.game.assignment.service import is_assignment_set_complete
from trivia_engine.game.constants import (
    GAME_STATUS_IN_PROGRESS,
    GAME_STATUS_SETUP,
    ROUND_STATUS_IN_PROGRESS,
    SESSION_STATUS_IN_PROGRESS,
    SESSION_STATUS_SETUP,
)
from trivia_engine.game.errors import (
    AssignmentsIncompleteError,
    GameNotFoundError,
    InvalidTransitionError,
)
from trivia_engine.game.sessions.types import StartGameResult

from .internal import _build_question_view, _load_owned_session, _to_session_view, _transition

logger = structlog.get_logger(__name__)


async def start_game(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    now_utc: datetime,
) -> StartGameResult:
    game_session = await _load_owned_session(
        session,
        session_id=session_id,
        user_id=user_id,
        for_update=True,
    )
    if game_session.status != SESSION_STATUS_SETUP:
        raise InvalidTransitionError(f"{game_session.status} -> {SESSION_STATUS_IN_PROGRESS}")

    game = await GamesRepo.get_by_id_for_update(session, game_session.game_id)
    if game is None:
        raise GameNotFoundError
    if game.status != GAME_STATUS_SETUP:
        raise InvalidTransitionError(f"game is {game.status}")
    counts_by_round = await RoundQuestionsRepo.count_by_round_number(session, game_id=game.id)
    if not is_assignment_set_complete(game, counts_by_round):
        raise AssignmentsIncompleteError

    assignments = await RoundQuestionsRepo.list_for_game(session, game_id=game.id)
    await AnswerRecordsRepo.create_many(
        session,
        records=[
            AnswerRecord(
                id=uuid4(),
                session_id=game_session.id,
                round_question_id=assignment.id,
                question_id=assignment.question_id,
                round_number=round_number,
                question_order=assignment.question_order,
            )
            for round_number, assignment in assignments
        ],
    )

    await _transition(session, game_session=game_session, to_status=SESSION_STATUS_IN_PROGRESS)
    game_session.started_at = now_utc
    game_session.current_round = 1
    game_session.current_question_index = 0
    game_session.total_score = 0
    await GamesRepo.set_status(
        session,
        game_id=game.id,
        from_statuses=(GAME_STATUS_SETUP,),
        to_status=GAME_STATUS_IN_PROGRESS,
        now_utc=now_utc,
    )
    await GameRoundsRepo.set_status(
        session,
        game_id=game.id,
        round_number=1,
        status=ROUND_STATUS_IN_PROGRESS,
    )
    await session.flush()

    logger.info(
        "game_session_started",
        session_id=str(game_session.id),
        game_id=str(game.id),
        user_id=user_id,
        total_questions=len(assignments),
    )
    return StartGameResult(
        session=_to_session_view(game_session),
        first_question=await _build_question_view(session, game_session=game_session),
    )
