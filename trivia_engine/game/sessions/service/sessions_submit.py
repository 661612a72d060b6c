from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.repo.answer_records_repo import AnswerRecordsRepo
from trivia_engine.db.repo.questions_repo import QuestionsRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.db.repo.rounds_repo import GameRoundsRepo
from trivia_engine.game.constants import (
    MAX_ANSWER_LENGTH,
    ROUND_STATUS_COMPLETED,
    ROUND_STATUS_IN_PROGRESS,
    SESSION_STATUS_IN_PROGRESS,
)
from trivia_engine.game.errors import (
    AnswerAlreadySubmittedError,
    AssignmentNotFoundError,
    QuestionNotFoundError,
    QuestionNotInCurrentRoundError,
    QuestionOutOfOrderError,
    SessionNotInProgressError,
    ValidationError,
)
from trivia_engine.game.questions.bank import to_bank_question
from trivia_engine.game.questions.presentation import is_correct_answer
from trivia_engine.game.sessions.types import AnswerResult

from .internal import _build_question_view, _finish_session, _load_owned_session, _to_session_view

logger = structlog.get_logger(__name__)


async def _advance_pointers(
    session: AsyncSession,
    *,
    game_session: GameSession,
    now_utc: datetime,
) -> tuple[bool, bool]:
    """Moves the session to its next open question; returns (round_complete, game_complete)."""
    answered_in_round = await AnswerRecordsRepo.count_answered_in_round(
        session,
        session_id=game_session.id,
        round_number=game_session.current_round,
    )
    if answered_in_round < game_session.questions_per_round:
        game_session.current_question_index = answered_in_round
        return False, False

    finished_round = game_session.current_round
    await GameRoundsRepo.set_status(
        session,
        game_id=game_session.game_id,
        round_number=finished_round,
        status=ROUND_STATUS_COMPLETED,
    )
    game_session.current_question_index = 0
    game_session.current_round = finished_round + 1
    if finished_round >= game_session.total_rounds:
        await _finish_session(session, game_session=game_session, now_utc=now_utc)
        return True, True

    await GameRoundsRepo.set_status(
        session,
        game_id=game_session.game_id,
        round_number=game_session.current_round,
        status=ROUND_STATUS_IN_PROGRESS,
    )
    logger.info(
        "game_session_round_completed",
        session_id=str(game_session.id),
        round_number=finished_round,
        total_score=game_session.total_score,
    )
    return True, False


async def submit_answer(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
    assignment_id: UUID,
    user_answer: str,
    time_to_answer_ms: int,
    now_utc: datetime,
) -> AnswerResult:
    if time_to_answer_ms < 0:
        raise ValidationError("time_to_answer_ms must not be negative")
    if len(user_answer) > MAX_ANSWER_LENGTH:
        raise ValidationError(f"answer must be at most {MAX_ANSWER_LENGTH} characters")

    game_session = await _load_owned_session(
        session,
        session_id=session_id,
        user_id=user_id,
        for_update=True,
    )
    if game_session.status != SESSION_STATUS_IN_PROGRESS:
        raise SessionNotInProgressError

    assignment = await RoundQuestionsRepo.get_by_id(session, assignment_id)
    if assignment is None or assignment.game_id != game_session.game_id:
        raise AssignmentNotFoundError
    game_round = await GameRoundsRepo.get_by_id(session, assignment.round_id)
    if game_round is None or game_round.round_number != game_session.current_round:
        raise QuestionNotInCurrentRoundError
    expected_order = game_session.current_question_index + 1
    if assignment.question_order < expected_order:
        raise AnswerAlreadySubmittedError
    if assignment.question_order > expected_order:
        raise QuestionOutOfOrderError

    record = await QuestionsRepo.get_by_id(session, assignment.question_id)
    if record is None:
        raise QuestionNotFoundError
    question = to_bank_question(record)
    is_correct = is_correct_answer(question, user_answer)

    claimed = await AnswerRecordsRepo.try_close(
        session,
        session_id=game_session.id,
        round_question_id=assignment.id,
        user_answer=user_answer,
        is_correct=is_correct,
        time_to_answer_ms=time_to_answer_ms,
        answered_at=now_utc,
    )
    if not claimed:
        logger.info(
            "answer_rejected_already_submitted",
            session_id=str(game_session.id),
            assignment_id=str(assignment.id),
        )
        raise AnswerAlreadySubmittedError

    game_session.total_score = await AnswerRecordsRepo.count_correct(
        session,
        session_id=game_session.id,
    )
    round_complete, game_complete = await _advance_pointers(
        session,
        game_session=game_session,
        now_utc=now_utc,
    )
    await session.flush()

    next_question = None
    if not round_complete and not game_complete:
        next_question = await _build_question_view(session, game_session=game_session)

    logger.info(
        "answer_submitted",
        session_id=str(game_session.id),
        assignment_id=str(assignment.id),
        is_correct=is_correct,
        total_score=game_session.total_score,
        round_complete=round_complete,
        game_complete=game_complete,
    )
    return AnswerResult(
        is_correct=is_correct,
        correct_answer=question.correct_answer,
        updated_score=game_session.total_score,
        round_complete=round_complete,
        game_complete=game_complete,
        session=_to_session_view(game_session),
        next_question=next_question,
    )
