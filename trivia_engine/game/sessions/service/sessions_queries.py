from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.repo.answer_records_repo import AnswerRecordsRepo
from trivia_engine.db.repo.game_sessions_repo import GameSessionsRepo
from trivia_engine.game.constants import SESSION_STATUS_COMPLETED, SESSION_STATUS_IN_PROGRESS
from trivia_engine.game.errors import SessionNotInProgressError
from trivia_engine.game.sessions.types import GameSummary, QuestionView, RoundSummary, SessionView

from .internal import _build_question_view, _load_owned_session, _to_session_view


def _percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part * 100.0 / whole, 2)


async def build_game_summary(session: AsyncSession, *, game_session: GameSession) -> GameSummary:
    records = await AnswerRecordsRepo.list_for_session(session, session_id=game_session.id)
    rounds: dict[int, RoundSummary] = {}
    for record in records:
        summary = rounds.setdefault(
            record.round_number,
            RoundSummary(
                round_number=record.round_number,
                correct_answers=0,
                total_questions=0,
                accuracy_percentage=0.0,
                duration_ms=0,
            ),
        )
        summary.total_questions += 1
        if record.is_correct:
            summary.correct_answers += 1
        if record.time_to_answer_ms is not None:
            summary.duration_ms += record.time_to_answer_ms
    for summary in rounds.values():
        summary.accuracy_percentage = _percentage(summary.correct_answers, summary.total_questions)

    total_questions = game_session.total_rounds * game_session.questions_per_round
    correct_answers = sum(1 for record in records if record.is_correct)
    answered_questions = sum(1 for record in records if record.answered_at is not None)

    personal_best = False
    if game_session.status == SESSION_STATUS_COMPLETED:
        previous_best = await GameSessionsRepo.get_best_completed_score(
            session,
            user_id=game_session.user_id,
            exclude_session_id=game_session.id,
        )
        personal_best = previous_best is None or game_session.total_score >= previous_best

    return GameSummary(
        session_id=game_session.id,
        game_id=game_session.game_id,
        status=game_session.status,
        total_score=game_session.total_score,
        total_questions=total_questions,
        correct_answers=correct_answers,
        answered_questions=answered_questions,
        accuracy_percentage=_percentage(correct_answers, total_questions),
        total_duration_ms=game_session.total_duration_ms or 0,
        personal_best=personal_best,
        rounds=[rounds[round_number] for round_number in sorted(rounds)],
    )


async def get_session(session: AsyncSession, *, session_id: UUID, user_id: int) -> SessionView:
    game_session = await _load_owned_session(session, session_id=session_id, user_id=user_id)
    return _to_session_view(game_session)


async def get_current_question(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
) -> QuestionView:
    game_session = await _load_owned_session(session, session_id=session_id, user_id=user_id)
    if game_session.status != SESSION_STATUS_IN_PROGRESS:
        raise SessionNotInProgressError
    return await _build_question_view(session, game_session=game_session)


async def get_game_summary(
    session: AsyncSession,
    *,
    session_id: UUID,
    user_id: int,
) -> GameSummary:
    game_session = await _load_owned_session(session, session_id=session_id, user_id=user_id)
    return await build_game_summary(session, game_session=game_session)
