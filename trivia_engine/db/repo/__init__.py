from trivia_engine.db.repo.answer_records_repo import AnswerRecordsRepo
from trivia_engine.db.repo.game_sessions_repo import GameSessionsRepo
from trivia_engine.db.repo.games_repo import GamesRepo
from trivia_engine.db.repo.player_stats_repo import PlayerStatsRepo
from trivia_engine.db.repo.questions_repo import QuestionsRepo
from trivia_engine.db.repo.round_questions_repo import RoundQuestionsRepo
from trivia_engine.db.repo.rounds_repo import GameRoundsRepo
from trivia_engine.db.repo.used_questions_repo import UsedQuestionsRepo

__all__ = [
    "AnswerRecordsRepo",
    "GameRoundsRepo",
    "GameSessionsRepo",
    "GamesRepo",
    "PlayerStatsRepo",
    "QuestionsRepo",
    "RoundQuestionsRepo",
    "UsedQuestionsRepo",
]
