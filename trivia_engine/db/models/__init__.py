from trivia_engine.db.models.answer_records import AnswerRecord
from trivia_engine.db.models.game_sessions import GameSession
from trivia_engine.db.models.games import Game
from trivia_engine.db.models.player_stats import PlayerStats
from trivia_engine.db.models.questions import Question
from trivia_engine.db.models.round_questions import RoundQuestion
from trivia_engine.db.models.rounds import GameRound
from trivia_engine.db.models.used_questions import HostUsedQuestion

__all__ = [
    "AnswerRecord",
    "Game",
    "GameRound",
    "GameSession",
    "HostUsedQuestion",
    "PlayerStats",
    "Question",
    "RoundQuestion",
]
