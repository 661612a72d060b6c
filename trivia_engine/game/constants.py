MIN_ROUNDS = 1
MAX_ROUNDS = 10
MIN_QUESTIONS_PER_ROUND = 1
MAX_QUESTIONS_PER_ROUND = 20
MIN_CATEGORIES = 1
MAX_CATEGORIES = 6
MAX_TITLE_LENGTH = 100
MAX_ANSWER_LENGTH = 500

GAME_STATUS_SETUP = "setup"
GAME_STATUS_IN_PROGRESS = "in_progress"
GAME_STATUS_COMPLETED = "completed"
GAME_STATUS_CANCELLED = "cancelled"
GAME_STATUSES = frozenset(
    {
        GAME_STATUS_SETUP,
        GAME_STATUS_IN_PROGRESS,
        GAME_STATUS_COMPLETED,
        GAME_STATUS_CANCELLED,
    }
)

ROUND_STATUS_PENDING = "pending"
ROUND_STATUS_IN_PROGRESS = "in_progress"
ROUND_STATUS_COMPLETED = "completed"

SESSION_STATUS_SETUP = "setup"
SESSION_STATUS_IN_PROGRESS = "in_progress"
SESSION_STATUS_PAUSED = "paused"
SESSION_STATUS_COMPLETED = "completed"
SESSION_STATUS_CANCELLED = "cancelled"
SESSION_LIVE_STATUSES: tuple[str, ...] = (
    SESSION_STATUS_SETUP,
    SESSION_STATUS_IN_PROGRESS,
    SESSION_STATUS_PAUSED,
)
SESSION_TERMINAL_STATUSES = frozenset({SESSION_STATUS_COMPLETED, SESSION_STATUS_CANCELLED})

GENERATION_STATUS_GENERATED = "generated"
GENERATION_STATUS_REGENERATED = "regenerated"
GENERATION_STATUS_EXISTING = "existing"

SUGGESTION_REDUCE_QUESTIONS_PER_ROUND = "REDUCE_QUESTIONS_PER_ROUND"
SUGGESTION_ADD_CATEGORIES = "ADD_CATEGORIES"
SUGGESTION_REDUCE_ROUNDS = "REDUCE_ROUNDS"

GENERATION_CLAIM_TTL_SECONDS = 300
