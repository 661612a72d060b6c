from __future__ import annotations

from dataclasses import dataclass


class TriviaEngineError(Exception):
    code = "E_TRIVIA_ENGINE"
    retryable_by_user = False


class ValidationError(TriviaEngineError):
    code = "E_VALIDATION"


class ReplacementCategoryMismatchError(ValidationError):
    code = "E_REPLACEMENT_CATEGORY_MISMATCH"


@dataclass(frozen=True, slots=True)
class PoolSuggestion:
    code: str
    value: int | list[str] | None = None


class InsufficientPoolError(TriviaEngineError):
    code = "E_INSUFFICIENT_POOL"
    retryable_by_user = True

    def __init__(
        self,
        *,
        shortfall: int,
        needed: int,
        available_by_category: dict[str, int],
        suggestions: list[PoolSuggestion],
    ) -> None:
        super().__init__(f"question pool short by {shortfall}")
        self.shortfall = shortfall
        self.needed = needed
        self.available_by_category = available_by_category
        self.suggestions = suggestions


class ConflictError(TriviaEngineError):
    code = "E_CONFLICT"


class GenerationInProgressError(ConflictError):
    code = "E_GENERATION_IN_PROGRESS"


class AnswerAlreadySubmittedError(ConflictError):
    code = "E_ANSWER_ALREADY_SUBMITTED"


class DuplicateQuestionError(ConflictError):
    code = "E_DUPLICATE_QUESTION"


class SessionAlreadyActiveError(ConflictError):
    code = "E_SESSION_ALREADY_ACTIVE"


class AuthorizationError(TriviaEngineError):
    code = "E_FORBIDDEN"


class NotFoundError(TriviaEngineError):
    code = "E_NOT_FOUND"


class GameNotFoundError(NotFoundError):
    code = "E_GAME_NOT_FOUND"


class SessionNotFoundError(NotFoundError):
    code = "E_SESSION_NOT_FOUND"


class AssignmentNotFoundError(NotFoundError):
    code = "E_ASSIGNMENT_NOT_FOUND"


class QuestionNotFoundError(NotFoundError):
    code = "E_QUESTION_NOT_FOUND"


class CategoryNotFoundError(NotFoundError):
    code = "E_CATEGORY_NOT_FOUND"


class StateError(TriviaEngineError):
    code = "E_INVALID_STATE"


class SessionNotInProgressError(StateError):
    code = "E_SESSION_NOT_IN_PROGRESS"


class InvalidTransitionError(StateError):
    code = "E_INVALID_TRANSITION"


class GameNotEditableError(StateError):
    code = "E_GAME_NOT_EDITABLE"


class AssignmentsIncompleteError(StateError):
    code = "E_ASSIGNMENTS_INCOMPLETE"


class QuestionNotInCurrentRoundError(StateError):
    code = "E_QUESTION_NOT_IN_CURRENT_ROUND"


class QuestionOutOfOrderError(StateError):
    code = "E_QUESTION_OUT_OF_ORDER"
