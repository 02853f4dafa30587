"""Custom exceptions for the quiz session."""
from trivia_bot import texts


class QuizError(Exception):
    """Base exception for quiz session errors."""

    user_message = texts.GENERIC_ERROR

    def __init__(self, message: str = "", user_message: str | None = None):
        super().__init__(message or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class IdentityResolutionError(QuizError):
    """Participant could not be looked up or created."""

    user_message = texts.IDENTITY_ERROR


class EmptyNameError(QuizError):
    """Participant name is blank after trimming."""

    user_message = texts.EMPTY_NAME


class QuestionLoadError(QuizError):
    """Question set for a period could not be fetched."""

    user_message = texts.QUESTIONS_LOAD_ERROR


class NoSelectionError(QuizError):
    """Answer confirmed before any option was selected."""

    user_message = texts.NO_SELECTION


class RecorderError(QuizError):
    """Answer could not be persisted. Never blocks the session."""

    user_message = texts.RECORDER_WARNING


class InvalidTransitionError(QuizError):
    """Operation is not allowed in the current session state."""
    pass


class ParticipantNotFoundError(Exception):
    """Identity provider has no participant with the given name."""
    pass
