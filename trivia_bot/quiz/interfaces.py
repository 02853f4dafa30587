"""Collaborator contracts used by the quiz session."""
from typing import List, Optional, Protocol

from trivia_bot.quiz.models import Question


class IdentityProvider(Protocol):
    """Looks up and creates participants by name."""

    async def find(self, name: str) -> str:
        """
        Return the id of an existing participant.

        Raises:
            ParticipantNotFoundError: No participant with this name
        """
        ...

    async def create(self, name: str) -> str:
        """Create a participant and return the new id."""
        ...


class QuestionProvider(Protocol):
    """Serves the question set for a scheduling period."""

    async def list_questions(self, period: int) -> List[Question]:
        """Questions for the period ordered by sequence number. May be empty."""
        ...


class AnswerRecorder(Protocol):
    """Persists individual answers."""

    async def record(
        self,
        participant_id: str,
        question_id: str,
        selected_index: int,
        is_correct: bool,
        elapsed_seconds: int,
    ) -> None:
        ...


class KeyValueStore(Protocol):
    """String key-value storage that survives restarts."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...
