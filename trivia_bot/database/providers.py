"""SQLite implementations of the quiz collaborators."""
from typing import List, Optional

from trivia_bot.core.database import Database
from trivia_bot.database import crud
from trivia_bot.quiz.exceptions import ParticipantNotFoundError, RecorderError
from trivia_bot.quiz.models import Question


class SqliteIdentityProvider:
    """Participants stored in the users table, keyed by username."""

    def __init__(self, db: Database):
        self._db = db

    async def find(self, name: str) -> str:
        user_id = await crud.get_user_id_by_username(self._db, name)
        if user_id is None:
            raise ParticipantNotFoundError(name)
        return str(user_id)

    async def create(self, name: str) -> str:
        return str(await crud.create_user(self._db, name))


class SqliteQuestionProvider:
    """Questions stored in weekly_quizzes; the period is the week number."""

    def __init__(self, db: Database):
        self._db = db

    async def list_questions(self, period: int) -> List[Question]:
        rows = await crud.get_weekly_questions(self._db, period)
        return [question_from_row(row) for row in rows]


class SqliteAnswerRecorder:
    """Writes every confirmed answer to user_answers."""

    def __init__(self, db: Database):
        self._db = db

    async def record(
        self,
        participant_id: str,
        question_id: str,
        selected_index: int,
        is_correct: bool,
        elapsed_seconds: int,
    ) -> None:
        try:
            await crud.save_user_answer(
                self._db,
                int(participant_id),
                int(question_id),
                selected_index,
                is_correct,
                elapsed_seconds,
            )
        except Exception as e:
            raise RecorderError(f"Could not save answer to question {question_id}: {e}") from e


class SqliteKeyValueStore:
    """Key-value store backed by the local_state table, one scope per owner."""

    def __init__(self, db: Database, scope: str):
        self._db = db
        self._scope = scope

    async def get(self, key: str) -> Optional[str]:
        return await crud.get_state_value(self._db, self._scope, key)

    async def set(self, key: str, value: str) -> None:
        await crud.set_state_value(self._db, self._scope, key, value)


def question_from_row(row: dict) -> Question:
    """Convert a weekly_quizzes row into a Question."""
    return Question(
        id=str(row["id"]),
        text=row["question_text"],
        options=row["options"],
        correct_index=row["correct_answer_index"],
        explanation=row.get("explanation", ""),
        topic=row.get("topic", ""),
        difficulty=row.get("difficulty", ""),
    )
