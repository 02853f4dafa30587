"""Tests for the SQLite layer and the collaborators built on it."""
import sqlite3

import pytest

from trivia_bot.database import crud
from trivia_bot.database.providers import (
    SqliteAnswerRecorder,
    SqliteIdentityProvider,
    SqliteKeyValueStore,
    SqliteQuestionProvider,
    question_from_row,
)
from trivia_bot.quiz.exceptions import ParticipantNotFoundError, RecorderError
from trivia_bot.quiz.local_state import LocalState


async def _seed_week(db, week: int = 1):
    """Insert three questions out of order."""
    await crud.add_weekly_question(
        db, week, 3, "Tercera", ["a", "b", "c"], 2, "porque c", "Cine", "difícil"
    )
    await crud.add_weekly_question(
        db, week, 1, "Primera", ["sí", "no"], 0, "porque sí", "Ciencia", "fácil"
    )
    await crud.add_weekly_question(
        db, week, 2, "Segunda", ["x", "y", "z"], 1, "", "", ""
    )


# ============================================================================
# IDENTITY
# ============================================================================


class TestIdentityProvider:
    """Participants keyed by username."""

    async def test_find_unknown(self, db):
        with pytest.raises(ParticipantNotFoundError):
            await SqliteIdentityProvider(db).find("nadie")

    async def test_create_then_find(self, db):
        provider = SqliteIdentityProvider(db)

        created = await provider.create("ana")

        assert await provider.find("ana") == created

    async def test_duplicate_name_rejected(self, db):
        provider = SqliteIdentityProvider(db)
        await provider.create("ana")

        with pytest.raises(sqlite3.IntegrityError):
            await provider.create("ana")


# ============================================================================
# QUESTIONS
# ============================================================================


class TestQuestionProvider:
    """Weekly question sets."""

    async def test_ordered_by_question_number(self, db):
        await _seed_week(db)

        questions = await SqliteQuestionProvider(db).list_questions(1)

        assert [q.text for q in questions] == ["Primera", "Segunda", "Tercera"]
        assert questions[0].options == ("sí", "no")
        assert questions[2].correct_option == "c"
        assert questions[0].topic == "Ciencia"

    async def test_other_week_is_empty(self, db):
        await _seed_week(db, week=1)

        assert await SqliteQuestionProvider(db).list_questions(2) == []

    async def test_malformed_options(self, db):
        await db.execute(
            """INSERT INTO weekly_quizzes
               (week_number, question_number, question_text, options, correct_answer_index)
               VALUES (1, 1, 'Rota', '{"a": 1}', 0)"""
        )

        with pytest.raises(ValueError):
            await SqliteQuestionProvider(db).list_questions(1)

    def test_row_with_bad_correct_index(self):
        row = {
            "id": 5,
            "question_text": "¿?",
            "options": ["a", "b"],
            "correct_answer_index": 4,
        }

        with pytest.raises(ValueError, match="out of range"):
            question_from_row(row)

    def test_row_with_single_option(self):
        row = {
            "id": 6,
            "question_text": "¿?",
            "options": ["a"],
            "correct_answer_index": 0,
        }

        with pytest.raises(ValueError, match="at least 2 options"):
            question_from_row(row)


# ============================================================================
# ANSWERS
# ============================================================================


class TestAnswerRecorder:
    """Persisting individual answers."""

    async def test_record_answer(self, db):
        await _seed_week(db)
        user_id = await crud.create_user(db, "ana")
        questions = await SqliteQuestionProvider(db).list_questions(1)

        await SqliteAnswerRecorder(db).record(str(user_id), questions[0].id, 1, False, 10)

        answers = await crud.get_user_answers(db, user_id)
        assert answers == [{
            "quiz_question_id": int(questions[0].id),
            "selected_option_index": 1,
            "is_correct": 0,
            "time_taken_seconds": 10,
        }]

    async def test_unknown_participant_raises_recorder_error(self, db):
        """Foreign key violation surfaces as RecorderError."""
        await _seed_week(db)
        questions = await SqliteQuestionProvider(db).list_questions(1)

        with pytest.raises(RecorderError):
            await SqliteAnswerRecorder(db).record("999", questions[0].id, 0, True, 10)


# ============================================================================
# LOCAL STATE
# ============================================================================


class TestLocalState:
    """Remembered participant in the local_state table."""

    async def test_nothing_stored(self, db):
        state = LocalState(SqliteKeyValueStore(db, scope="100"))

        assert await state.load() == (None, None)

    async def test_save_and_load(self, db):
        state = LocalState(SqliteKeyValueStore(db, scope="100"))

        await state.save("ana", "7")

        assert await state.load() == ("ana", "7")
        assert await crud.get_state_value(db, "100", "trivia_username") == "ana"
        assert await crud.get_state_value(db, "100", "trivia_user_id") == "7"

    async def test_overwrite(self, db):
        state = LocalState(SqliteKeyValueStore(db, scope="100"))

        await state.save("ana", "7")
        await state.save("luis", "8")

        assert await state.load() == ("luis", "8")

    async def test_scopes_are_isolated(self, db):
        await LocalState(SqliteKeyValueStore(db, scope="100")).save("ana", "7")

        other = LocalState(SqliteKeyValueStore(db, scope="200"))
        assert await other.load() == (None, None)

    async def test_custom_namespace(self, store):
        state = LocalState(store, namespace="quiz")

        await state.save("ana", "7")

        assert store.data == {"quiz_username": "ana", "quiz_user_id": "7"}
