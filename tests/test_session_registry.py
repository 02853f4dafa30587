"""Tests for settings and the per-user session registry."""
from trivia_bot.config import Settings
from trivia_bot.database import crud
from trivia_bot.quiz.controller import QuizController
from trivia_bot.quiz.models import SessionState
from trivia_bot.services.session_registry import SessionRegistry


def _settings(**overrides) -> Settings:
    values = {"BOT_TOKEN": "123:abc", "QUIZ_PERIOD": 3, "ANSWER_TIME_SECONDS": 15}
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    """Defaults and overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("BOT_TOKEN", "123:abc")
        for name in ("QUIZ_PERIOD", "ANSWER_TIME_SECONDS", "STORAGE_NAMESPACE", "DATABASE_PATH"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.QUIZ_PERIOD == 1
        assert settings.ANSWER_TIME_SECONDS == 10
        assert settings.STORAGE_NAMESPACE == "trivia"
        assert settings.DATABASE_PATH == "data/trivia.db"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("BOT_TOKEN", "123:abc")
        monkeypatch.setenv("QUIZ_PERIOD", "5")

        assert Settings().QUIZ_PERIOD == 5


class TestSessionRegistry:
    """One controller per Telegram user."""

    async def test_new_session_replaces_previous(self, db):
        registry = SessionRegistry(db, _settings())

        first = registry.new_session(1)
        second = registry.new_session(1)

        assert isinstance(second, QuizController)
        assert first is not second
        assert registry.get(1) is second
        assert second.state is SessionState.AWAITING_IDENTITY

    async def test_users_are_independent(self, db):
        registry = SessionRegistry(db, _settings())

        assert registry.new_session(1) is not registry.new_session(2)
        assert registry.get(3) is None

    async def test_period_from_settings(self, db):
        assert SessionRegistry(db, _settings()).period == 3

    async def test_full_session_against_sqlite(self, db):
        """Name, questions and answers go through the SQLite collaborators."""
        await crud.add_weekly_question(db, 3, 1, "¿2+2?", ["3", "4"], 1, "Aritmética")
        registry = SessionRegistry(db, _settings())
        controller = registry.new_session(1)

        participant_id = await controller.initialize("ana")
        await registry.local_state(1).save("ana", participant_id)
        await controller.load_questions(registry.period)
        await controller.select_option(1)
        await controller.confirm_answer()

        assert controller.completed
        assert controller.last_warning is None
        answers = await crud.get_user_answers(db, int(participant_id))
        assert answers[0]["is_correct"] == 1
        assert answers[0]["time_taken_seconds"] == 15
        assert await registry.local_state(1).load() == ("ana", participant_id)
