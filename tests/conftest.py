"""Shared fixtures for the trivia bot tests."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from trivia_bot.core.database import init_database
from trivia_bot.quiz.controller import QuizController
from trivia_bot.quiz.local_state import LocalState
from trivia_bot.quiz.models import Question


class DictStore:
    """In-memory key-value store."""

    def __init__(self, data: dict = None):
        self.data = dict(data or {})

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value


@pytest.fixture
def questions():
    """Three questions with correct indices [1, 0, 2]."""
    return [
        Question(
            id="q1",
            text="¿Quién es el padre de Luke Skywalker?",
            options=("Obi-Wan Kenobi", "Darth Vader", "Yoda"),
            correct_index=1,
            explanation="Se revela en El Imperio Contraataca.",
            topic="Cine",
            difficulty="fácil",
        ),
        Question(
            id="q2",
            text="¿En qué año salió la primera Game Boy?",
            options=("1989", "1991", "1985"),
            correct_index=0,
            explanation="Nintendo la lanzó en Japón en abril de 1989.",
            topic="Videojuegos",
            difficulty="media",
        ),
        Question(
            id="q3",
            text="¿Cuántos anillos de poder se forjaron para los hombres?",
            options=("Tres", "Siete", "Nueve"),
            correct_index=2,
            explanation="Nueve para los hombres mortales.",
            topic="Literatura",
            difficulty="media",
        ),
    ]


@pytest.fixture
def identity_provider():
    provider = AsyncMock()
    provider.find.return_value = "42"
    provider.create.return_value = "43"
    return provider


@pytest.fixture
def question_provider(questions):
    provider = AsyncMock()
    provider.list_questions.return_value = questions
    return provider


@pytest.fixture
def answer_recorder():
    return AsyncMock()


@pytest.fixture
def controller(identity_provider, question_provider, answer_recorder):
    return QuizController(identity_provider, question_provider, answer_recorder)


@pytest.fixture
async def active_controller(controller):
    """Controller with a participant and the three questions loaded."""
    await controller.initialize("ana")
    await controller.load_questions(1)
    return controller


@pytest.fixture
def store():
    return DictStore()


@pytest.fixture
def registry(controller, store):
    """Session registry handing out the controller fixture."""
    registry = MagicMock()
    registry.period = 1
    registry.get.return_value = controller
    registry.new_session.return_value = controller
    registry.local_state.return_value = LocalState(store)
    return registry


@pytest.fixture
async def db(tmp_path):
    """Fresh SQLite database with the schema created."""
    database = await init_database(str(tmp_path / "trivia.db"))
    yield database
    await database.close()
