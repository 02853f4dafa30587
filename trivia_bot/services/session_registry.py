"""One quiz controller per Telegram user."""
import logging
from typing import Dict, Optional

from trivia_bot.config import Settings
from trivia_bot.core.database import Database
from trivia_bot.database.providers import (
    SqliteAnswerRecorder,
    SqliteIdentityProvider,
    SqliteKeyValueStore,
    SqliteQuestionProvider,
)
from trivia_bot.quiz.controller import QuizController
from trivia_bot.quiz.local_state import LocalState

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Creates and keeps the controller and local state of each user."""

    def __init__(self, db: Database, settings: Settings):
        self._db = db
        self.period = settings.QUIZ_PERIOD
        self._answer_time_seconds = settings.ANSWER_TIME_SECONDS
        self._namespace = settings.STORAGE_NAMESPACE
        self._controllers: Dict[int, QuizController] = {}

    def get(self, user_id: int) -> Optional[QuizController]:
        """Existing controller of a user, if any."""
        return self._controllers.get(user_id)

    def new_session(self, user_id: int) -> QuizController:
        """Replace the user's controller with a fresh one."""
        controller = QuizController(
            SqliteIdentityProvider(self._db),
            SqliteQuestionProvider(self._db),
            SqliteAnswerRecorder(self._db),
            answer_time_seconds=self._answer_time_seconds,
        )
        self._controllers[user_id] = controller
        logger.debug("New quiz session for Telegram user %d", user_id)
        return controller

    def local_state(self, user_id: int) -> LocalState:
        store = SqliteKeyValueStore(self._db, scope=str(user_id))
        return LocalState(store, namespace=self._namespace)
