"""Participant name and id remembered between sessions."""
import logging
from typing import Optional, Tuple

from trivia_bot.quiz.interfaces import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "trivia"


class LocalState:
    """Reads and writes the remembered participant under a fixed namespace."""

    def __init__(self, store: KeyValueStore, namespace: str = DEFAULT_NAMESPACE):
        self._store = store
        self.username_key = f"{namespace}_username"
        self.user_id_key = f"{namespace}_user_id"

    async def load(self) -> Tuple[Optional[str], Optional[str]]:
        """Return (name, participant_id); either may be None."""
        name = await self._store.get(self.username_key)
        if not name:
            return None, None
        participant_id = await self._store.get(self.user_id_key)
        return name, participant_id or None

    async def save(self, name: str, participant_id: str) -> None:
        await self._store.set(self.username_key, name)
        await self._store.set(self.user_id_key, str(participant_id))
        logger.debug("Remembered participant %r (id=%s)", name, participant_id)
