"""Database initialization and connection management."""
import logging
from pathlib import Path
from typing import Optional

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        username    TEXT NOT NULL UNIQUE,
        created_at  TEXT DEFAULT (datetime('now'))
    );

    CREATE TABLE IF NOT EXISTS weekly_quizzes (
        id                    INTEGER PRIMARY KEY AUTOINCREMENT,
        week_number           INTEGER NOT NULL,
        question_number       INTEGER NOT NULL,
        question_text         TEXT NOT NULL,
        options               TEXT NOT NULL,
        correct_answer_index  INTEGER NOT NULL,
        explanation           TEXT DEFAULT '',
        topic                 TEXT DEFAULT '',
        difficulty            TEXT DEFAULT '',
        UNIQUE (week_number, question_number)
    );

    CREATE TABLE IF NOT EXISTS user_answers (
        id                     INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id                INTEGER NOT NULL,
        quiz_question_id       INTEGER NOT NULL,
        selected_option_index  INTEGER NOT NULL,
        is_correct             INTEGER NOT NULL,
        time_taken_seconds     INTEGER,
        answered_at            TEXT DEFAULT (datetime('now')),
        FOREIGN KEY (user_id) REFERENCES users(id),
        FOREIGN KEY (quiz_question_id) REFERENCES weekly_quizzes(id)
    );

    CREATE TABLE IF NOT EXISTS local_state (
        scope   TEXT NOT NULL,
        key     TEXT NOT NULL,
        value   TEXT,
        PRIMARY KEY (scope, key)
    );
"""


class Database:
    """Database connection manager."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: Optional[aiosqlite.Connection] = None

    async def connect(self) -> aiosqlite.Connection:
        """Establish database connection."""
        if self._conn is None:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            self._conn = await aiosqlite.connect(self.db_path)
            self._conn.row_factory = aiosqlite.Row
            await self._conn.execute("PRAGMA foreign_keys = ON")
            await self._conn.commit()

        return self._conn

    async def close(self):
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def execute(self, query: str, params: tuple = ()) -> aiosqlite.Cursor:
        """Execute a query and commit."""
        conn = await self.connect()
        cursor = await conn.execute(query, params)
        await conn.commit()
        return cursor

    async def fetchone(self, query: str, params: tuple = ()):
        """Fetch one result."""
        conn = await self.connect()
        async with conn.execute(query, params) as cursor:
            return await cursor.fetchone()

    async def fetchall(self, query: str, params: tuple = ()):
        """Fetch all results."""
        conn = await self.connect()
        async with conn.execute(query, params) as cursor:
            return await cursor.fetchall()


async def init_database(db_path: str = "data/trivia.db") -> Database:
    """Open the database and create the schema if needed."""
    db = Database(db_path)
    conn = await db.connect()
    await conn.executescript(SCHEMA)
    await conn.commit()

    logger.info("Database initialized at %s", db_path)
    return db
