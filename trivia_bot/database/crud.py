"""CRUD operations for database."""
import json
from typing import Dict, List, Optional

from trivia_bot.core.database import Database


# ============================================================================
# USER OPERATIONS
# ============================================================================

async def get_user_id_by_username(db: Database, username: str) -> Optional[int]:
    """
    Get user id by username.

    Returns:
        User id or None if the username is unknown
    """
    row = await db.fetchone("SELECT id FROM users WHERE username = ?", (username,))
    return row["id"] if row else None


async def create_user(db: Database, username: str) -> int:
    """
    Create a new user.

    Returns:
        id of the created user
    """
    cursor = await db.execute("INSERT INTO users (username) VALUES (?)", (username,))
    return cursor.lastrowid


# ============================================================================
# QUESTION OPERATIONS
# ============================================================================

async def get_weekly_questions(db: Database, week_number: int) -> List[Dict]:
    """
    Get questions of a week ordered by question_number.

    Returns:
        List of question dicts with decoded options

    Raises:
        ValueError: Options column does not hold a JSON list
    """
    query = """
        SELECT id, question_text, options, correct_answer_index,
               explanation, topic, difficulty
        FROM weekly_quizzes
        WHERE week_number = ?
        ORDER BY question_number ASC
    """
    rows = await db.fetchall(query, (week_number,))

    questions = []
    for row in rows:
        options = json.loads(row["options"])
        if not isinstance(options, list):
            raise ValueError(f"Options of question {row['id']} are not a list")

        questions.append({
            "id": row["id"],
            "question_text": row["question_text"],
            "options": options,
            "correct_answer_index": row["correct_answer_index"],
            "explanation": row["explanation"] or "",
            "topic": row["topic"] or "",
            "difficulty": row["difficulty"] or "",
        })

    return questions


async def add_weekly_question(
    db: Database,
    week_number: int,
    question_number: int,
    question_text: str,
    options: List[str],
    correct_answer_index: int,
    explanation: str = "",
    topic: str = "",
    difficulty: str = "",
) -> int:
    """
    Insert a question into a week's set.

    Returns:
        id of the inserted question
    """
    query = """
        INSERT INTO weekly_quizzes (
            week_number, question_number, question_text, options,
            correct_answer_index, explanation, topic, difficulty
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
    """
    cursor = await db.execute(query, (
        week_number, question_number, question_text,
        json.dumps(options, ensure_ascii=False),
        correct_answer_index, explanation, topic, difficulty,
    ))
    return cursor.lastrowid


# ============================================================================
# ANSWER OPERATIONS
# ============================================================================

async def save_user_answer(
    db: Database,
    user_id: int,
    quiz_question_id: int,
    selected_option_index: int,
    is_correct: bool,
    time_taken_seconds: int,
) -> int:
    """Save a single answer. Returns the answer row id."""
    query = """
        INSERT INTO user_answers (
            user_id, quiz_question_id, selected_option_index,
            is_correct, time_taken_seconds
        ) VALUES (?, ?, ?, ?, ?)
    """
    cursor = await db.execute(query, (
        user_id, quiz_question_id, selected_option_index,
        1 if is_correct else 0, time_taken_seconds,
    ))
    return cursor.lastrowid


async def get_user_answers(db: Database, user_id: int) -> List[Dict]:
    """Get all answers of a user in the order they were given."""
    query = """
        SELECT quiz_question_id, selected_option_index, is_correct, time_taken_seconds
        FROM user_answers
        WHERE user_id = ?
        ORDER BY id
    """
    rows = await db.fetchall(query, (user_id,))
    return [dict(row) for row in rows]


# ============================================================================
# LOCAL STATE
# ============================================================================

async def get_state_value(db: Database, scope: str, key: str) -> Optional[str]:
    """Get a stored value or None."""
    row = await db.fetchone(
        "SELECT value FROM local_state WHERE scope = ? AND key = ?", (scope, key)
    )
    return row["value"] if row else None


async def set_state_value(db: Database, scope: str, key: str, value: str) -> None:
    """Insert or overwrite a stored value."""
    await db.execute(
        """INSERT INTO local_state (scope, key, value)
           VALUES (?, ?, ?)
           ON CONFLICT(scope, key) DO UPDATE SET value = excluded.value""",
        (scope, key, value),
    )
