from typing import Optional, Sequence

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from trivia_bot import texts


def question_keyboard(
    position: int, options: Sequence[str], selected: Optional[int], is_last: bool
) -> InlineKeyboardMarkup:
    """
    Options of the current question plus the confirm button.

    Callback data carries the question position, so taps on the keyboard
    of an earlier question can be told apart from the current one.
    """
    buttons = []
    for i, option in enumerate(options):
        marker = "🟣" if i == selected else "⚪"
        buttons.append([InlineKeyboardButton(
            text=f"{marker} {option}",
            callback_data=f"opt:{position}:{i}",
        )])
    confirm_text = texts.FINISH_QUIZ if is_last else texts.NEXT_QUESTION
    buttons.append([InlineKeyboardButton(text=confirm_text, callback_data=f"confirm:{position}")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def parse_callback_position(data: str) -> Optional[tuple]:
    """Split "opt:<position>:<index>" or "confirm:<position>" into ints."""
    try:
        return tuple(int(part) for part in data.split(":")[1:])
    except ValueError:
        return None


def results_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=texts.PLAY_AGAIN, callback_data="restart_quiz")],
        [InlineKeyboardButton(text=texts.LEADERBOARD, callback_data="leaderboard")],
    ])


def retry_keyboard() -> InlineKeyboardMarkup:
    """Shown when questions could not be loaded or none exist yet."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=texts.RETRY, callback_data="retry_load")],
    ])
