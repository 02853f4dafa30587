from typing import List

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from trivia_bot import texts
from trivia_bot.handlers.quiz import send_current_question
from trivia_bot.keyboards.quiz_kb import results_keyboard
from trivia_bot.quiz.controller import QuizController
from trivia_bot.quiz.exceptions import InvalidTransitionError
from trivia_bot.quiz.results import QuizSummary
from trivia_bot.services.session_registry import SessionRegistry
from trivia_bot.states.quiz_states import QuizFlow

router = Router()


# Telegram rejects longer message texts
MESSAGE_LIMIT = 4096


def format_results(summary: QuizSummary, name: str, limit: int = MESSAGE_LIMIT) -> List[str]:
    """
    Final score followed by the detailed per-question report.

    Returns:
        Message texts of at most `limit` characters each, split between
        question entries
    """
    # Pick an emoji based on score
    if summary.percent >= 90:
        emoji = "🏆"
    elif summary.percent >= 70:
        emoji = "👍"
    elif summary.percent >= 50:
        emoji = "📖"
    else:
        emoji = "💪"

    blocks = ["\n".join([
        texts.COMPLETED_TITLE,
        "",
        texts.SCORE_LINE.format(
            emoji=emoji, correct=summary.correct, total=summary.total, percent=summary.percent
        ),
        texts.THANKS_LINE.format(name=name),
        "",
        texts.DETAILED_RESULTS,
    ])]

    for entry in summary.entries:
        mark = "✅" if entry.is_correct else "❌"
        verdict = texts.VERDICT_CORRECT if entry.is_correct else texts.VERDICT_INCORRECT
        lines = [
            f"{entry.number}. {entry.question_text}",
            f"{mark} " + texts.YOUR_ANSWER.format(option=entry.selected_option, verdict=verdict),
        ]
        if entry.correct_option is not None:
            lines.append("✔️ " + texts.CORRECT_ANSWER.format(option=entry.correct_option))
        if entry.explanation:
            lines.append(texts.EXPLANATION.format(explanation=entry.explanation))
        blocks.append("\n".join(lines))

    return _pack_messages(blocks, limit)


def _pack_messages(blocks: List[str], limit: int) -> List[str]:
    """Join blocks with blank lines into as few messages as fit the limit."""
    messages = []
    current = ""
    for block in blocks:
        # A single oversized block is cut into limit-sized pieces
        pieces = [block[i:i + limit] for i in range(0, len(block), limit)] or [""]
        for piece in pieces:
            candidate = f"{current}\n\n{piece}" if current else piece
            if len(candidate) <= limit:
                current = candidate
            else:
                messages.append(current)
                current = piece
    if current:
        messages.append(current)
    return messages


async def show_results(message: Message, state: FSMContext, controller: QuizController):
    """Show the final quiz results, with the buttons under the last message."""
    summary = controller.summary()
    await state.set_state(QuizFlow.viewing_results)
    chunks = format_results(summary, controller.session.participant_name)
    for chunk in chunks[:-1]:
        await message.answer(chunk)
    await message.answer(chunks[-1], reply_markup=results_keyboard())


@router.callback_query(F.data == "restart_quiz")
async def restart_quiz(callback: CallbackQuery, state: FSMContext, registry: SessionRegistry):
    """Play the same questions again."""
    controller = registry.get(callback.from_user.id)
    if controller is None:
        await callback.answer(texts.SESSION_EXPIRED, show_alert=True)
        return

    try:
        await controller.restart()
    except InvalidTransitionError:
        await callback.answer(texts.SESSION_EXPIRED, show_alert=True)
        return

    await callback.answer()
    await state.set_state(QuizFlow.answering_question)
    await send_current_question(callback.message, controller)


@router.callback_query(F.data == "leaderboard")
async def show_leaderboard(callback: CallbackQuery):
    await callback.answer(texts.LEADERBOARD_SOON, show_alert=True)
