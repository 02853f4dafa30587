from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from trivia_bot import texts
from trivia_bot.keyboards.quiz_kb import parse_callback_position, question_keyboard, retry_keyboard
from trivia_bot.quiz.controller import QuizController
from trivia_bot.quiz.exceptions import InvalidTransitionError, NoSelectionError, QuestionLoadError
from trivia_bot.quiz.models import SessionState
from trivia_bot.services.session_registry import SessionRegistry
from trivia_bot.states.quiz_states import QuizFlow

router = Router()


async def load_and_start(message: Message, state: FSMContext, controller: QuizController, period: int):
    """Load the period's questions and send the first one."""
    try:
        result = await controller.load_questions(period)
    except QuestionLoadError as e:
        await message.answer(e.user_message, reply_markup=retry_keyboard())
        return

    if result is SessionState.EMPTY:
        await message.answer(texts.NO_QUESTIONS, reply_markup=retry_keyboard())
        return

    await state.set_state(QuizFlow.answering_question)
    await send_current_question(message, controller)


async def send_current_question(message: Message, controller: QuizController):
    """Send the current question with its option buttons."""
    session = controller.session
    question = session.current_question
    header = texts.QUESTION_HEADER.format(number=session.position + 1, total=session.total)
    await message.answer(
        f"{header}\n\n{question.text}",
        reply_markup=question_keyboard(
            session.position, question.options, session.pending_selection, session.is_last_question
        ),
    )


@router.callback_query(F.data == "retry_load")
async def retry_load(callback: CallbackQuery, state: FSMContext, registry: SessionRegistry):
    controller = registry.get(callback.from_user.id)
    if controller is None or controller.state not in (SessionState.LOADING, SessionState.EMPTY):
        await callback.answer(texts.SESSION_EXPIRED, show_alert=True)
        return

    await callback.answer()
    await load_and_start(callback.message, state, controller, registry.period)


@router.callback_query(QuizFlow.answering_question, F.data.startswith("opt:"))
async def option_selected(callback: CallbackQuery, registry: SessionRegistry):
    """Mark the tapped option as the pending selection."""
    controller = registry.get(callback.from_user.id)
    if controller is None or controller.current_question is None:
        await callback.answer(texts.SESSION_EXPIRED, show_alert=True)
        return

    parsed = parse_callback_position(callback.data)
    if parsed is None or len(parsed) != 2:
        await callback.answer()
        return
    position, index = parsed

    # Keyboard of an earlier question, or the same option again
    if position != controller.session.position or index == controller.session.pending_selection:
        await callback.answer()
        return

    if await controller.select_option(index):
        session = controller.session
        await callback.message.edit_reply_markup(reply_markup=question_keyboard(
            session.position, session.current_question.options, index, session.is_last_question
        ))
    await callback.answer()


@router.callback_query(QuizFlow.answering_question, F.data.startswith("confirm:"))
async def answer_confirmed(callback: CallbackQuery, state: FSMContext, registry: SessionRegistry):
    """Confirm the selection and move on to the next question or the results."""
    controller = registry.get(callback.from_user.id)
    if controller is None:
        await callback.answer(texts.SESSION_EXPIRED, show_alert=True)
        return

    # Button of a question that was already answered
    if parse_callback_position(callback.data) != (controller.session.position,):
        await callback.answer()
        return

    try:
        await controller.confirm_answer()
    except NoSelectionError as e:
        await callback.answer(e.user_message, show_alert=True)
        return
    except InvalidTransitionError:
        await callback.answer()
        return

    await callback.answer()
    await callback.message.edit_reply_markup(reply_markup=None)

    if controller.last_warning:
        await callback.message.answer(controller.last_warning)

    if controller.completed:
        from trivia_bot.handlers.results import show_results
        await show_results(callback.message, state, controller)
        return

    await send_current_question(callback.message, controller)
