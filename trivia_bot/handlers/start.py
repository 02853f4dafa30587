"""Start command and participant identification."""
from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message
from aiogram.fsm.context import FSMContext

from trivia_bot import texts
from trivia_bot.handlers.quiz import load_and_start
from trivia_bot.quiz.controller import QuizController
from trivia_bot.quiz.exceptions import EmptyNameError, IdentityResolutionError
from trivia_bot.services.session_registry import SessionRegistry
from trivia_bot.states.quiz_states import QuizFlow

router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext, registry: SessionRegistry):
    """Start a new session, reusing the remembered name when there is one."""
    await state.clear()
    user_id = message.from_user.id
    controller = registry.new_session(user_id)

    name, participant_id = await registry.local_state(user_id).load()
    name = (name or "").strip()
    if name and participant_id:
        await message.answer(texts.WELCOME_BACK.format(name=name))
        await controller.restore(name, participant_id)
        await load_and_start(message, state, controller, registry.period)
        return
    if name:
        await message.answer(texts.WELCOME_BACK.format(name=name))
        await _identify(message, state, registry, controller, user_id, name)
        return

    await state.set_state(QuizFlow.entering_name)
    await message.answer(texts.WELCOME)


@router.message(QuizFlow.entering_name)
async def name_entered(message: Message, state: FSMContext, registry: SessionRegistry):
    user_id = message.from_user.id
    controller = registry.get(user_id) or registry.new_session(user_id)
    await _identify(message, state, registry, controller, user_id, message.text or "")


async def _identify(
    message: Message,
    state: FSMContext,
    registry: SessionRegistry,
    controller: QuizController,
    user_id: int,
    name: str,
):
    """Resolve the participant, remember it and load the questions."""
    try:
        participant_id = await controller.initialize(name)
    except (EmptyNameError, IdentityResolutionError) as e:
        await state.set_state(QuizFlow.entering_name)
        await message.answer(e.user_message)
        return

    await registry.local_state(user_id).save(controller.session.participant_name, participant_id)
    await state.set_state(None)
    await load_and_start(message, state, controller, registry.period)
