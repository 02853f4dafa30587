from aiogram.fsm.state import StatesGroup, State


class QuizFlow(StatesGroup):
    entering_name = State()
    answering_question = State()
    viewing_results = State()
