"""Final score and per-question report for a completed session."""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from trivia_bot.quiz.models import AnsweredQuestion


@dataclass(frozen=True)
class ResultEntry:
    """One line of the detailed report."""
    number: int
    question_text: str
    selected_option: str
    is_correct: bool
    correct_option: Optional[str]  # only set for wrong answers
    explanation: str


@dataclass(frozen=True)
class QuizSummary:
    """Score plus ordered report entries."""
    total: int
    correct: int
    percent: int
    entries: Tuple[ResultEntry, ...]


def summarize(answers: Sequence[AnsweredQuestion]) -> QuizSummary:
    """
    Build the result report from the answer log.

    Pure function: entries follow log order and the same log always
    produces the same summary.
    """
    entries: List[ResultEntry] = []
    correct = 0

    for number, answer in enumerate(answers, start=1):
        if answer.is_correct:
            correct += 1
        entries.append(ResultEntry(
            number=number,
            question_text=answer.question.text,
            selected_option=answer.selected_option,
            is_correct=answer.is_correct,
            correct_option=None if answer.is_correct else answer.question.correct_option,
            explanation=answer.question.explanation,
        ))

    total = len(entries)
    percent = round(correct / total * 100) if total > 0 else 0

    return QuizSummary(total=total, correct=correct, percent=percent, entries=tuple(entries))
