"""Data models for a quiz session."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Question:
    """Multiple-choice question as served for a period."""
    id: str
    text: str
    options: Tuple[str, ...]
    correct_index: int
    explanation: str = ""
    topic: str = ""
    difficulty: str = ""

    def __post_init__(self):
        # Lists coming from JSON are frozen into a tuple
        object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) < 2:
            raise ValueError(f"Question {self.id!r} needs at least 2 options")
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"Question {self.id!r}: correct index {self.correct_index} out of range"
            )

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]

    def option_text(self, index: int) -> str:
        return self.options[index]


@dataclass(frozen=True)
class AnsweredQuestion:
    """Answer given to one question, in answer order."""
    question: Question
    selected_index: int

    @property
    def is_correct(self) -> bool:
        return self.selected_index == self.question.correct_index

    @property
    def selected_option(self) -> str:
        return self.question.option_text(self.selected_index)


class SessionState(str, Enum):
    """Lifecycle of a quiz session."""
    AWAITING_IDENTITY = "awaiting_identity"
    LOADING = "loading"
    ACTIVE = "active"
    COMPLETED = "completed"
    EMPTY = "empty"


@dataclass
class Session:
    """Aggregate root owned by QuizController."""
    participant_name: Optional[str] = None
    participant_id: Optional[str] = None
    period: Optional[int] = None
    questions: Tuple[Question, ...] = ()
    position: int = 0
    pending_selection: Optional[int] = None
    score: int = 0
    answers: List[AnsweredQuestion] = field(default_factory=list)
    state: SessionState = SessionState.AWAITING_IDENTITY

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def completed(self) -> bool:
        return self.state is SessionState.COMPLETED

    @property
    def current_question(self) -> Optional[Question]:
        """Question awaiting an answer, or None outside of ACTIVE."""
        if self.state is not SessionState.ACTIVE:
            return None
        return self.questions[self.position]

    @property
    def is_last_question(self) -> bool:
        return self.state is SessionState.ACTIVE and self.position == self.total - 1

    def is_answered(self, index: int) -> bool:
        return index < len(self.answers)

    def reset_progress(self) -> None:
        self.position = 0
        self.pending_selection = None
        self.score = 0
        self.answers = []
