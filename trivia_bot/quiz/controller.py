"""Quiz session state machine for a single participant."""
import asyncio
import logging
from typing import Optional

from trivia_bot.quiz.exceptions import (
    EmptyNameError,
    IdentityResolutionError,
    InvalidTransitionError,
    NoSelectionError,
    ParticipantNotFoundError,
    QuestionLoadError,
    RecorderError,
)
from trivia_bot.quiz.interfaces import AnswerRecorder, IdentityProvider, QuestionProvider
from trivia_bot.quiz.models import AnsweredQuestion, Question, Session, SessionState
from trivia_bot.quiz.results import QuizSummary, summarize

logger = logging.getLogger(__name__)

# Reported to the recorder until real answer timing exists
DEFAULT_ANSWER_TIME_SECONDS = 10


class QuizController:
    """
    Walks one participant through a fixed, ordered question set.

    States: AWAITING_IDENTITY -> LOADING -> ACTIVE -> COMPLETED,
    with EMPTY reachable from LOADING when a period has no questions.

    Mutating operations are serialized through a lock, so a second
    confirm issued while the recorder call is pending waits for the
    first one instead of adding a duplicate answer.
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        question_provider: QuestionProvider,
        answer_recorder: AnswerRecorder,
        answer_time_seconds: int = DEFAULT_ANSWER_TIME_SECONDS,
    ):
        self._identity = identity_provider
        self._questions = question_provider
        self._recorder = answer_recorder
        self._answer_time_seconds = answer_time_seconds
        self._lock = asyncio.Lock()
        self.session = Session()
        self.last_warning: Optional[str] = None

    # ------------------------------------------------------------------
    # Read-only view for the UI
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def current_question(self) -> Optional[Question]:
        return self.session.current_question

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def completed(self) -> bool:
        return self.session.completed

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def initialize(self, name: str) -> str:
        """
        Resolve or create the participant and move to LOADING.

        Returns:
            Participant id

        Raises:
            EmptyNameError: Name is blank
            IdentityResolutionError: Identity provider failed (retryable)
        """
        async with self._lock:
            self._require(
                SessionState.AWAITING_IDENTITY, SessionState.LOADING, SessionState.EMPTY
            )

            name = (name or "").strip()
            if not name:
                raise EmptyNameError()

            try:
                try:
                    participant_id = await self._identity.find(name)
                except ParticipantNotFoundError:
                    participant_id = await self._identity.create(name)
                    logger.info("Created participant %r (id=%s)", name, participant_id)
            except Exception as e:
                logger.error("Identity resolution failed for %r: %s", name, e)
                raise IdentityResolutionError(str(e)) from e

            self.session.participant_name = name
            self.session.participant_id = str(participant_id)
            self.session.state = SessionState.LOADING
            return self.session.participant_id

    async def restore(self, name: str, participant_id: str) -> str:
        """
        Reuse a remembered participant without asking the identity provider.

        Raises:
            EmptyNameError: Name is blank
        """
        async with self._lock:
            self._require(SessionState.AWAITING_IDENTITY)

            name = (name or "").strip()
            if not name:
                raise EmptyNameError()

            self.session.participant_name = name
            self.session.participant_id = str(participant_id)
            self.session.state = SessionState.LOADING
            return self.session.participant_id

    async def load_questions(self, period: int) -> SessionState:
        """
        Fetch the question set for a period.

        Returns:
            ACTIVE when questions were loaded, EMPTY otherwise

        Raises:
            QuestionLoadError: Question provider failed (retryable)
        """
        async with self._lock:
            self._require(SessionState.LOADING, SessionState.EMPTY)

            try:
                questions = await self._questions.list_questions(period)
            except Exception as e:
                logger.error("Failed to load questions for period %s: %s", period, e)
                raise QuestionLoadError(str(e)) from e

            self.session.period = period
            if not questions:
                logger.info("No questions available for period %s", period)
                self.session.questions = ()
                self.session.reset_progress()
                self.session.state = SessionState.EMPTY
                return self.session.state

            self.session.questions = tuple(questions)
            self.session.reset_progress()
            self.last_warning = None
            self.session.state = SessionState.ACTIVE
            logger.info(
                "Session started for participant %s: %d questions (period %s)",
                self.session.participant_id, len(questions), period,
            )
            return self.session.state

    async def select_option(self, index: int) -> bool:
        """Set the pending selection. Out-of-range indices are ignored."""
        async with self._lock:
            self._require(SessionState.ACTIVE)

            question = self.session.current_question
            if not 0 <= index < len(question.options):
                return False

            self.session.pending_selection = index
            return True

    async def confirm_answer(self) -> AnsweredQuestion:
        """
        Record the pending selection and advance.

        A recorder failure does not stop the session: it is logged and
        kept in last_warning for the UI.

        Raises:
            NoSelectionError: Nothing selected yet
        """
        async with self._lock:
            self._require(SessionState.ACTIVE)

            selected = self.session.pending_selection
            if selected is None:
                raise NoSelectionError()

            self.last_warning = None
            question = self.session.current_question
            answer = AnsweredQuestion(question=question, selected_index=selected)

            # Session advances before the recorder is awaited, so a cancelled
            # or failed call never leaves the log ahead of the position.
            self.session.answers.append(answer)
            if answer.is_correct:
                self.session.score += 1
            self.session.pending_selection = None
            self.session.position += 1

            if self.session.position == self.session.total:
                self.session.state = SessionState.COMPLETED
                logger.info(
                    "Session completed for participant %s: %d/%d",
                    self.session.participant_id, self.session.score, self.session.total,
                )

            try:
                await self._recorder.record(
                    self.session.participant_id,
                    question.id,
                    selected,
                    answer.is_correct,
                    self._answer_time_seconds,
                )
            except Exception as e:
                warning = e if isinstance(e, RecorderError) else RecorderError(str(e))
                logger.warning(
                    "Failed to save answer for question %s (participant %s): %s",
                    question.id, self.session.participant_id, e,
                )
                self.last_warning = warning.user_message

            return answer

    async def restart(self) -> None:
        """Start over with the same questions, without fetching them again."""
        async with self._lock:
            self._require(SessionState.ACTIVE, SessionState.COMPLETED)
            self.session.reset_progress()
            self.last_warning = None
            self.session.state = SessionState.ACTIVE

    def summary(self) -> QuizSummary:
        """Result report of a completed session."""
        self._require(SessionState.COMPLETED)
        return summarize(self.session.answers)

    def _require(self, *states: SessionState) -> None:
        if self.session.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransitionError(
                f"Operation not allowed in state {self.session.state.value} (expected {allowed})"
            )
