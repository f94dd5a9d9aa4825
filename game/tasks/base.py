from __future__ import annotations

from typing import List, Optional

from config.settings import GestureConfig, ScoringConfig
from game.runtime.models import (
    HINT_CHANGED,
    STEP_FAILED,
    STEP_SUCCEEDED,
    Feedback,
    Interaction,
    Task,
)
from game.runtime.session import Session


class TaskBase:
    """
    Behaviour of one task kind. Each subclass turns interactions into session
    transitions and says how a finished session is scored; the SessionMachine
    owns the session and decides when it completes.
    """

    kind: str = "BASE"
    continuous: bool = False

    def __init__(
        self,
        task: Task,
        gesture: Optional[GestureConfig] = None,
        scoring: Optional[ScoringConfig] = None,
    ) -> None:
        if task.kind != self.kind:
            raise ValueError(f"{type(self).__name__} cannot run a {task.kind!r} task")
        self.task = task
        self.gesture = gesture or GestureConfig()
        self.scoring = scoring or ScoringConfig()

    def begin(self, session: Session, now_ms: int) -> List[Feedback]:
        return [self.hint(session)]

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        raise NotImplementedError

    def update(self, session: Session, now_ms: int) -> List[Feedback]:
        return []

    def is_done(self, session: Session) -> bool:
        raise NotImplementedError

    def accuracy_score(self, session: Session) -> float:
        raise NotImplementedError

    @property
    def weights(self) -> tuple:
        if self.continuous:
            return self.scoring.continuous_weights
        return self.scoring.discrete_weights

    def hint(self, session: Session) -> Feedback:
        return Feedback(kind=HINT_CHANGED, session_id=session.session_id)

    @staticmethod
    def feedback(session: Session, kind: str, **kwargs) -> Feedback:
        return Feedback(kind=kind, session_id=session.session_id, **kwargs)


class PointerTaskBase(TaskBase):
    """Shared ordered-target logic for hover, click and doubleClick."""

    def expected_id(self, session: Session) -> Optional[str]:
        if session.current_step >= len(self.task.targets):
            return None
        return self.task.targets[session.current_step].target_id

    def hint(self, session: Session) -> Feedback:
        return self.feedback(session, HINT_CHANGED, target_id=self.expected_id(session))

    def advance(self, session: Session, target_id: str) -> List[Feedback]:
        session.current_step += 1
        session.score += 1
        out = [self.feedback(session, STEP_SUCCEEDED, target_id=target_id)]
        if not self.is_done(session):
            out.append(self.hint(session))
        return out

    def wrong_order(self, session: Session, target_id: Optional[str], reason: str) -> List[Feedback]:
        session.error_count += 1
        return [self.feedback(session, STEP_FAILED, target_id=target_id, reason=reason)]

    def is_done(self, session: Session) -> bool:
        return session.current_step >= len(self.task.targets)

    def accuracy_score(self, session: Session) -> float:
        return session.score / len(self.task.targets) * 100.0
