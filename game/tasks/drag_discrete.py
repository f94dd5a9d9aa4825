import logging
from typing import List

from game.runtime.models import (
    DROP,
    HINT_CHANGED,
    KIND_DRAG_DISCRETE,
    REASON_MISSED_ZONE,
    STEP_FAILED,
    STEP_SUCCEEDED,
    Feedback,
    Interaction,
)
from game.runtime.session import Session
from game.tasks.base import TaskBase

logger = logging.getLogger(__name__)


class DragDiscreteTask(TaskBase):
    """Items may be dropped in any order; each must land on its own zone."""

    kind = KIND_DRAG_DISCRETE

    def __init__(self, task, gesture=None, scoring=None) -> None:
        super().__init__(task, gesture, scoring)
        self.item_ids = {item.item_id for item in task.items}

    def remaining(self, session: Session) -> int:
        return len(self.task.items) - int(session.score)

    def hint(self, session: Session) -> Feedback:
        return self.feedback(session, HINT_CHANGED, remaining=self.remaining(session))

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        if event.kind != DROP:
            return []
        if event.item_id not in self.item_ids:
            logger.debug("Drop of unknown item %r ignored", event.item_id)
            return []
        if event.item_id in session.placed_items:
            return []

        if event.overlap and event.zone_id == event.item_id:
            session.placed_items.add(event.item_id)
            session.score += 1
            out = [self.feedback(session, STEP_SUCCEEDED, target_id=event.item_id)]
            if not self.is_done(session):
                out.append(self.hint(session))
            return out

        # The presentation layer sends the item back to its start position.
        session.error_count += 1
        return [self.feedback(session, STEP_FAILED, target_id=event.item_id, reason=REASON_MISSED_ZONE)]

    def is_done(self, session: Session) -> bool:
        return session.score >= len(self.task.items)

    def accuracy_score(self, session: Session) -> float:
        return session.score / len(self.task.items) * 100.0
