from typing import List

from game.runtime.models import (
    CLICK,
    KIND_DOUBLE_CLICK,
    NEED_SECOND_CLICK,
    REASON_WRONG_ORDER,
    Feedback,
    Interaction,
)
from game.runtime.session import Session
from game.tasks.base import PointerTaskBase


class DoubleClickTask(PointerTaskBase):
    """
    Two clicks on the expected target less than double_click_interval_ms apart
    complete a step. A late second click silently starts a new pair; a click
    on any other target is an error and drops the pending click.
    """

    kind = KIND_DOUBLE_CLICK

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        if event.kind != CLICK:
            return []

        if event.target_id != self.expected_id(session):
            session.clear_pending_click()
            return self.wrong_order(session, event.target_id, REASON_WRONG_ORDER)

        gap = now_ms - session.last_click_ms
        if session.pending_clicks == 1 and gap < self.task.double_click_interval_ms:
            session.clear_pending_click()
            return self.advance(session, event.target_id)

        session.pending_clicks = 1
        session.last_click_ms = now_ms
        return [self.feedback(session, NEED_SECOND_CLICK, target_id=event.target_id)]
