from typing import List

from game.runtime.models import KIND_HOVER, POINTER_ENTER, POINTER_LEAVE, Feedback, Interaction
from game.runtime.session import Session
from game.tasks.base import PointerTaskBase


class HoverTask(PointerTaskBase):
    """
    A hover step counts once the pointer has stayed over the expected target
    for hover_duration_ms. Leaving early cancels the dwell without penalty;
    hovering other targets is ignored.
    """

    kind = KIND_HOVER

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        if event.kind == POINTER_ENTER:
            if event.target_id == self.expected_id(session) and session.dwell_target != event.target_id:
                session.dwell_target = event.target_id
                session.dwell_since_ms = now_ms
            return []
        if event.kind == POINTER_LEAVE:
            if event.target_id == session.dwell_target:
                session.clear_dwell()
            return []
        return []

    def update(self, session: Session, now_ms: int) -> List[Feedback]:
        if session.dwell_target is None or session.dwell_since_ms is None:
            return []
        if now_ms - session.dwell_since_ms < self.task.hover_duration_ms:
            return []
        target_id = session.dwell_target
        session.clear_dwell()
        return self.advance(session, target_id)
