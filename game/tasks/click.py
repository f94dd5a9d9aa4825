from typing import List

from game.runtime.models import CLICK, KIND_CLICK, REASON_WRONG_ORDER, Feedback, Interaction
from game.runtime.session import Session
from game.tasks.base import PointerTaskBase


class ClickTask(PointerTaskBase):
    kind = KIND_CLICK

    def handle_event(self, session: Session, event: Interaction, now_ms: int) -> List[Feedback]:
        if event.kind != CLICK:
            return []
        if event.target_id == self.expected_id(session):
            return self.advance(session, event.target_id)
        return self.wrong_order(session, event.target_id, REASON_WRONG_ORDER)
