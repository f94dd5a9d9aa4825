from dataclasses import dataclass, field
from typing import List, Optional, Set

from game.runtime.models import Outcome, Point, Task


STATE_ACTIVE = "ACTIVE"
STATE_COMPLETED = "COMPLETED"
STATE_CANCELLED = "CANCELLED"


@dataclass
class Session:
    """
    One live attempt at a Task. Mutated only by the SessionMachine that owns
    it; frozen (no further changes) once state leaves ACTIVE.
    """
    session_id: str
    task: Task
    started_ms: int
    state: str = STATE_ACTIVE
    current_step: int = 0
    score: float = 0
    error_count: int = 0

    # doubleClick bookkeeping
    last_click_ms: int = 0
    pending_clicks: int = 0

    # hover dwell
    dwell_target: Optional[str] = None
    dwell_since_ms: Optional[int] = None

    # dragDiscrete
    placed_items: Set[str] = field(default_factory=set)

    # dragCurve / trace gesture buffers
    gesture_active: bool = False
    deviations: List[float] = field(default_factory=list)
    drawn_points: List[Point] = field(default_factory=list)

    outcome: Optional[Outcome] = None

    def is_active(self) -> bool:
        return self.state == STATE_ACTIVE

    def clear_dwell(self) -> None:
        self.dwell_target = None
        self.dwell_since_ms = None

    def clear_pending_click(self) -> None:
        self.pending_clicks = 0
        self.last_click_ms = 0
