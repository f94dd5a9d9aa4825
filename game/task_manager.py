import logging
from typing import Dict, List, Optional

from config.settings import GestureConfig, ScoringConfig
from data.logger import JsonlLogger
from game.runtime.models import TASK_COMPLETED, Feedback, Interaction, Outcome, Task
from game.runtime.progress_store import ProgressStore
from game.state_machine import SessionMachine

logger = logging.getLogger(__name__)


class Trainer:
    """
    Owns the task list and the single active attempt.

    Starting a task always supersedes the previous session: the old machine
    is cancelled, so late events tagged with its session id are dropped.
    """

    def __init__(
        self,
        tasks: List[Task],
        progress: ProgressStore,
        journal: Optional[JsonlLogger] = None,
        gesture: Optional[GestureConfig] = None,
        scoring: Optional[ScoringConfig] = None,
    ) -> None:
        self.tasks: Dict[str, Task] = {task.task_id: task for task in tasks}
        self.order: List[str] = [task.task_id for task in tasks]
        self.progress = progress
        self.journal = journal
        self.gesture = gesture
        self.scoring = scoring
        self.machine: Optional[SessionMachine] = None
        self.last_outcome: Optional[Outcome] = None

    def task_list(self) -> List[Task]:
        return [self.tasks[task_id] for task_id in self.order]

    def next_task(self, task_id: str) -> Optional[Task]:
        if task_id not in self.order:
            return None
        idx = self.order.index(task_id) + 1
        if idx >= len(self.order):
            return None
        return self.tasks[self.order[idx]]

    def start(self, task_id: str, now_ms: int) -> List[Feedback]:
        task = self.tasks.get(task_id)
        if task is None:
            raise KeyError(f"Unknown task: {task_id}")
        self.stop()
        self.machine = SessionMachine(task, now_ms, gesture=self.gesture, scoring=self.scoring)
        self.last_outcome = None
        return self.machine.begin(now_ms)

    def retry(self, now_ms: int) -> List[Feedback]:
        if self.machine is None:
            return []
        return self.start(self.machine.task.task_id, now_ms)

    def stop(self) -> None:
        if self.machine is not None and self.machine.is_active():
            logger.info("Abandoning session %s for task %s", self.machine.session_id, self.machine.task.task_id)
            self.machine.cancel()

    @property
    def session_id(self) -> Optional[str]:
        return self.machine.session_id if self.machine is not None else None

    def handle_event(self, event: Interaction, now_ms: int) -> List[Feedback]:
        if self.machine is None:
            return []
        return self._after(self.machine.handle_event(event, now_ms))

    def update(self, now_ms: int) -> List[Feedback]:
        if self.machine is None:
            return []
        return self._after(self.machine.update(now_ms))

    def _after(self, feedback: List[Feedback]) -> List[Feedback]:
        for item in feedback:
            if item.kind == TASK_COMPLETED and item.outcome is not None:
                self._record(item.outcome)
        return feedback

    def _record(self, outcome: Outcome) -> None:
        self.last_outcome = outcome
        self.progress.record_if_better(outcome.task_id, outcome)
        if self.journal is not None:
            self.journal.write({"session_id": self.session_id, **outcome.to_record()})
