from typing import Dict, List, Optional, Tuple

import pygame

from config.settings import TaskDefaults
from game.geometry import point_in_circle, point_in_rect, rects_overlap
from game.runtime import models
from game.runtime.models import Feedback, Interaction, Point, Rect, Task


class InputManager:
    """
    Bridge between pygame mouse events and engine interactions.

    It knows where things are on screen (hit-testing, dragged item positions)
    but nothing about correctness: every event becomes zero or more
    Interaction objects tagged with the session id, and the engine decides.
    """

    def __init__(self, task: Task, session_id: str, defaults: Optional[TaskDefaults] = None) -> None:
        self.task = task
        self.session_id = session_id
        self.item_size = (defaults or TaskDefaults()).drag_item_size

        self.hovered: Optional[str] = None
        self.pressed = False

        # dragDiscrete: top-left of every item box, the one being dragged and the grab offset
        self.item_positions: Dict[str, Point] = {item.item_id: item.start for item in task.items}
        self.placed: set = set()
        self.dragging_item: Optional[str] = None
        self.grab_offset: Tuple[float, float] = (0.0, 0.0)

        # dragCurve: position of the draggable icon
        self.icon_position: Point = task.start
        self.trail: List[Point] = []

    def process_pygame_event(self, event) -> List[Interaction]:
        if event.type == pygame.MOUSEMOTION:
            return self._on_motion(event.pos)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self._on_press(event.pos)
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return self._on_release(event.pos)
        return []

    def on_feedback(self, item: Feedback) -> None:
        """Keep the on-screen state in line with what the engine decided."""
        if item.kind == models.GESTURE_NEEDS_RETRY:
            self.icon_position = self.task.start
            self.trail = []
            return
        if self.task.kind != models.KIND_DRAG_DISCRETE or item.target_id is None:
            return
        drag_item = next((i for i in self.task.items if i.item_id == item.target_id), None)
        if drag_item is None:
            return
        if item.kind == models.STEP_SUCCEEDED:
            self.placed.add(drag_item.item_id)
            zone = drag_item.zone
            self.item_positions[drag_item.item_id] = (
                zone.x + (zone.width - self.item_size) / 2,
                zone.y + (zone.height - self.item_size) / 2,
            )
        elif item.kind == models.STEP_FAILED:
            self.item_positions[drag_item.item_id] = drag_item.start

    def target_at(self, pos: Point) -> Optional[str]:
        for target in reversed(self.task.targets):
            if point_in_circle(pos, target.center, target.radius):
                return target.target_id
        return None

    def item_box(self, item_id: str) -> Rect:
        x, y = self.item_positions[item_id]
        return Rect(x, y, self.item_size, self.item_size)

    def icon_box(self) -> Rect:
        x, y = self.icon_position
        return Rect(x, y, self.item_size, self.item_size)

    def _on_motion(self, pos: Point) -> List[Interaction]:
        kind = self.task.kind
        if kind == models.KIND_HOVER:
            current = self.target_at(pos)
            if current == self.hovered:
                return []
            out = []
            if self.hovered is not None:
                out.append(models.pointer_leave(self.hovered, self.session_id))
            if current is not None:
                out.append(models.pointer_enter(current, self.session_id))
            self.hovered = current
            return out

        if kind == models.KIND_DRAG_DISCRETE and self.dragging_item is not None:
            self.item_positions[self.dragging_item] = (pos[0] - self.grab_offset[0], pos[1] - self.grab_offset[1])
            return []

        if kind == models.KIND_DRAG_CURVE and self.pressed:
            self.icon_position = (pos[0] - self.item_size / 2, pos[1] - self.item_size / 2)
            self.trail.append(pos)
            return [models.drag_move(pos, self.session_id)]

        if kind == models.KIND_TRACE and self.pressed:
            self.trail.append(pos)
            return [models.drag_move(pos, self.session_id)]
        return []

    def _on_press(self, pos: Point) -> List[Interaction]:
        kind = self.task.kind
        if kind in (models.KIND_CLICK, models.KIND_DOUBLE_CLICK):
            target_id = self.target_at(pos)
            if target_id is None:
                return []
            return [models.click(target_id, self.session_id)]

        if kind == models.KIND_DRAG_DISCRETE:
            for item in reversed(self.task.items):
                if item.item_id in self.placed:
                    continue
                box = self.item_box(item.item_id)
                if point_in_rect(pos, box):
                    self.dragging_item = item.item_id
                    self.grab_offset = (pos[0] - box.x, pos[1] - box.y)
                    return []
            return []

        if kind == models.KIND_DRAG_CURVE:
            if not point_in_rect(pos, self.icon_box()):
                return []
            self.pressed = True
            self.trail = [pos]
            return [models.drag_start(pos, self.session_id)]

        if kind == models.KIND_TRACE:
            self.pressed = True
            self.trail = [pos]
            return [models.drag_start(pos, self.session_id)]
        return []

    def _on_release(self, pos: Point) -> List[Interaction]:
        kind = self.task.kind
        if kind == models.KIND_DRAG_DISCRETE and self.dragging_item is not None:
            item_id = self.dragging_item
            self.dragging_item = None
            zone_id = self._zone_under(self.item_box(item_id), item_id)
            return [models.drop(item_id, zone_id, zone_id is not None, self.session_id)]

        if kind in (models.KIND_DRAG_CURVE, models.KIND_TRACE) and self.pressed:
            self.pressed = False
            return [models.drag_end(pos, self.session_id)]
        return []

    def _zone_under(self, box: Rect, item_id: str) -> Optional[str]:
        # The item's own zone wins when the box overlaps several.
        overlapping = [item.item_id for item in self.task.items if rects_overlap(box, item.zone)]
        if item_id in overlapping:
            return item_id
        return overlapping[0] if overlapping else None
