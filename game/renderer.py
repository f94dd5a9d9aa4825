from typing import Dict, List, Sequence, Tuple

import pygame

from game.geometry import flatten_bezier, star_vertices
from game.input import InputManager
from game.runtime import models
from game.runtime.models import Outcome, Point, Task


class Renderer:
    """
    Renderer only draws. It never decides correctness; it is handed the task,
    the session counters and the input manager's positions.
    """

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.w, self.h = screen.get_size()

        self.font_big = self._make_font(56)
        self.font_mid = self._make_font(32)
        self.font_small = self._make_font(22)

        self.bg_color = (250, 248, 240)
        self.ui_color = (40, 40, 60)
        self.active_color = (102, 126, 234)
        self.inactive_color = (200, 200, 210)
        self.done_color = (76, 175, 80)
        self.error_color = (244, 67, 54)
        self.guide_color = (221, 221, 221)

    @staticmethod
    def _make_font(size: int) -> pygame.font.Font:
        # CJK-capable fonts first so both scripts render.
        for name in ("notosanscjkjp", "notosansjp", "msgothic", "hiraginosans"):
            path = pygame.font.match_font(name)
            if path:
                return pygame.font.Font(path, size)
        return pygame.font.SysFont(None, size)

    def clear(self) -> None:
        self.screen.fill(self.bg_color)

    def present(self) -> None:
        pygame.display.flip()

    def text(self, value: str, pos: Tuple[int, int], font=None, color=None, center: bool = False) -> pygame.Rect:
        surf = (font or self.font_small).render(value, True, color or self.ui_color)
        rect = surf.get_rect(center=pos) if center else surf.get_rect(topleft=pos)
        self.screen.blit(surf, rect)
        return rect

    # -----------------------
    # Task area
    # -----------------------

    def draw_task(self, task: Task, current_step: int, inputs: InputManager) -> None:
        if task.kind in models.POINTER_KINDS:
            self._draw_targets(task, current_step)
        elif task.kind == models.KIND_DRAG_DISCRETE:
            self._draw_drag_items(task, inputs)
        elif task.kind == models.KIND_DRAG_CURVE:
            self._draw_path(task)
            self._draw_trail(inputs.trail, self.active_color)
            self._draw_box(inputs.icon_box(), task.icon)
        elif task.kind == models.KIND_TRACE:
            self._draw_shape(task)
            self._draw_trail(inputs.trail, self.active_color)

    def _draw_targets(self, task: Task, current_step: int) -> None:
        for idx, target in enumerate(task.targets):
            if idx < current_step:
                color = self.done_color
            elif idx == current_step:
                color = self.active_color
            else:
                color = self.inactive_color
            center = (int(target.center[0]), int(target.center[1]))
            pygame.draw.circle(self.screen, color, center, int(target.radius))
            self.text(target.target_id, center, self.font_mid, (255, 255, 255), center=True)

    def _draw_drag_items(self, task: Task, inputs: InputManager) -> None:
        for item in task.items:
            zone = pygame.Rect(int(item.zone.x), int(item.zone.y), int(item.zone.width), int(item.zone.height))
            color = self.done_color if item.item_id in inputs.placed else self.inactive_color
            pygame.draw.rect(self.screen, color, zone, width=3, border_radius=10)
        for item in task.items:
            self._draw_box(inputs.item_box(item.item_id), item.icon or item.item_id)

    def _draw_box(self, box, label: str) -> None:
        rect = pygame.Rect(int(box.x), int(box.y), int(box.width), int(box.height))
        pygame.draw.rect(self.screen, self.active_color, rect, border_radius=12)
        if label:
            self.text(label, rect.center, self.font_mid, (255, 255, 255), center=True)

    def _draw_path(self, task: Task) -> None:
        path = task.path
        if path.path_type == "bezier":
            points = flatten_bezier(path.points)
        else:
            points = list(path.points)
        self._polyline(points, self.guide_color, int(path.path_width))
        end = path.points[-1]
        pygame.draw.circle(self.screen, self.done_color, (int(end[0]), int(end[1])), 12)

    def _draw_shape(self, task: Task) -> None:
        shape = task.shape
        width = max(1, int(shape.line_width))
        if shape.shape_type == models.SHAPE_CIRCLE:
            center = (int(shape.center[0]), int(shape.center[1]))
            pygame.draw.circle(self.screen, self.guide_color, center, int(shape.radius), width)
        elif shape.shape_type == models.SHAPE_SQUARE:
            rect = pygame.Rect(int(shape.origin[0]), int(shape.origin[1]), int(shape.size), int(shape.size))
            pygame.draw.rect(self.screen, self.guide_color, rect, width)
        elif shape.shape_type == models.SHAPE_TRIANGLE:
            pygame.draw.polygon(self.screen, self.guide_color, list(shape.vertices), width)
        elif shape.shape_type == models.SHAPE_STAR:
            vertices = star_vertices(shape.center, shape.points, shape.outer_radius, shape.inner_radius)
            pygame.draw.polygon(self.screen, self.guide_color, vertices, width)

    def _draw_trail(self, points: Sequence[Point], color) -> None:
        self._polyline(points, color, 3)

    def _polyline(self, points: Sequence[Point], color, width: int) -> None:
        if len(points) < 2:
            return
        pygame.draw.lines(self.screen, color, False, [(int(x), int(y)) for x, y in points], max(1, width))

    # -----------------------
    # HUD and screens
    # -----------------------

    def draw_hud(self, title: str, remaining: int, score_text: str, hint: str) -> None:
        self.text(title, (20, 12), self.font_mid)
        self.text(f"{remaining}", (self.w - 120, 12), self.font_mid)
        self.text(score_text, (self.w - 120, 48))
        self.text(hint, (self.w // 2, self.h - 30), center=True)

    def draw_feedback(self, message: str, ok: bool) -> None:
        color = self.done_color if ok else self.error_color
        self.text(message, (self.w // 2, 70), self.font_mid, color, center=True)

    def draw_menu(self, title: str, rows: List[Tuple[str, int, int]]) -> List[pygame.Rect]:
        """rows: (task title, difficulty, best stars). Returns one clickable rect per row."""
        self.text(title, (self.w // 2, 40), self.font_big, center=True)
        rects = []
        y = 90
        for name, difficulty, stars in rows:
            rect = pygame.Rect(60, y, self.w - 120, 44)
            pygame.draw.rect(self.screen, self.inactive_color if stars == 0 else self.done_color, rect, 2, 8)
            self.text(name, (rect.x + 12, rect.y + 10))
            level = "★" * difficulty + "☆" * (5 - difficulty)
            self.text(f"{level}  {'*' * stars}", (rect.right - 200, rect.y + 10))
            rects.append(rect)
            y += 52
        return rects

    def draw_result(self, message: str, outcome: Outcome, labels: Dict[str, str]) -> Dict[str, pygame.Rect]:
        self.text(message, (self.w // 2, 120), self.font_big, center=True)
        self.text("*" * outcome.star_rating, (self.w // 2, 190), self.font_big, self.done_color, center=True)
        self.text(f"{labels['score']}: {outcome.final_score}", (self.w // 2, 260), self.font_mid, center=True)
        self.text(f"{labels['time']}: {outcome.elapsed_seconds:.1f}", (self.w // 2, 300), self.font_mid, center=True)
        self.text(f"{labels['errors']}: {outcome.error_count}", (self.w // 2, 340), self.font_mid, center=True)
        buttons = {}
        x = self.w // 2 - 270
        for key in ("retry", "next", "back"):
            rect = pygame.Rect(x, 420, 170, 50)
            pygame.draw.rect(self.screen, self.active_color, rect, border_radius=10)
            self.text(labels[key], rect.center, self.font_small, (255, 255, 255), center=True)
            buttons[key] = rect
            x += 190
        return buttons

    def button(self, label: str, rect: pygame.Rect) -> pygame.Rect:
        pygame.draw.rect(self.screen, self.inactive_color, rect, border_radius=8)
        self.text(label, rect.center, self.font_small, center=True)
        return rect


def score_text(task: Task, score: float) -> str:
    if task.kind in models.CONTINUOUS_KINDS:
        return f"{int(score)}%"
    return f"{int(score)} / {task.step_count()}"

