from typing import Dict, List, Optional

import pygame

from config.settings import WindowConfig
from game.input import InputManager
from game.renderer import Renderer, score_text
from game.runtime import models
from game.runtime.models import Feedback
from game.task_manager import Trainer

SCRIPTS = ("hiragana", "kanji")

# UI strings per script: (hiragana, kanji)
TEXTS: Dict[str, tuple] = {
    "select_title": ("れんしゅうをえらぼう", "練習を選ぼう"),
    "lang_toggle": ("かんじ", "ひらがな"),
    "hover_hint": ("つぎは{num}にマウスをかざしてね!", "次は{num}にマウスをかざしてね!"),
    "click_hint": ("つぎは{num}をクリックしてね!", "次は{num}をクリックしてね!"),
    "doubleclick_hint": ("つぎは{num}をダブルクリックしてね!", "次は{num}をダブルクリックしてね!"),
    "drag_hint": ("のこり{num}こをドラッグしよう!", "残り{num}個をドラッグしよう!"),
    "curve_hint": ("せんにそってドラッグしてね!", "線に沿ってドラッグしてね!"),
    "trace_hint": ("ずけいをマウスでなぞってね!", "図形をマウスでなぞってね!"),
    "wrong_order": ("じゅんばんがちがうよ!", "順番が違うよ!"),
    "great": ("やったね!", "やったね!"),
    "need_second_click": ("もういちどクリック!", "もう一度クリック!"),
    "score": ("スコア", "スコア"),
    "time": ("かかったじかん", "かかった時間"),
    "errors": ("まちがえたかず", "間違えた数"),
    "retry": ("もういちど", "もう一度"),
    "next": ("つぎのれんしゅうへ", "次の練習へ"),
    "back": ("もどる", "戻る"),
}

RESULT_MESSAGES = {
    5: ("パーフェクト!", "パーフェクト!"),
    4: ("すごいね!", "すごいね!"),
    3: ("がんばったね!", "がんばったね!"),
    2: ("もうすこし!", "もう少し!"),
    1: ("れんしゅうしてみよう", "練習してみよう"),
}

HINT_KEYS = {
    models.KIND_HOVER: "hover_hint",
    models.KIND_CLICK: "click_hint",
    models.KIND_DOUBLE_CLICK: "doubleclick_hint",
    models.KIND_DRAG_DISCRETE: "drag_hint",
    models.KIND_DRAG_CURVE: "curve_hint",
    models.KIND_TRACE: "trace_hint",
}

SCREEN_MENU = "MENU"
SCREEN_GAME = "GAME"
SCREEN_RESULT = "RESULT"

FEEDBACK_MS = 1000


class GameApp:
    def __init__(self, window: WindowConfig, trainer: Trainer) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        self.clock = pygame.time.Clock()
        self.window = window
        self.renderer = Renderer(self.screen)
        self.trainer = trainer

        self.script = SCRIPTS[0]
        self.screen_name = SCREEN_MENU
        self.running = True
        self.inputs: Optional[InputManager] = None
        self.hint_text = ""
        self.feedback_text = ""
        self.feedback_ok = True
        self.feedback_ms = 0

        self.menu_rects: List[pygame.Rect] = []
        self.lang_rect = pygame.Rect(window.width - 140, 10, 120, 34)
        self.result_buttons: Dict[str, pygame.Rect] = {}
        self.menu_stars: Dict[str, int] = trainer.progress.best_stars()

    def t(self, key: str, **kwargs) -> str:
        value = TEXTS[key][SCRIPTS.index(self.script)]
        return value.format(**kwargs) if kwargs else value

    def run(self) -> None:
        while self.running:
            self.clock.tick(self.window.fps)
            now_ms = pygame.time.get_ticks()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self._back_to_menu()
                else:
                    self._dispatch(event, now_ms)

            if self.screen_name == SCREEN_GAME:
                self._apply(self.trainer.update(now_ms), now_ms)

            self._render(now_ms)

        self.trainer.stop()
        pygame.quit()

    def _dispatch(self, event, now_ms: int) -> None:
        if self.screen_name == SCREEN_GAME and self.inputs is not None:
            for interaction in self.inputs.process_pygame_event(event):
                self._apply(self.trainer.handle_event(interaction, now_ms), now_ms)
            return
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return
        if self.screen_name == SCREEN_MENU:
            if self.lang_rect.collidepoint(event.pos):
                self.script = SCRIPTS[1] if self.script == SCRIPTS[0] else SCRIPTS[0]
                return
            for rect, task in zip(self.menu_rects, self.trainer.task_list()):
                if rect.collidepoint(event.pos):
                    self._start(task.task_id, now_ms)
                    return
        elif self.screen_name == SCREEN_RESULT:
            if self._clicked("retry", event.pos):
                self._start(self.trainer.machine.task.task_id, now_ms)
            elif self._clicked("next", event.pos):
                nxt = self.trainer.next_task(self.trainer.machine.task.task_id)
                if nxt is not None:
                    self._start(nxt.task_id, now_ms)
                else:
                    self._back_to_menu()
            elif self._clicked("back", event.pos):
                self._back_to_menu()

    def _clicked(self, key: str, pos) -> bool:
        rect = self.result_buttons.get(key)
        return rect is not None and rect.collidepoint(pos)

    def _start(self, task_id: str, now_ms: int) -> None:
        feedback = self.trainer.start(task_id, now_ms)
        machine = self.trainer.machine
        self.inputs = InputManager(machine.task, machine.session_id)
        self.feedback_text = ""
        self.screen_name = SCREEN_GAME
        self._apply(feedback, now_ms)

    def _back_to_menu(self) -> None:
        self.trainer.stop()
        self.inputs = None
        self.screen_name = SCREEN_MENU
        self.menu_stars = self.trainer.progress.best_stars()

    def _apply(self, feedback: List[Feedback], now_ms: int) -> None:
        for item in feedback:
            if self.inputs is not None:
                self.inputs.on_feedback(item)
            if item.kind == models.HINT_CHANGED:
                self.hint_text = self._hint(item)
            elif item.kind == models.STEP_SUCCEEDED:
                self._flash(self.t("great"), True, now_ms)
            elif item.kind == models.NEED_SECOND_CLICK:
                self._flash(self.t("need_second_click"), True, now_ms)
            elif item.kind in (models.STEP_FAILED, models.GESTURE_NEEDS_RETRY):
                message = self.t("wrong_order")
                if item.match_rate is not None:
                    message = f"{int(round(item.match_rate))}% - {message}"
                self._flash(message, False, now_ms)
            elif item.kind == models.TASK_COMPLETED:
                self.screen_name = SCREEN_RESULT

    def _hint(self, item: Feedback) -> str:
        key = HINT_KEYS[self.trainer.machine.task.kind]
        if item.target_id is not None:
            return self.t(key, num=item.target_id)
        if item.remaining is not None:
            return self.t(key, num=item.remaining)
        return self.t(key)

    def _flash(self, text: str, ok: bool, now_ms: int) -> None:
        self.feedback_text = text
        self.feedback_ok = ok
        self.feedback_ms = now_ms

    def _render(self, now_ms: int) -> None:
        self.renderer.clear()
        if self.screen_name == SCREEN_MENU:
            rows = [
                (task.title_for(self.script), task.difficulty, self.menu_stars.get(task.task_id, 0))
                for task in self.trainer.task_list()
            ]
            self.menu_rects = self.renderer.draw_menu(self.t("select_title"), rows)
            self.renderer.button(self.t("lang_toggle"), self.lang_rect)
        elif self.screen_name == SCREEN_GAME:
            machine = self.trainer.machine
            session = machine.session
            self.renderer.draw_task(machine.task, session.current_step, self.inputs)
            self.renderer.draw_hud(
                machine.task.title_for(self.script),
                machine.remaining_seconds(now_ms),
                score_text(machine.task, session.score),
                self.hint_text,
            )
            if self.feedback_text and now_ms - self.feedback_ms <= FEEDBACK_MS:
                self.renderer.draw_feedback(self.feedback_text, self.feedback_ok)
        elif self.screen_name == SCREEN_RESULT and self.trainer.last_outcome is not None:
            outcome = self.trainer.last_outcome
            message = RESULT_MESSAGES[outcome.star_rating][SCRIPTS.index(self.script)]
            labels = {key: self.t(key) for key in ("score", "time", "errors", "retry", "next", "back")}
            self.result_buttons = self.renderer.draw_result(message, outcome, labels)
        self.renderer.present()
