import pygame

from game.input import InputManager
from game.runtime import models
from game.runtime.models import Feedback


def press(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)


def release(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=1)


def motion(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(0, 0, 0))


def test_click_on_target(click_task):
    inputs = InputManager(click_task, "s1")
    center = click_task.targets[2].center
    out = inputs.process_pygame_event(press(center))
    assert out == [models.click("3", "s1")]
    assert inputs.process_pygame_event(press((5, 5))) == []


def test_right_button_is_ignored(click_task):
    inputs = InputManager(click_task, "s1")
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=click_task.targets[0].center, button=3)
    assert inputs.process_pygame_event(event) == []


def test_hover_enter_and_leave(hover_task):
    inputs = InputManager(hover_task, "s1")
    first, second = hover_task.targets[0].center, hover_task.targets[1].center
    assert inputs.process_pygame_event(motion(first)) == [models.pointer_enter("1", "s1")]
    assert inputs.process_pygame_event(motion(first)) == []
    assert inputs.process_pygame_event(motion(second)) == [
        models.pointer_leave("1", "s1"),
        models.pointer_enter("2", "s1"),
    ]
    assert inputs.process_pygame_event(motion((5, 5))) == [models.pointer_leave("2", "s1")]


def test_drag_item_onto_its_zone(drag_task):
    inputs = InputManager(drag_task, "s1")
    item = drag_task.items[0]
    grab = (item.start[0] + 10, item.start[1] + 10)
    assert inputs.process_pygame_event(press(grab)) == []
    assert inputs.dragging_item == "a"

    zone = item.zone
    drop_at = (zone.x + 20, zone.y + 20)
    inputs.process_pygame_event(motion(drop_at))
    out = inputs.process_pygame_event(release(drop_at))
    assert out == [models.drop("a", "a", True, "s1")]

    inputs.on_feedback(Feedback(kind=models.STEP_SUCCEEDED, session_id="s1", target_id="a"))
    assert "a" in inputs.placed
    assert inputs.process_pygame_event(press(inputs.item_positions["a"])) == []


def test_missed_drop_returns_item(drag_task):
    inputs = InputManager(drag_task, "s1")
    item = drag_task.items[1]
    inputs.process_pygame_event(press((item.start[0] + 5, item.start[1] + 5)))
    inputs.process_pygame_event(motion((300, 500)))
    out = inputs.process_pygame_event(release((300, 500)))
    assert out == [models.drop("b", None, False, "s1")]
    inputs.on_feedback(Feedback(kind=models.STEP_FAILED, session_id="s1", target_id="b"))
    assert inputs.item_positions["b"] == item.start


def test_curve_gesture(curve_task):
    inputs = InputManager(curve_task, "s1")
    assert inputs.process_pygame_event(press((0, 0))) == []
    start = (curve_task.start[0] + 10, curve_task.start[1] + 10)
    assert inputs.process_pygame_event(press(start)) == [models.drag_start(start, "s1")]
    assert inputs.process_pygame_event(motion((200, 300))) == [models.drag_move((200, 300), "s1")]
    assert inputs.process_pygame_event(release((210, 300))) == [models.drag_end((210, 300), "s1")]

    inputs.on_feedback(Feedback(kind=models.GESTURE_NEEDS_RETRY, session_id="s1"))
    assert inputs.icon_position == curve_task.start
    assert inputs.trail == []


def test_trace_press_anywhere(trace_task):
    inputs = InputManager(trace_task, "s1")
    assert inputs.process_pygame_event(motion((10, 10))) == []
    assert inputs.process_pygame_event(press((10, 10))) == [models.drag_start((10, 10), "s1")]
    inputs.process_pygame_event(motion((20, 20)))
    assert inputs.trail == [(10, 10), (20, 20)]
