from __future__ import annotations

import math
from typing import List, Sequence

from config.settings import GestureConfig
from game.runtime.models import (
    SHAPE_CIRCLE,
    SHAPE_SQUARE,
    SHAPE_STAR,
    SHAPE_TRIANGLE,
    Point,
    Rect,
    Shape,
)


# Points that cannot be matched against a shape get this distance.
UNMATCHED = math.inf

GESTURE = GestureConfig()


def distance(p: Point, q: Point) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])


def distance_to_segment(point: Point, a: Point, b: Point) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return distance(point, a)
    t = ((point[0] - a[0]) * dx + (point[1] - a[1]) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    return distance(point, (a[0] + t * dx, a[1] + t * dy))


def distance_to_polyline(point: Point, points: Sequence[Point]) -> float:
    if len(points) < 2:
        return math.inf
    return min(distance_to_segment(point, points[i], points[i + 1]) for i in range(len(points) - 1))


def match_threshold(shape: Shape, config: GestureConfig = GESTURE) -> float:
    return shape.line_width * config.trace_threshold_factor


def distance_to_shape(point: Point, shape: Shape, threshold: float | None = None) -> float:
    if shape.shape_type == SHAPE_CIRCLE:
        return abs(distance(point, shape.center) - shape.radius)

    if shape.shape_type == SHAPE_SQUARE:
        x, y = shape.origin
        size = shape.size
        px, py = point
        # Only points inside the box count, even when close to an edge's extension.
        if not (x <= px <= x + size and y <= py <= y + size):
            return UNMATCHED
        return min(abs(py - y), abs(py - (y + size)), abs(px - x), abs(px - (x + size)))

    if shape.shape_type == SHAPE_STAR:
        if threshold is None:
            threshold = match_threshold(shape)
        radial = distance(point, shape.center)
        # Radius-band approximation, not true distance to the star outline.
        if shape.inner_radius - threshold <= radial <= shape.outer_radius + threshold:
            return 0.0
        return UNMATCHED

    if shape.shape_type == SHAPE_TRIANGLE:
        if len(shape.vertices) != 3:
            return UNMATCHED
        closed = list(shape.vertices) + [shape.vertices[0]]
        return distance_to_polyline(point, closed)

    return UNMATCHED


def shape_match_rate(points: Sequence[Point], shape: Shape, config: GestureConfig = GESTURE) -> float:
    """
    Percentage (0..100) of sampled points lying within the match threshold of
    the shape outline. Gestures shorter than ``config.min_trace_points`` score 0.
    """
    if len(points) < config.min_trace_points:
        return 0.0
    threshold = match_threshold(shape, config)
    matched = sum(1 for p in points if distance_to_shape(p, shape, threshold) < threshold)
    return matched / len(points) * 100.0


def point_in_circle(point: Point, center: Point, radius: float) -> bool:
    return distance(point, center) <= radius


def point_in_rect(point: Point, rect: Rect) -> bool:
    return rect.x <= point[0] <= rect.right and rect.y <= point[1] <= rect.bottom


def rects_overlap(a: Rect, b: Rect) -> bool:
    # Touching edges count as overlap.
    return not (a.right < b.x or a.x > b.right or a.bottom < b.y or a.y > b.bottom)


def flatten_bezier(points: Sequence[Point], steps: int = 24) -> List[Point]:
    """Sample a piecewise cubic path given as p0, (c1, c2, p3), (c1, c2, p3)..."""
    if not points:
        return []
    out = [points[0]]
    i = 1
    while i + 2 < len(points):
        p0 = points[i - 1]
        c1, c2, p3 = points[i], points[i + 1], points[i + 2]
        for s in range(1, steps + 1):
            t = s / steps
            u = 1.0 - t
            x = u ** 3 * p0[0] + 3 * u * u * t * c1[0] + 3 * u * t * t * c2[0] + t ** 3 * p3[0]
            y = u ** 3 * p0[1] + 3 * u * u * t * c1[1] + 3 * u * t * t * c2[1] + t ** 3 * p3[1]
            out.append((x, y))
        i += 3
    return out


def star_vertices(center: Point, points: int, outer_radius: float, inner_radius: float) -> List[Point]:
    cx, cy = center
    step = math.pi / points
    rot = math.pi / 2 * 3
    out: List[Point] = []
    for _ in range(points):
        out.append((cx + math.cos(rot) * outer_radius, cy + math.sin(rot) * outer_radius))
        rot += step
        out.append((cx + math.cos(rot) * inner_radius, cy + math.sin(rot) * inner_radius))
        rot += step
    return out
