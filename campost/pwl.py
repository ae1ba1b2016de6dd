"""Piecewise linear functions."""

from __future__ import annotations

import enum
import math
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, NamedTuple, Optional, TextIO

DEFAULT_EPS = 1e-6


@dataclass
class Interval:
    """A closed interval [start, end]."""

    start: float
    end: float

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    def clip(self, value: float) -> float:
        if value < self.start:
            return self.start
        if value > self.end:
            return self.end
        return value

    def length(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class Point:
    """A 2D point or vector."""

    x: float = 0.0
    y: float = 0.0

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __mod__(self, other: "Point") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def __truediv__(self, factor: float) -> "Point":
        return Point(self.x / factor, self.y / factor)

    def len2(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.len2())


class PerpType(enum.Enum):
    """Kind of closest point found by Pwl.invert."""

    NOT_FOUND = enum.auto()
    START = enum.auto()
    END = enum.auto()
    VERTEX = enum.auto()
    PERPENDICULAR = enum.auto()


class Inversion(NamedTuple):
    kind: PerpType
    perp: Optional[Point]
    span: int


class Pwl:
    """A piecewise linear function defined by control points with increasing x."""

    def __init__(self, points: Optional[Iterable] = None):
        self._points: list[Point] = [
            p if isinstance(p, Point) else Point(*p) for p in (points or ())
        ]

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"Pwl({[(p.x, p.y) for p in self._points]!r})"

    def _require_points(self) -> None:
        if len(self._points) < 2:
            raise ValueError("Pwl: at least two control points are required")

    def read(self, params: Iterable) -> None:
        """Append points from a flat sequence x0, y0, x1, y1, ..."""
        values = [float(v) for v in params]
        if len(values) % 2:
            raise ValueError("Pwl: odd number of values")
        new_points: list[Point] = []
        for x, y in zip(values[0::2], values[1::2]):
            if new_points and not x > new_points[-1].x:
                raise ValueError("Pwl: x values must be strictly increasing")
            new_points.append(Point(x, y))
        self._points.extend(new_points)
        if len(self._points) < 2:
            raise ValueError("Pwl: at least two control points are required")

    def append(self, x: float, y: float, eps: float = DEFAULT_EPS) -> None:
        if not self._points or self._points[-1].x + eps < x:
            self._points.append(Point(x, y))

    def prepend(self, x: float, y: float, eps: float = DEFAULT_EPS) -> None:
        if not self._points or self._points[0].x - eps > x:
            self._points.insert(0, Point(x, y))

    def domain(self) -> Interval:
        if not self._points:
            raise ValueError("Pwl: empty function has no domain")
        return Interval(self._points[0].x, self._points[-1].x)

    def range(self) -> Interval:
        if not self._points:
            raise ValueError("Pwl: empty function has no range")
        ys = [p.y for p in self._points]
        return Interval(min(ys), max(ys))

    def empty(self) -> bool:
        return not self._points

    def eval(self, x: float, span: Optional[int] = None) -> float:
        """Evaluate at x, optionally starting the search from a span guess."""
        return self.eval_span(x, span)[0]

    def eval_span(self, x: float, span: Optional[int] = -1) -> tuple[float, int]:
        """Evaluate at x and also return the span used (-1 or None: no guess)."""
        self._require_points()
        start = span if span is not None and span != -1 else len(self._points) // 2 - 1
        span = self._find_span(x, start)
        p0, p1 = self._points[span], self._points[span + 1]
        return p0.y + (x - p0.x) * (p1.y - p0.y) / (p1.x - p0.x), span

    def _find_span(self, x: float, span: int) -> int:
        points = self._points
        last_span = len(points) - 2
        span = max(0, min(last_span, span))
        while span < last_span and x >= points[span + 1].x:
            span += 1
        while span and x < points[span].x:
            span -= 1
        return span

    def invert(self, xy: Point, span: int = -1, eps: float = DEFAULT_EPS) -> Inversion:
        """Find the closest perpendicular to xy, searching from span + 1."""
        if span < -1:
            raise ValueError("Pwl: span must be at least -1")
        points = self._points
        prev_off_end = False
        span += 1
        while span < len(points) - 1:
            start = points[span]
            span_vec = points[span + 1] - start
            t = ((xy - start) % span_vec) / span_vec.len2()
            if t < -eps:
                if span == 0:
                    return Inversion(PerpType.START, start, span)
                if prev_off_end:
                    return Inversion(PerpType.VERTEX, start, span)
            elif t > 1 + eps:
                if span == len(points) - 2:
                    return Inversion(PerpType.END, points[span + 1], span)
                prev_off_end = True
            else:
                return Inversion(PerpType.PERPENDICULAR, start + span_vec * t, span)
            span += 1
        return Inversion(PerpType.NOT_FOUND, None, span)

    def compose(self, other: "Pwl", eps: float = DEFAULT_EPS) -> "Pwl":
        """Return the function applying self first and other after."""
        self._require_points()
        other._require_points()
        pts, opts = self._points, other._points
        this_x, this_y = pts[0].x, pts[0].y
        this_span = 0
        other_span = other._find_span(this_y, 0)
        result = Pwl([Point(this_x, other.eval(this_y, other_span))])
        while this_span != len(pts) - 1:
            dx = pts[this_span + 1].x - pts[this_span].x
            dy = pts[this_span + 1].y - pts[this_span].y
            if (
                abs(dy) > eps
                and other_span + 1 < len(opts)
                and pts[this_span + 1].y >= opts[other_span + 1].x + eps
            ):
                this_x = pts[this_span].x + (opts[other_span + 1].x - pts[this_span].y) * dx / dy
                other_span += 1
                this_y = opts[other_span].x
            elif (
                abs(dy) > eps
                and other_span > 0
                and pts[this_span + 1].y <= opts[other_span - 1].x - eps
            ):
                this_x = pts[this_span].x + (opts[other_span + 1].x - pts[this_span].y) * dx / dy
                other_span -= 1
                this_y = opts[other_span].x
            else:
                this_span += 1
                this_x, this_y = pts[this_span].x, pts[this_span].y
            result.append(this_x, other.eval(this_y, other_span), eps)
        return result

    def map(self, func: Callable[[float, float], None]) -> None:
        """Call func(x, y) at every control point."""
        for p in self._points:
            func(p.x, p.y)

    @staticmethod
    def map2(pwl0: "Pwl", pwl1: "Pwl", func: Callable[[float, float, float], None]) -> None:
        """Call func(x, y0, y1) wherever either function has a control point."""
        pwl0._require_points()
        pwl1._require_points()
        p0, p1 = pwl0._points, pwl1._points
        span0 = span1 = 0
        x = min(p0[0].x, p1[0].x)
        func(x, pwl0.eval(x, span0), pwl1.eval(x, span1))
        while span0 < len(p0) - 1 or span1 < len(p1) - 1:
            if span0 == len(p0) - 1:
                span1 += 1
                x = p1[span1].x
            elif span1 == len(p1) - 1:
                span0 += 1
                x = p0[span0].x
            elif p0[span0 + 1].x > p1[span1 + 1].x:
                span1 += 1
                x = p1[span1].x
            else:
                span0 += 1
                x = p0[span0].x
            func(x, pwl0.eval(x, span0), pwl1.eval(x, span1))

    @staticmethod
    def combine(
        pwl0: "Pwl",
        pwl1: "Pwl",
        func: Callable[[float, float, float], float],
        eps: float = DEFAULT_EPS,
    ) -> "Pwl":
        """Build a function whose y values are func(x, y0, y1) at either's knots."""
        result = Pwl()
        Pwl.map2(pwl0, pwl1, lambda x, y0, y1: result.append(x, func(x, y0, y1), eps))
        return result

    def match_domain(self, domain: Interval, clip: bool = True, eps: float = DEFAULT_EPS) -> None:
        """Extend to cover domain, either clipped or linearly extrapolated."""
        self._require_points()
        start_x = self._points[0].x if clip else domain.start
        self.prepend(domain.start, self.eval(start_x, 0), eps)
        end_x = self._points[-1].x if clip else domain.end
        self.append(domain.end, self.eval(end_x, len(self._points) - 2), eps)

    def generate_lut(self) -> list[float]:
        """Values at x = 0, 1, ... up to the end of the domain."""
        end = int(self.domain().end + 1)
        lut = []
        span = 0
        for x in range(end):
            value, span = self.eval_span(x, span)
            lut.append(value)
        return lut

    def __imul__(self, factor: float) -> "Pwl":
        self._points = [Point(p.x, p.y * factor) for p in self._points]
        return self

    def debug(self, file: Optional[TextIO] = None) -> None:
        out = sys.stderr if file is None else file
        out.write("Pwl {\n")
        for p in self._points:
            out.write("\t(%g, %g)\n" % (p.x, p.y))
        out.write("}\n")