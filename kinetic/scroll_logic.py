from __future__ import annotations

import logging
import math
import numbers
import time
from functools import partial
from typing import Callable, List, Optional, Tuple

from kinetic.anim import (
    Animation,
    evaluate,
    ease_in_out_cubic,
    ease_out_back,
    ease_out_cubic,
    ease_out_expo,
)
from kinetic.settings import ScrollOptions, ScrollTuning

logger = logging.getLogger(__name__)


class InvalidTimestampError(ValueError):
    """ An input timestamp that is not a finite real number. """


def _now_ms() -> float:
    return time.monotonic() * 1000.0

def _round(v: float) -> int:
    # nearest integer, halves towards +inf
    return int(math.floor(v + 0.5))

def _check_timestamp(ts) -> float:
    if isinstance(ts, bool) or not isinstance(ts, numbers.Real) or not math.isfinite(ts):
        raise InvalidTimestampError(f"timestamp must be a finite number, got {ts!r}")
    return float(ts)


class ScrollLogic:
    """
    Pure logic component for single-axis kinetic scrolling.

    Wiring:
      - configure()        <- geometry source (container/content lengths)
      - begin_interaction(), interact(), end_interaction()
                           <- input source, (offset, timestamp) in ms
      - current_offset()   -> renderer, polled on its own cadence

    There is no timer. An animation is one immutable `Animation` evaluated
    against `clock()` whenever the offset is queried, so irregular polling
    never drifts.
    """
    __slots__ = (
        "options",
        "tuning",
        "clock",
        "on_scrolling_complete",
        "_container_length",
        "_content_length",
        "_max_offset",
        "_scroll_offset",
        "_interacting",
        "_dragging",
        "_scrolling_complete",
        "_animation",
        "_positions",
        "_initial_touch_offset",
        "_last_touch_offset",
        "_last_touch_move",
        "_deceleration_velocity",
        "_decelerating",
    )

    def __init__(
        self,
        options: Optional[ScrollOptions] = None,
        tuning: Optional[ScrollTuning] = None,
        *,
        clock: Optional[Callable[[], float]] = None,
        on_scrolling_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        Creates a scroller with empty geometry at offset 0.
            - options - animating / animation_duration / bouncing
            - tuning - empirical constants (drag threshold, friction, windows)
            - clock - returns the current time in milliseconds
            - on_scrolling_complete - called each time scrolling settles
        """
        self.options = options or ScrollOptions()
        self.tuning = tuning or ScrollTuning()
        self.clock = clock or _now_ms
        self.on_scrolling_complete = on_scrolling_complete

        self._container_length = 0
        self._content_length = 0
        self._max_offset = 0
        self._scroll_offset: float = 0

        self._interacting = False
        self._dragging = False
        self._scrolling_complete = True
        self._animation: Optional[Animation] = None

        self._positions: List[Tuple[float, float]] = []
        self._initial_touch_offset: Optional[float] = None
        self._last_touch_offset: Optional[float] = None
        self._last_touch_move: Optional[float] = None
        self._deceleration_velocity = 0.0
        self._decelerating = False

    # ---------- geometry & queries ----------
    def configure(self, container_length: float, content_length: float) -> None:
        """ Sets the lengths of the container (outer) and content (inner). """
        self._container_length = max(0, _round(container_length))
        self._content_length = max(0, _round(content_length))
        self._max_offset = max(self._content_length - self._container_length, 0)

        # an offset that is now out of range slides back in
        self.scroll_to(self._scroll_offset, True)

    def max_offset(self) -> int:
        return self._max_offset

    def current_offset(self) -> float:
        """ Returns the scroll offset now, evaluating a running animation if there is one. """
        animation = self._animation
        if animation is None:
            return self._scroll_offset

        value, finished = evaluate(animation, self.clock())
        if finished:
            if not self.options.bouncing:
                value = min(max(value, 0), self._max_offset)
            self._scroll_offset = value
            self._animation = None
            self._mark_complete()
            return value

        # Without bouncing the animation is cut at the edge
        if not self.options.bouncing and (value < 0 or value > self._max_offset):
            self._scroll_offset = min(max(value, 0), self._max_offset)
            self._animation = None
            self._mark_complete()
            return self._scroll_offset

        self._scroll_offset = _round(value)
        return self._scroll_offset

    def is_resting(self) -> bool:
        return not self._interacting and self._animation is None

    def is_interacting(self) -> bool:
        return self._interacting

    def is_dragging(self) -> bool:
        return self._dragging

    def is_animating(self) -> bool:
        return self._animation is not None

    def is_decelerating(self) -> bool:
        """ True while the running animation is the post-release deceleration. """
        return self._animation is not None and self._decelerating

    def is_scrolling_complete(self) -> bool:
        return self._scrolling_complete

    @property
    def animation(self) -> Optional[Animation]:
        return self._animation

    @property
    def deceleration_velocity(self) -> float:
        """ Release velocity of the last gesture, in offset per 1/fps frame. """
        return self._deceleration_velocity

    def history(self) -> Tuple[Tuple[float, float], ...]:
        """ (offset, timestamp) samples of the current drag, oldest first. """
        return tuple(self._positions)

    # ---------- programmatic scrolling ----------
    def scroll_to(self, offset: float, animate: bool = False) -> None:
        """ Scrolls to `offset`, clamped to [0, max_offset]. """
        was_animating = self._animation is not None
        self._animation = None

        offset = max(min(self._max_offset, offset), 0)

        # No change: still publish so the stored offset is really in sync
        if offset == self._scroll_offset:
            animate = False

        self._publish(offset, animate, continuing=was_animating)

    def scroll_by(self, delta: float, animate: bool = False) -> None:
        """ Relative scroll. Stacks on top of the target of a running animation. """
        animation = self._animation
        base = animation.target if animation is not None else self._scroll_offset
        self.scroll_to(base + delta, animate)

    # ---------- interaction ----------
    def begin_interaction(self, offset: float, timestamp: float) -> None:
        """ A finger/pointer went down at `offset`. Stops any animation where it is. """
        ts = _check_timestamp(timestamp)

        self._animation = None

        self._initial_touch_offset = offset
        self._last_touch_offset = offset
        self._last_touch_move = ts

        self._interacting = True
        self._dragging = False
        self._scrolling_complete = False
        self._positions.clear()

    def interact(self, offset: float, timestamp: float) -> None:
        """ The finger/pointer moved to `offset`. Ignored outside an interaction. """
        if not self._interacting:
            return
        ts = _check_timestamp(timestamp)

        tuning = self.tuning
        current = self._scroll_offset

        if self._dragging:
            distance = offset - self._last_touch_offset
            new_offset = current - distance

            if new_offset < 0 or new_offset > self._max_offset:
                if self.options.bouncing:
                    new_offset = current - distance / tuning.edge_resistance
                elif new_offset < 0:
                    new_offset = 0
                else:
                    new_offset = self._max_offset

            new_offset = _round(new_offset)
            self._record(new_offset, ts)
            self._publish(new_offset)
        else:
            self._record(current, ts)
            if abs(offset - self._initial_touch_offset) >= tuning.min_drag_distance:
                self._dragging = True
                logger.debug("Drag started at %s (offset %s)", offset, current)

        self._last_touch_offset = offset
        self._last_touch_move = ts

    def end_interaction(self, timestamp: float) -> None:
        """ The finger/pointer was released. Snaps back or starts deceleration. """
        if not self._interacting:
            return
        ts = _check_timestamp(timestamp)

        if not self._dragging:
            # a tap, nothing moved
            self._interacting = False
            self._positions.clear()
            self._mark_complete()
            return

        self._interacting = False
        self._dragging = False

        offset = self._scroll_offset
        if offset < 0 or offset > self._max_offset:
            logger.debug("Released past the edge at %s, snapping back", offset)
            self._positions.clear()
            self.scroll_to(offset, True)
            return

        if self.options.animating:
            self._release(ts)
        else:
            self._mark_complete()

        self._positions.clear()

    # ---------- internals ----------
    def _record(self, offset: float, ts: float) -> None:
        positions = self._positions
        positions.append((offset, ts))
        if len(positions) > self.tuning.history_limit:
            del positions[:len(positions) - self.tuning.history_keep]

    def _mark_complete(self) -> None:
        if self._interacting or self._scrolling_complete:
            return
        self._scrolling_complete = True
        if self.on_scrolling_complete is not None:
            self.on_scrolling_complete()

    def _publish(self, new_offset: float, animate: bool = False, continuing: bool = False) -> None:
        # An interrupted animation continues with ease-out instead of ease-in-out
        continuing = continuing or self._animation is not None
        self._animation = None

        if animate and self.options.animating:
            old_offset = self._scroll_offset
            self._animation = Animation(
                start=self.clock(),
                duration=self.options.animation_duration,
                easing=ease_out_cubic if continuing else ease_in_out_cubic,
                from_offset=old_offset,
                distance=new_offset - old_offset,
            )
            self._decelerating = False
            self._scrolling_complete = False
        else:
            self._scroll_offset = new_offset
            self._mark_complete()

    def _release(self, ts: float) -> None:
        """ Measures the velocity of the last ~100ms of the drag and decides on deceleration. """
        tuning = self.tuning
        last_move = self._last_touch_move

        # the pointer rested before it was lifted
        if ts - last_move > tuning.velocity_window_ms:
            self._mark_complete()
            return

        positions = self._positions
        end = len(positions) - 1
        start = end
        cutoff = last_move - tuning.velocity_window_ms
        for i in range(end, -1, -1):
            if positions[i][1] <= cutoff:
                break
            start = i

        if end < 0 or start == end:
            self._mark_complete()
            return

        elapsed = positions[end][1] - positions[start][1]
        if elapsed <= 0:
            self._mark_complete()
            return

        moved = self._scroll_offset - positions[start][0]
        self._deceleration_velocity = moved / elapsed * (1000.0 / tuning.fps)

        if abs(self._deceleration_velocity) > tuning.min_velocity_for_deceleration:
            self._start_deceleration()
        else:
            self._mark_complete()

    def _start_deceleration(self) -> None:
        tuning = self.tuning
        velocity = self._deceleration_velocity
        friction = tuning.friction_per_frame

        # frames until friction brings the velocity under the stop threshold
        frames = (math.log(tuning.min_velocity_before_terminating) - math.log(abs(velocity))) / math.log(friction)
        if frames <= 0:
            self._mark_complete()
            return
        duration = frames / tuning.fps * 1000.0

        # geometric series over those frames
        distance = velocity * (1 - friction ** frames) / (1 - friction)

        offset = self._scroll_offset
        projected = offset + distance
        travel = _round(distance)
        easing = ease_out_expo

        if self.options.bouncing and (projected < 0 or projected > self._max_offset):
            travel = -offset if projected < 0 else self._max_offset - offset
            # same constant for the overshoot tension and the shortening
            easing = partial(ease_out_back, s=tuning.edge_resistance)
            duration = duration / tuning.edge_resistance

        self._animation = Animation(
            start=self.clock(),
            duration=duration,
            easing=easing,
            from_offset=offset,
            distance=travel,
        )
        self._decelerating = True
        self._scrolling_complete = False
        logger.debug(
            "Deceleration: velocity=%.3f distance=%s duration=%.1fms",
            velocity, travel, duration,
        )
