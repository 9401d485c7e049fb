from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Tuple

# Easing Equations (c) 2003 Robert Penner, BSD License.
# Every curve maps 0 -> 0 and 1 -> 1.

def ease_out_cubic(p: float) -> float:
    p = p - 1
    return p * p * p + 1

def ease_in_out_cubic(p: float) -> float:
    if p < 0.5:
        return 4 * p * p * p
    p = p - 1
    return 4 * p * p * p + 1

def ease_out_expo(p: float) -> float:
    # the formula alone gives 0.999023 at p == 1
    if p == 1:
        return 1.0
    return 1 - 2 ** (-10 * p)

def ease_out_back(p: float, s: float = 3.0) -> float:
    p = p - 1
    return p * p * ((s + 1) * p + s) + 1


@dataclass(frozen=True)
class Animation:
    """
    One in-flight scroll animation.

    Times are milliseconds on the engine clock. The descriptor never changes
    after creation; the position at any moment comes from `evaluate()`.
    """
    start: float
    duration: float
    easing: Callable[[float], float]
    from_offset: float
    distance: float

    @property
    def target(self) -> float:
        return self.from_offset + self.distance

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return (now - self.start) / self.duration


def evaluate(animation: Animation, now: float) -> Tuple[float, bool]:
    """ Returns (offset, finished) for `animation` at time `now`. """
    u = animation.progress(now)
    if u >= 1.0:
        return animation.target, True
    u = max(0.0, u)
    return animation.from_offset + animation.distance * animation.easing(u), False
