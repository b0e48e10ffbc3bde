from __future__ import annotations

import enum
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class TransitionMode(enum.Enum):
    ONCE = "once"
    LOOP = "loop"
    BACK_AND_FORTH = "back_and_forth"


class Easing(enum.Enum):
    LINEAR = "linear"
    CUBIC = "cubic"


def _ease(easing: Easing, t: float) -> float:
    if easing is Easing.CUBIC:
        # smoothstep-style cubic: 3t^2 - 2t^3
        return t * t * (3.0 - 2.0 * t)
    return t


class ScheduledTask:
    def __init__(self, delay: float, callback: Callable[[], None], repeat: bool = False):
        if delay <= 0:
            raise ValueError("delay must be positive")
        self.delay = delay
        self.callback = callback
        self.repeat = repeat
        self.elapsed = 0.0
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def alive(self) -> bool:
        return not (self.cancelled or self.done)

    def advance(self, dt: float) -> None:
        self.elapsed += dt
        while self.alive and self.elapsed >= self.delay:
            self.elapsed -= self.delay
            self.callback()
            if not self.repeat:
                self.done = True


class Transition:
    """Interpolates a value and feeds it to ``setter`` every update."""

    def __init__(
        self,
        setter: Callable[[float], None],
        start: float,
        end: float,
        duration: float,
        mode: TransitionMode = TransitionMode.ONCE,
        easing: Easing = Easing.LINEAR,
        on_done: Callable[[], None] | None = None,
    ):
        if duration <= 0:
            raise ValueError("duration must be positive")
        self.setter = setter
        self.start = start
        self.end = end
        self.duration = duration
        self.mode = mode
        self.easing = easing
        self.on_done = on_done
        self.elapsed = 0.0
        self.forward = True
        self.cancelled = False
        self.done = False
        setter(start)

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def alive(self) -> bool:
        return not (self.cancelled or self.done)

    def value_at(self, t: float) -> float:
        k = _ease(self.easing, t)
        if not self.forward:
            k = 1.0 - k
        return self.start + (self.end - self.start) * k

    def advance(self, dt: float) -> None:
        if not self.alive:
            return
        self.elapsed += dt
        while self.elapsed >= self.duration:
            self.elapsed -= self.duration
            if self.mode is TransitionMode.ONCE:
                self.setter(self.value_at(1.0))
                self.done = True
                if self.on_done is not None:
                    self.on_done()
                return
            if self.mode is TransitionMode.BACK_AND_FORTH:
                self.forward = not self.forward
        self.setter(self.value_at(self.elapsed / self.duration))


class Scheduler:
    """Frame-driven timers and tweens. ``update`` is called once per tick."""

    def __init__(self):
        self._tasks: list[ScheduledTask] = []
        self._transitions: list[Transition] = []

    def schedule(self, delay: float, callback: Callable[[], None], repeat: bool = False) -> ScheduledTask:
        task = ScheduledTask(delay, callback, repeat)
        self._tasks.append(task)
        return task

    def tween(
        self,
        setter: Callable[[float], None],
        start: float,
        end: float,
        duration: float,
        mode: TransitionMode = TransitionMode.ONCE,
        easing: Easing = Easing.LINEAR,
        on_done: Callable[[], None] | None = None,
    ) -> Transition:
        transition = Transition(setter, start, end, duration, mode, easing, on_done)
        self._transitions.append(transition)
        return transition

    def update(self, dt: float) -> None:
        # Callbacks may schedule more work; iterate over a snapshot.
        for task in list(self._tasks):
            if task.alive:
                task.advance(dt)
        for transition in list(self._transitions):
            if transition.alive:
                transition.advance(dt)
        self._tasks = [t for t in self._tasks if t.alive]
        self._transitions = [t for t in self._transitions if t.alive]

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if t.alive) + sum(1 for t in self._transitions if t.alive)
