from __future__ import annotations

import math
from dataclasses import dataclass

from hub.constants import MAX_FRAME_DT
from hub.utils.spring_math import SpringParams, spring_step


@dataclass(slots=True)
class Spring:
    """A single smoothed scalar chasing ``target``."""

    params: SpringParams
    value: float = 0.0
    velocity: float = 0.0
    target: float = 0.0

    def step(self, dt: float) -> None:
        if dt <= 0.0:
            return
        # Split long frames so a hitch never feeds the integrator a step larger than one frame.
        steps = max(1, math.ceil(dt / MAX_FRAME_DT - 1e-9))
        sub_dt = dt / steps
        for _ in range(steps):
            self.value, self.velocity = spring_step(self.value, self.velocity, self.target, self.params, sub_dt)

    def snap(self, value: float) -> None:
        self.value = value
        self.target = value
        self.velocity = 0.0

    def settled(self, tolerance: float = 1e-3) -> bool:
        return abs(self.target - self.value) <= tolerance and abs(self.velocity) <= tolerance


@dataclass(slots=True)
class Spring2D:
    """Pair of springs sharing parameters, used for screen positions."""

    x: Spring
    y: Spring

    @classmethod
    def at(cls, params: SpringParams, x: float, y: float) -> "Spring2D":
        return cls(
            x=Spring(params=params, value=x, target=x),
            y=Spring(params=params, value=y, target=y),
        )

    def retarget(self, x: float, y: float) -> None:
        self.x.target = x
        self.y.target = y

    def step(self, dt: float) -> None:
        self.x.step(dt)
        self.y.step(dt)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x.value, self.y.value)
