from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class SpringParams:
    stiffness: float
    damping: float
    mass: float = 1.0

    def __post_init__(self) -> None:
        if self.mass <= 0.0:
            raise ValueError("spring mass must be positive")

    @classmethod
    def of(cls, values: Tuple[float, float, float]) -> "SpringParams":
        stiffness, damping, mass = values
        return cls(stiffness=float(stiffness), damping=float(damping), mass=float(mass))


def spring_step(value: float, velocity: float, target: float, params: SpringParams, dt: float) -> Tuple[float, float]:
    """Advance a damped spring by one semi-implicit Euler step.

    Velocity is updated first and the new velocity moves the value, which keeps
    the integrator stable for frame-sized steps at the stiffness/damping ranges
    the UI uses (stiffness <= 600, damping <= 40).
    """
    acceleration = (params.stiffness * (target - value) - params.damping * velocity) / params.mass
    velocity += acceleration * dt
    value += velocity * dt
    return value, velocity


def is_critically_damped(params: SpringParams) -> bool:
    # damping >= 2 * sqrt(k * m) means no overshoot.
    return params.damping * params.damping >= 4.0 * params.stiffness * params.mass
