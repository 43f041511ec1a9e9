import numpy as np
from dataclasses import replace
from typing import Tuple

from .models import KinematicState, LaunchParameters, Vector2


class PhysicsEngine:
    """Fixed-timestep 2D ball stepper with gravity, wind and ground contact"""

    G = 9.8  # gravity (m/s^2)
    WIND_FACTOR = 0.5  # wind -> horizontal acceleration
    SPEED_SCALE = 1.5  # power -> launch speed
    TRAIL_SPACING = 0.5  # min movement in either axis before a trail point is kept

    def __init__(self, dt: float = 1 / 60):
        self.dt = dt

    def launch(self, params: LaunchParameters) -> KinematicState:
        """Build the initial state for a shot."""
        v_total = params.power * self.SPEED_SCALE
        launch_rad = np.radians(params.launch_angle_degrees())

        start = Vector2(float(params.start_x), float(params.start_y))
        velocity = Vector2(
            float(v_total * np.cos(launch_rad)),
            float(v_total * np.sin(launch_rad)),
        )
        return KinematicState(
            position=start,
            velocity=velocity,
            bounce_count=0,
            stopped=False,
            trail=(start,),
        )

    def step(self, state: KinematicState, params: LaunchParameters) -> KinematicState:
        """
        Advance one timestep. A stopped state is returned unchanged.
        """
        if state.stopped:
            return state

        vx, vy = state.velocity.x, state.velocity.y
        x, y = state.position.x, state.position.y

        # 1. Velocity first (semi-implicit Euler)
        vy -= self.G * self.dt
        vx += params.wind * self.WIND_FACTOR * self.dt

        # 2. Then position
        x += vx * self.dt
        y += vy * self.dt

        # 3. Ground contact
        bounces = state.bounce_count
        stopped = False
        if y <= 0:
            y = 0.0
            vx, vy, bounces, stopped = params.ground.resolve(
                vx, vy, bounces, params.bounce_limit
            )

        position = Vector2(x, y)
        return replace(
            state,
            position=position,
            velocity=Vector2(vx, vy),
            bounce_count=bounces,
            stopped=stopped,
            trail=self._sample_trail(state.trail, position),
        )

    def _sample_trail(self, trail: Tuple[Vector2, ...], position: Vector2) -> Tuple[Vector2, ...]:
        if not trail:
            return (position,)
        last = trail[-1]
        if (abs(position.x - last.x) > self.TRAIL_SPACING
                or abs(position.y - last.y) > self.TRAIL_SPACING):
            return trail + (position,)
        return trail


default_engine = PhysicsEngine()


def configure_launch(params: LaunchParameters) -> KinematicState:
    return default_engine.launch(params)


def step(state: KinematicState, params: LaunchParameters) -> KinematicState:
    return default_engine.step(state, params)
