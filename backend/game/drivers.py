"""Drivers that run the physics stepper for a shot.

``fast_forward`` runs a shot to completion in a tight loop ("skip");
``RealtimeDriver`` advances a few steps per display frame. Both share the
same stepper and safety cap, so a shot lands in the same place whichever
driver finishes it.
"""
import logging
from typing import Iterator, Optional

from physics.engine import PhysicsEngine, default_engine
from physics.models import KinematicState, LaunchParameters
from .models import FrameUpdate, ShotOutcome, ShotResult

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 5000  # safety cap for a single shot
STEPS_PER_FRAME = 3


def fast_forward(
    state: KinematicState,
    params: LaunchParameters,
    max_iterations: int = MAX_ITERATIONS,
    engine: Optional[PhysicsEngine] = None,
) -> ShotResult:
    """Step until the ball stops or the iteration cap is reached."""
    engine = engine or default_engine
    steps = 0
    while not state.stopped and steps < max_iterations:
        state = engine.step(state, params)
        steps += 1

    if state.stopped:
        return ShotResult(state=state, steps=steps, outcome=ShotOutcome.STOPPED)

    logger.warning(
        "Shot did not stop within %d steps, reporting x=%.2f", max_iterations, state.position.x
    )
    return ShotResult(state=state, steps=steps, outcome=ShotOutcome.CAPPED)


def simulate_shot(
    params: LaunchParameters,
    max_iterations: int = MAX_ITERATIONS,
    engine: Optional[PhysicsEngine] = None,
) -> ShotResult:
    engine = engine or default_engine
    return fast_forward(engine.launch(params), params, max_iterations, engine)


class RealtimeDriver:
    """Frame-by-frame playback of one shot"""

    def __init__(
        self,
        params: LaunchParameters,
        engine: Optional[PhysicsEngine] = None,
        steps_per_frame: int = STEPS_PER_FRAME,
        max_iterations: int = MAX_ITERATIONS,
    ):
        self.params = params
        self.engine = engine or default_engine
        self.steps_per_frame = steps_per_frame
        self.max_iterations = max_iterations

        self.state = self.engine.launch(params)
        self.steps = 0
        self.result: Optional[ShotResult] = None

    @property
    def done(self) -> bool:
        return self.result is not None

    def frame(self) -> FrameUpdate:
        """Advance one display frame, stopping early once the ball stops."""
        if self.done:
            return FrameUpdate(state=self.state, steps=0, result=self.result)

        taken = 0
        for _ in range(self.steps_per_frame):
            if self.steps >= self.max_iterations:
                break
            self.state = self.engine.step(self.state, self.params)
            self.steps += 1
            taken += 1
            if self.state.stopped:
                break

        if self.state.stopped:
            self._finish(ShotOutcome.STOPPED)
        elif self.steps >= self.max_iterations:
            logger.warning("Realtime shot hit the %d step cap", self.max_iterations)
            self._finish(ShotOutcome.CAPPED)

        return FrameUpdate(state=self.state, steps=taken, result=self.result)

    def frames(self) -> Iterator[FrameUpdate]:
        # Stopping iteration cancels playback between frames
        while not self.done:
            yield self.frame()

    def skip(self) -> ShotResult:
        """Fast-forward the rest of the shot from the current state."""
        if self.done:
            return self.result

        remaining = self.max_iterations - self.steps
        skipped = fast_forward(self.state, self.params, remaining, self.engine)
        self.state = skipped.state
        self.steps += skipped.steps
        return self._finish(skipped.outcome)

    def cancel(self) -> ShotResult:
        if self.done:
            return self.result
        return self._finish(ShotOutcome.CANCELLED)

    def _finish(self, outcome: ShotOutcome) -> ShotResult:
        self.result = ShotResult(state=self.state, steps=self.steps, outcome=outcome)
        logger.debug(
            "Shot finished: %s at x=%.2f after %d steps", outcome.value, self.state.position.x, self.steps
        )
        return self.result
