from pydantic import BaseModel, Field
from enum import Enum
from typing import List, Optional
from dataclasses import dataclass

from physics.models import KinematicState, LaunchParameters, TrailPoint


class ShotOutcome(str, Enum):
    STOPPED = "stopped"
    CAPPED = "capped"  # safety iteration cap hit before the ball stopped
    CANCELLED = "cancelled"


class SessionStatus(str, Enum):
    IDLE = "idle"
    FLYING = "flying"
    FINISHED = "finished"


class SessionEvent(str, Enum):
    FINISHED = "finished"
    RETURN_TO_MENU = "return_to_menu"


@dataclass(frozen=True)
class ShotResult:
    state: KinematicState
    steps: int
    outcome: ShotOutcome

    @property
    def distance(self) -> float:
        return self.state.position.x

    @property
    def bounces(self) -> int:
        return self.state.bounce_count

    @property
    def capped(self) -> bool:
        return self.outcome is ShotOutcome.CAPPED


@dataclass(frozen=True)
class FrameUpdate:
    state: KinematicState
    steps: int
    result: Optional[ShotResult] = None
    event: Optional[SessionEvent] = None

    @property
    def finished(self) -> bool:
        return self.result is not None


class StatBonuses(BaseModel):
    """Quiz-earned stat levels that feed a launch."""

    power: int = Field(10, ge=0)
    loft: int = Field(20, ge=0)  # ~27 degrees
    wind: int = Field(0, ge=0)

    def to_launch_parameters(self, **overrides) -> LaunchParameters:
        values = {"power": self.power, "loft": self.loft, "wind": self.wind}
        values.update(overrides)
        return LaunchParameters(**values)


class ShotSummary(BaseModel):
    distance: float
    height: float
    bounces: int
    steps: int
    outcome: ShotOutcome
    trail: List[TrailPoint]

    @classmethod
    def from_result(cls, result: ShotResult) -> "ShotSummary":
        state = result.state
        return cls(
            distance=result.distance,
            height=state.position.y,
            bounces=result.bounces,
            steps=result.steps,
            outcome=result.outcome,
            trail=[TrailPoint(x=p.x, y=p.y) for p in state.trail],
        )
