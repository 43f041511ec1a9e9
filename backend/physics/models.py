from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple
from dataclasses import dataclass, field

from .ground import GroundPolicy, VelocityThresholdPolicy


@dataclass(frozen=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class KinematicState:
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)  # +y is up
    bounce_count: int = 0
    stopped: bool = False
    trail: Tuple[Vector2, ...] = ()


class LaunchParameters(BaseModel):
    """Per-shot configuration. Numeric inputs are not range checked."""

    model_config = ConfigDict(frozen=True)

    power: float = Field(15, description="Launch power, speed = power * 1.5")
    angle: Optional[float] = Field(None, description="Launch angle in degrees")
    loft: Optional[float] = Field(None, description="0-100 loft stat, used when angle is not set")
    wind: float = Field(0, description="Signed wind, positive is a tailwind")
    bounce_limit: Optional[int] = Field(None, ge=0, description="Rebound cap for bounce_limit ground")
    start_x: float = 0.5
    start_y: float = 0.15
    ground: GroundPolicy = Field(default_factory=VelocityThresholdPolicy)

    def launch_angle_degrees(self) -> float:
        if self.angle is not None:
            return self.angle
        if self.loft is not None:
            return 15 + self.loft * 0.6
        return 45.0


class TrailPoint(BaseModel):
    x: float  # downrange distance
    y: float  # height above ground


class StateSnapshot(BaseModel):
    """Serializable view of a KinematicState."""

    position: TrailPoint
    velocity: TrailPoint
    bounce_count: int = Field(0, ge=0)
    stopped: bool = False
    trail: List[TrailPoint] = []

    @classmethod
    def from_state(cls, state: KinematicState) -> "StateSnapshot":
        return cls(
            position=TrailPoint(x=state.position.x, y=state.position.y),
            velocity=TrailPoint(x=state.velocity.x, y=state.velocity.y),
            bounce_count=state.bounce_count,
            stopped=state.stopped,
            trail=[TrailPoint(x=p.x, y=p.y) for p in state.trail],
        )

    def to_state(self) -> KinematicState:
        return KinematicState(
            position=Vector2(self.position.x, self.position.y),
            velocity=Vector2(self.velocity.x, self.velocity.y),
            bounce_count=self.bounce_count,
            stopped=self.stopped,
            trail=tuple(Vector2(p.x, p.y) for p in self.trail),
        )
