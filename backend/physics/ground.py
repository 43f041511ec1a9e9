"""Ground contact policies.

Each policy resolves a single ground contact, given the post-integration
velocity, into ``(vx, vy, bounce_count, stopped)``. The policy is selected
per shot through the ``kind`` tag on ``LaunchParameters.ground``.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Optional, Tuple, Union

Contact = Tuple[float, float, int, bool]


class _ContactPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    restitution: float = Field(0.6, description="Fraction of vertical speed kept on a bounce")
    vertical_threshold: float = Field(0.5, description="Below this |vy| the ball no longer rebounds")
    stop_speed: float = Field(0.1, description="Below this |vx| a sliding ball stops")

    @property
    def friction(self) -> float:
        raise NotImplementedError

    def _slide(self, vx: float, bounces: int) -> Contact:
        vx *= self.friction
        if abs(vx) < self.stop_speed:
            return 0.0, 0.0, bounces, True
        return vx, 0.0, bounces, False

    def _bounce(self, vx: float, vy: float, bounces: int) -> Contact:
        return vx * self.friction, -vy * self.restitution, bounces + 1, False

    def resolve(self, vx: float, vy: float, bounces: int, bounce_limit: Optional[int] = None) -> Contact:
        if abs(vy) < self.vertical_threshold:
            return self._slide(vx, bounces)
        return self._bounce(vx, vy, bounces)


class VelocityThresholdPolicy(_ContactPolicy):
    """Friction derived from the run stat: 0.5 + run/100, capped below 1."""

    kind: Literal["velocity_threshold"] = "velocity_threshold"
    run: float = Field(0, description="Run stat; higher values glide further")
    friction_cap: float = 0.98

    @property
    def friction(self) -> float:
        return min(self.friction_cap, 0.5 + self.run / 100)


class FixedFrictionPolicy(_ContactPolicy):
    kind: Literal["fixed_friction"] = "fixed_friction"
    friction_coefficient: float = 0.53

    @property
    def friction(self) -> float:
        return self.friction_coefficient


class BounceLimitPolicy(_ContactPolicy):
    """Rebounds until the bounce limit is reached, then always slides.

    Below the limit a low-energy contact stops the ball outright when it is
    also slow horizontally; otherwise it slides with flat friction.
    """

    kind: Literal["bounce_limit"] = "bounce_limit"
    restitution: float = 0.65
    friction_coefficient: float = 0.8
    default_limit: int = Field(3, ge=0)

    @property
    def friction(self) -> float:
        return self.friction_coefficient

    def resolve(self, vx: float, vy: float, bounces: int, bounce_limit: Optional[int] = None) -> Contact:
        limit = self.default_limit if bounce_limit is None else bounce_limit
        if bounces >= limit:
            return self._slide(vx, bounces)

        if abs(vy) < self.vertical_threshold:
            if abs(vx) < self.stop_speed:
                return 0.0, 0.0, bounces, True
            return vx * self.friction, 0.0, bounces, False

        return self._bounce(vx, vy, bounces)


GroundPolicy = Annotated[
    Union[VelocityThresholdPolicy, BounceLimitPolicy, FixedFrictionPolicy],
    Field(discriminator="kind"),
]
