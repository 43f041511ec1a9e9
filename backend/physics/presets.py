from typing import Dict

from .ground import (
    BounceLimitPolicy,
    FixedFrictionPolicy,
    GroundPolicy,
    VelocityThresholdPolicy,
)

# Independently tuned ground profiles; run-derived and fixed friction are not
# meant to agree with each other.
PRESETS: Dict[str, GroundPolicy] = {
    "classic": VelocityThresholdPolicy(run=30),
    "quiz": VelocityThresholdPolicy(run=0),
    "bounce_limited": BounceLimitPolicy(),
    "fixed_friction": FixedFrictionPolicy(),
}

DEFAULT_PRESET = "quiz"


def get_preset(name: str) -> GroundPolicy:
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown ground preset '{name}', expected one of {sorted(PRESETS)}"
        ) from None
