import pytest
from pydantic import ValidationError

from physics.ground import BounceLimitPolicy, FixedFrictionPolicy, VelocityThresholdPolicy
from physics.models import LaunchParameters
from physics.presets import PRESETS, get_preset


class TestVelocityThreshold:
    def test_friction_from_run(self):
        assert VelocityThresholdPolicy(run=0).friction == pytest.approx(0.5)
        assert VelocityThresholdPolicy(run=30).friction == pytest.approx(0.8)
        assert VelocityThresholdPolicy(run=60).friction == pytest.approx(0.98)

    def test_low_vertical_speed_slides(self):
        vx, vy, bounces, stopped = VelocityThresholdPolicy().resolve(4.0, -0.3, 2)
        assert (vx, vy, bounces, stopped) == (pytest.approx(2.0), 0.0, 2, False)

    def test_slow_slide_stops(self):
        assert VelocityThresholdPolicy().resolve(0.15, -0.3, 1) == (0.0, 0.0, 1, True)

    def test_bounce(self):
        vx, vy, bounces, stopped = VelocityThresholdPolicy().resolve(4.0, -5.0, 1)
        assert vx == pytest.approx(2.0)
        assert vy == pytest.approx(3.0)
        assert bounces == 2
        assert not stopped

    def test_ignores_bounce_limit(self):
        _, _, bounces, _ = VelocityThresholdPolicy().resolve(4.0, -5.0, 10, bounce_limit=1)
        assert bounces == 11


class TestBounceLimit:
    def test_bounces_below_limit(self):
        vx, vy, bounces, stopped = BounceLimitPolicy().resolve(4.0, -5.0, 0)
        assert vx == pytest.approx(3.2)
        assert vy == pytest.approx(3.25)
        assert bounces == 1
        assert not stopped

    def test_default_limit_forces_slide(self):
        vx, vy, bounces, stopped = BounceLimitPolicy().resolve(4.0, -5.0, 3)
        assert (vx, vy, bounces, stopped) == (pytest.approx(3.2), 0.0, 3, False)

    def test_params_limit_overrides_default(self):
        vx, vy, bounces, _ = BounceLimitPolicy().resolve(4.0, -5.0, 1, bounce_limit=1)
        assert vy == 0.0
        assert bounces == 1

    def test_zero_limit_never_bounces(self):
        _, vy, bounces, _ = BounceLimitPolicy().resolve(4.0, -20.0, 0, bounce_limit=0)
        assert vy == 0.0
        assert bounces == 0

    def test_slide_at_limit_can_stop(self):
        assert BounceLimitPolicy().resolve(0.11, -5.0, 3) == (0.0, 0.0, 3, True)

    def test_low_energy_slow_ball_stops_immediately(self):
        assert BounceLimitPolicy().resolve(0.05, -0.2, 0) == (0.0, 0.0, 0, True)

    def test_low_energy_fast_ball_slides(self):
        vx, vy, bounces, stopped = BounceLimitPolicy().resolve(4.0, -0.2, 0)
        assert (vx, vy, bounces, stopped) == (pytest.approx(3.2), 0.0, 0, False)


class TestFixedFriction:
    def test_same_coefficient_for_slide_and_bounce(self):
        policy = FixedFrictionPolicy()
        slide_vx, _, _, _ = policy.resolve(2.0, -0.1, 0)
        bounce_vx, bounce_vy, bounces, _ = policy.resolve(2.0, -1.0, 0)
        assert slide_vx == pytest.approx(1.06)
        assert bounce_vx == pytest.approx(1.06)
        assert bounce_vy == pytest.approx(0.6)
        assert bounces == 1


class TestPolicySelection:
    def test_default_ground(self):
        assert LaunchParameters().ground.kind == "velocity_threshold"

    def test_ground_from_tagged_dict(self):
        params = LaunchParameters(ground={"kind": "bounce_limit", "default_limit": 2})
        assert isinstance(params.ground, BounceLimitPolicy)
        assert params.ground.default_limit == 2

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            LaunchParameters(ground={"kind": "sticky"})

    def test_negative_bounce_limit_rejected(self):
        with pytest.raises(ValidationError):
            LaunchParameters(bounce_limit=-1)

    def test_parameters_are_immutable(self):
        params = LaunchParameters(power=10)
        with pytest.raises(ValidationError):
            params.power = 20

    def test_presets(self):
        assert set(PRESETS) == {"classic", "quiz", "bounce_limited", "fixed_friction"}
        assert get_preset("fixed_friction").friction == pytest.approx(0.53)

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown ground preset"):
            get_preset("ice")
