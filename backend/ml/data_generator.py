import pandas as pd
import numpy as np
from typing import Optional

from physics.engine import PhysicsEngine
from physics.models import LaunchParameters
from physics.presets import PRESETS
from game.drivers import simulate_shot
from .distance_model import features_from_params


class ShotDataGenerator:
    def __init__(self, physics_engine: PhysicsEngine, seed: Optional[int] = None):
        self.physics = physics_engine
        self.rng = np.random.default_rng(seed)

    def generate_dataset(
            self,
            n_samples: int = 5000,
            max_iterations: int = 5000,
            verbose: bool = True
    ) -> pd.DataFrame:
        if verbose:
            print(f"Generating {n_samples} simulated shots...")

        data = []

        for i in range(n_samples):
            if verbose and i % 1000 == 0:
                print(f"Progress: {i}/{n_samples}")

            params = self._sample_launch_parameters()
            result = simulate_shot(params, max_iterations=max_iterations, engine=self.physics)

            data.append({
                **features_from_params(params),
                'distance': result.distance,
                'bounces': result.bounces,
                'steps': result.steps,
                'capped': result.capped,
            })

        df = pd.DataFrame(data)

        if verbose:
            capped = int(df['capped'].sum()) if not df.empty else 0
            print(f"Generated {len(df)} shots, {capped} hit the step cap")
        return df

    # Stat ranges mirror what a full quiz run can award
    def _sample_launch_parameters(self) -> LaunchParameters:
        power = self.rng.uniform(5, 40)
        loft = self.rng.uniform(0, 100)
        wind = self.rng.normal(5, 4)
        wind = np.clip(wind, -10, 20)

        preset = self.rng.choice(sorted(PRESETS))
        bounce_limit = int(self.rng.integers(0, 6)) if preset == "bounce_limited" else None

        return LaunchParameters(
            power=float(power),
            loft=float(loft),
            wind=float(wind),
            bounce_limit=bounce_limit,
            ground=PRESETS[str(preset)],
        )
