import logging
import os
from pathlib import Path
from typing import Dict, Optional

from physics.engine import PhysicsEngine
from physics.models import KinematicState, LaunchParameters, Vector2
from ml.data_generator import ShotDataGenerator
from ml.distance_model import DistanceModel, features_from_params
from .drivers import MAX_ITERATIONS, STEPS_PER_FRAME, RealtimeDriver
from .models import FrameUpdate, SessionEvent, SessionStatus, ShotResult, StatBonuses

logger = logging.getLogger(__name__)

DEFAULT_MODEL_PATH = Path(__file__).resolve().parent.parent / "models" / "distance_model.pkl"


def resolve_model_path() -> Path:
    return Path(os.environ.get("QUIZSHOT_MODEL_PATH", DEFAULT_MODEL_PATH))


def load_distance_model(model_path: Optional[Path] = None) -> Optional[DistanceModel]:
    """Load a trained distance model, or None when there is nothing usable."""
    model_path = model_path or resolve_model_path()
    if not model_path.exists():
        logger.info("No trained distance model at %s, previews disabled", model_path)
        return None
    model = DistanceModel()
    try:
        model.load(str(model_path))
    except Exception as e:
        logger.warning("Failed to load distance model from %s: %s", model_path, e)
        return None
    return model


def train_distance_model(
    n_samples: int = 5000,
    model_type: str = "xgboost",
    model_path: Optional[Path] = None,
    seed: Optional[int] = None,
) -> Dict:
    """Simulate shots headlessly, fit the distance model and save it."""
    physics = PhysicsEngine()
    df = ShotDataGenerator(physics, seed=seed).generate_dataset(n_samples)

    model = DistanceModel()
    results = model.train(df, model_type=model_type)

    model_path = model_path or resolve_model_path()
    model_path.parent.mkdir(parents=True, exist_ok=True)
    model.save(str(model_path))
    return results


class GameSession:
    """One player's launch mini-game: IDLE -> FLYING -> FINISHED"""

    def __init__(
        self,
        params: Optional[LaunchParameters] = None,
        physics: Optional[PhysicsEngine] = None,
        distance_model: Optional[DistanceModel] = None,
        steps_per_frame: int = STEPS_PER_FRAME,
        max_iterations: int = MAX_ITERATIONS,
    ):
        self.physics = physics or PhysicsEngine()
        self.params = params or StatBonuses().to_launch_parameters()
        self.distance_model = distance_model
        self.steps_per_frame = steps_per_frame
        self.max_iterations = max_iterations

        self.status = SessionStatus.IDLE
        self.driver: Optional[RealtimeDriver] = None
        self.last_result: Optional[ShotResult] = None
        self.state = self._resting_state()

    def update_params(self, **values) -> LaunchParameters:
        """Merge new stat values into the parameters for the next launch."""
        merged = self.params.model_dump()
        merged.update(values)
        self.params = LaunchParameters(**merged)
        return self.params

    def apply_bonuses(self, bonuses: StatBonuses) -> LaunchParameters:
        return self.update_params(power=bonuses.power, loft=bonuses.loft, wind=bonuses.wind)

    def preview_distance(self) -> Optional[float]:
        if self.distance_model is None:
            return None
        predictions = self.distance_model.predict(features_from_params(self.params))
        return predictions["distance"]

    def launch(self) -> Optional[KinematicState]:
        if self.status is SessionStatus.FLYING:
            return None

        self.driver = RealtimeDriver(
            self.params,
            engine=self.physics,
            steps_per_frame=self.steps_per_frame,
            max_iterations=self.max_iterations,
        )
        self.state = self.driver.state
        self.last_result = None
        self.status = SessionStatus.FLYING
        logger.info(
            "Launch: power=%s angle=%.1f wind=%s ground=%s",
            self.params.power, self.params.launch_angle_degrees(), self.params.wind, self.params.ground.kind,
        )
        return self.state

    def frame(self) -> Optional[FrameUpdate]:
        if self.status is not SessionStatus.FLYING:
            return None

        update = self.driver.frame()
        self.state = update.state
        if update.finished:
            return self._finish(update.result, update.steps)
        return update

    def skip(self) -> Optional[FrameUpdate]:
        if self.status is not SessionStatus.FLYING:
            return None

        steps_before = self.driver.steps
        result = self.driver.skip()
        self.state = result.state
        return self._finish(result, result.steps - steps_before)

    def restart(self) -> SessionEvent:
        """Abandon any shot in progress and hand control back to the menu."""
        if self.driver is not None and not self.driver.done:
            self.driver.cancel()
        self.driver = None
        self.status = SessionStatus.IDLE
        self.state = self._resting_state()
        return SessionEvent.RETURN_TO_MENU

    def _finish(self, result: ShotResult, steps: int) -> FrameUpdate:
        self.last_result = result
        self.status = SessionStatus.FINISHED
        logger.info("Shot finished at %.2f (%s, %d bounces)", result.distance, result.outcome.value, result.bounces)
        return FrameUpdate(state=result.state, steps=steps, result=result, event=SessionEvent.FINISHED)

    def _resting_state(self) -> KinematicState:
        start = Vector2(float(self.params.start_x), float(self.params.start_y))
        return KinematicState(position=start, stopped=True)
