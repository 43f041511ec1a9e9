import logging
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, Optional
import numpy as np

from physics.engine import PhysicsEngine
from physics.models import LaunchParameters, StateSnapshot
from physics.presets import PRESETS, get_preset
from game.drivers import MAX_ITERATIONS, simulate_shot
from game.engine import load_distance_model
from game.models import ShotSummary, StatBonuses
from game.rewards import award_for_answers
from ml.distance_model import features_from_params

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Quiz Shot API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# REQUEST / RESPONSE MODELS
# ============================================================================

class StepRequest(BaseModel):
    state: StateSnapshot
    params: LaunchParameters
    steps: int = Field(1, ge=1, le=MAX_ITERATIONS, description="Steps to advance")


class SimulateRequest(BaseModel):
    params: LaunchParameters
    preset: Optional[str] = Field(None, description="Named ground preset, overrides params.ground")
    max_iterations: int = Field(MAX_ITERATIONS, ge=1, le=MAX_ITERATIONS)


class RewardRequest(BaseModel):
    correct_answers: int = Field(..., ge=0, le=100)
    base: Optional[StatBonuses] = None
    seed: Optional[int] = None


class DistancePrediction(BaseModel):
    distance: float
    bounces: float


# ============================================================================
# ENGINES
# ============================================================================

physics_engine = PhysicsEngine()
distance_model = load_distance_model()


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    return {
        "message": "Quiz Shot API",
        "version": "1.0.0",
        "endpoints": ["/launch", "/step", "/simulate", "/rewards", "/predict", "/presets", "/health"]
    }


@app.get("/presets")
async def list_presets():
    return {name: policy.model_dump() for name, policy in PRESETS.items()}


@app.post("/launch", response_model=StateSnapshot)
async def launch(params: LaunchParameters):
    """Initial kinematic state for a shot"""
    return StateSnapshot.from_state(physics_engine.launch(params))


@app.post("/step", response_model=StateSnapshot)
async def step(request: StepRequest):
    """Advance a client-held state by one or more fixed steps"""
    try:
        state = request.state.to_state()
        for _ in range(request.steps):
            if state.stopped:
                break
            state = physics_engine.step(state, request.params)
        return StateSnapshot.from_state(state)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/simulate", response_model=ShotSummary)
async def simulate(request: SimulateRequest):
    """Fast-forward a whole shot and report where it settled"""
    params = request.params
    if request.preset is not None:
        try:
            params = params.model_copy(update={"ground": get_preset(request.preset)})
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
    try:
        result = simulate_shot(params, max_iterations=request.max_iterations, engine=physics_engine)
        return ShotSummary.from_result(result)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/rewards", response_model=StatBonuses)
async def rewards(request: RewardRequest):
    rng = np.random.default_rng(request.seed)
    return award_for_answers(request.correct_answers, rng, request.base)


@app.post("/predict", response_model=DistancePrediction)
async def predict(params: LaunchParameters):
    if distance_model is None:
        raise HTTPException(status_code=503, detail="Distance model not available")
    try:
        predictions: Dict[str, float] = distance_model.predict(features_from_params(params))
        return DistancePrediction(**predictions)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "physics_engine": "operational",
        "distance_model": "loaded" if distance_model is not None else "unavailable",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
