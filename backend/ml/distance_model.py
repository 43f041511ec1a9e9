import pandas as pd
import numpy as np
from sklearn.model_selection import train_test_split, cross_val_score
from sklearn.ensemble import RandomForestRegressor, GradientBoostingRegressor
from sklearn.metrics import mean_absolute_error, r2_score
import xgboost as xgb
import joblib
from typing import Dict

from physics.models import LaunchParameters

GROUND_KINDS = {'velocity_threshold': 1, 'bounce_limit': 2, 'fixed_friction': 3}

FEATURE_COLUMNS = [
    'power', 'angle', 'wind', 'restitution', 'friction',
    'bounce_limit', 'ground_kind'
]
TARGET_COLUMNS = ['distance', 'bounces']


def features_from_params(params: LaunchParameters) -> Dict[str, float]:
    """Flatten launch parameters into the model's feature row"""
    ground = params.ground
    if params.bounce_limit is not None:
        bounce_limit = params.bounce_limit
    else:
        bounce_limit = getattr(ground, 'default_limit', -1)
    return {
        'power': float(params.power),
        'angle': float(params.launch_angle_degrees()),
        'wind': float(params.wind),
        'restitution': float(ground.restitution),
        'friction': float(ground.friction),
        'bounce_limit': float(bounce_limit),
        'ground_kind': float(GROUND_KINDS[ground.kind]),
    }


def build_regressor(model_type: str):
    if model_type == 'xgboost':
        return xgb.XGBRegressor(
            n_estimators=150, max_depth=5, learning_rate=0.1,
            subsample=0.8, colsample_bytree=0.8, random_state=42
        )
    if model_type == 'random_forest':
        return RandomForestRegressor(
            n_estimators=100, max_depth=12, min_samples_split=4,
            random_state=42, n_jobs=-1
        )
    if model_type == 'gradient_boosting':
        return GradientBoostingRegressor(
            n_estimators=150, max_depth=4, learning_rate=0.1, random_state=42
        )
    raise ValueError(f"Unknown model type: {model_type}")


class DistanceModel:
    def __init__(self):
        self.models = {}
        self.feature_columns = None
        self.target_columns = None

    def train(
        self,
        df: pd.DataFrame,
        test_size: float = 0.2,
        model_type: str = 'xgboost',
        cv: int = 5,
        verbose: bool = True
    ) -> Dict:
        self.feature_columns = list(FEATURE_COLUMNS)
        self.target_columns = list(TARGET_COLUMNS)

        X = df[self.feature_columns]

        results = {}

        for target in self.target_columns:
            if verbose:
                print(f"Training model for: {target}")
            y = df[target]

            X_train, X_test, y_train, y_test = train_test_split(
                X, y, test_size=test_size, random_state=42
            )
            model = build_regressor(model_type)

            model.fit(X_train, y_train)

            y_pred = model.predict(X_test)
            mae = mean_absolute_error(y_test, y_pred)
            r2 = r2_score(y_test, y_pred)

            cv_scores = cross_val_score(
                model, X_train, y_train,
                cv=cv, scoring='neg_mean_absolute_error'
            )
            cv_mae = -cv_scores.mean()

            importance = pd.DataFrame({
                'feature': self.feature_columns,
                'importance': model.feature_importances_
            }).sort_values('importance', ascending=False)

            if verbose:
                print(f"  Test MAE: {mae:.2f}")
                print(f"  Test R²: {r2:.3f}")
                print(f"  CV MAE: {cv_mae:.2f}")
                print("\n  Top features:")
                print(importance.head(3).to_string(index=False))

            self.models[target] = model

            results[target] = {
                'mae': float(mae),
                'r2': float(r2),
                'cv_mae': float(cv_mae),
                'feature_importance': importance.to_dict('records')
            }

        return results

    def predict(self, features: Dict) -> Dict:
        """Predict shot outcome for one feature row"""
        if not self.models:
            raise ValueError("Models not trained yet")

        X = pd.DataFrame([features])[self.feature_columns]

        predictions = {}
        for target, model in self.models.items():
            predictions[target] = float(np.asarray(model.predict(X))[0])

        return predictions

    def save(self, filepath: str):
        """Save trained models to disk"""
        model_data = {
            'models': self.models,
            'feature_columns': self.feature_columns,
            'target_columns': self.target_columns
        }
        joblib.dump(model_data, filepath)
        print(f"Models saved to {filepath}")

    def load(self, filepath: str):
        """Load trained models from disk"""
        model_data = joblib.load(filepath)
        self.models = model_data['models']
        self.feature_columns = model_data['feature_columns']
        self.target_columns = model_data['target_columns']
        print(f"Models loaded from {filepath}")
