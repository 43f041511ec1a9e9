import argparse
from pathlib import Path

from game.engine import resolve_model_path, train_distance_model


def run_training():
    parser = argparse.ArgumentParser(description="Train the shot distance model")
    parser.add_argument("--samples", type=int, default=5000)
    parser.add_argument("--model-type", default="xgboost",
                        choices=["xgboost", "random_forest", "gradient_boosting"])
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    print("Starting distance model training...")
    output = args.output or resolve_model_path()
    results = train_distance_model(args.samples, args.model_type, output, args.seed)
    summary = {target: {k: v for k, v in r.items() if k != 'feature_importance'}
               for target, r in results.items()}
    print(f"Training complete. Results: {summary}")

if __name__ == "__main__":
    run_training()
