import argparse
import logging
import os
import sys
from pathlib import Path

from perceptron.domain.models.perceptron import Perceptron
from perceptron.infrastructure.config.config_loader import ConfigLoader
from perceptron.infrastructure.data.training_set_loader import load_training_set
from perceptron.infrastructure.di.container import Container


def configure_logging() -> None:
    log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _build_container(config_path: str) -> Container:
    loader = ConfigLoader(Path(config_path))
    container = Container()
    container.register_configs(
        loader.load_layer_configs(),
        loader.load_training_config(),
        loader.load_data_config()
    )
    return container


def _resolve_model(container: Container, model_arg) -> Path:
    if model_arg and model_arg != 'latest':
        return Path(model_arg)
    data_cfg = container.get_config('data')
    latest = container.get_model_repository().find_latest_model(data_cfg.model_dir)
    if latest is None:
        raise FileNotFoundError(f"No saved models in {data_cfg.model_dir}")
    return latest.path


def _cmd_train(args) -> int:
    container = _build_container(args.config)
    data_cfg = container.get_config('data')
    if not data_cfg.train_path:
        print("No training data configured (data.train_path).")
        return 2
    training_set = load_training_set(data_cfg.train_path)
    training_cfg = container.get_config('training')
    training_service = container.get_training_service()

    if args.resume:
        model_path = _resolve_model(container, args.resume)
        print(f"Resuming from: {model_path}")
        result = training_service.resume_training(model_path, training_cfg, training_set)
    else:
        result = training_service.train_model(container.get_config('layers'), training_cfg, training_set)

    # Minimal reporting
    print("Training complete." if result.converged else "Training stopped at the epoch limit.")
    print("Epochs:", result.epochs)
    print("Final cost:", result.final_cost)
    print("Learning time (s):", result.elapsed.total_seconds())
    print("Saved model:", result.model_file)
    return 0 if result.converged else 1


def _cmd_predict(args) -> int:
    container = _build_container(args.config)
    model_path = _resolve_model(container, args.model)
    network = Perceptron.from_model(model_path, repository=container.get_model_repository())
    output = network.predict([float(v) for v in args.values])
    print(" ".join(repr(v) for v in output.tolist()))
    return 0


def _cmd_list(args) -> int:
    container = _build_container(args.config)
    data_cfg = container.get_config('data')
    models = container.get_model_repository().list_models(data_cfg.model_dir)
    if not models:
        print(f"No saved models in {data_cfg.model_dir}")
        return 0
    for idx, m in enumerate(models, 1):
        created = m.created.isoformat(sep=' ') if m.created else '-'
        print(f"[{idx}] {m.name}\t(created={created})")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Perceptron training entrypoint")
    subparsers = parser.add_subparsers(dest="command", required=True)

    train = subparsers.add_parser("train", help="Train a network and save it")
    train.add_argument("--config", default="config.yaml", help="Path to YAML config")
    train.add_argument("--resume", default=None, help="Model file to continue training, or 'latest'")

    predict = subparsers.add_parser("predict", help="Run a saved network on one input vector")
    predict.add_argument("--config", default="config.yaml", help="Path to YAML config")
    predict.add_argument("--model", default=None, help="Model file (default: latest in data.model_dir)")
    predict.add_argument("values", nargs="+", help="Input vector components")

    listing = subparsers.add_parser("list", help="List saved models, newest first")
    listing.add_argument("--config", default="config.yaml", help="Path to YAML config")

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "train":
        return _cmd_train(args)
    if args.command == "predict":
        return _cmd_predict(args)
    if args.command == "list":
        return _cmd_list(args)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
