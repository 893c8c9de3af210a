"""Command-line tools for running the engine headless."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-core",
        description="Headless simulation and benchmarking for snake-core.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one game with a random turning policy.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON engine config (flags override it).",
    )
    sim_p.add_argument("--board-size", type=int, default=None)
    sim_p.add_argument("--initial-length", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=_positive_int, default=500)
    sim_p.add_argument(
        "--turn-probability", type=float, default=0.2,
        help="Chance that an event is a direction request.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=_positive_int, default=100)
    bench_p.add_argument("--max-ticks", type=_positive_int, default=500)
    bench_p.add_argument("--board-size", type=int, default=12)
    bench_p.add_argument("--seed", type=int, default=42)

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    import numpy as np

    from snake_core.benchmark import play_random_game
    from snake_core.config import EngineConfig
    from snake_core.engine import GameEngine

    config = EngineConfig.load(args.config) if args.config else EngineConfig()

    overrides: dict = {}
    for name in ("board_size", "initial_length", "seed"):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        try:
            config = EngineConfig(**d)
        except ValueError as exc:
            logger.error("Invalid configuration: %s", exc)
            return 2

    engine = GameEngine(config)
    state = play_random_game(
        engine,
        np.random.default_rng(config.seed),
        max_ticks=args.max_ticks,
        turn_probability=args.turn_probability,
    )
    print(engine.snapshot().render_text())  # noqa: T201
    summary = {
        "tick": state.tick,
        "lost": state.lost,
        "length": len(state.snake),
        "apples_eaten": state.apples_eaten,
    }
    print(json.dumps(summary))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_core.benchmark import benchmark_throughput

    try:
        result = benchmark_throughput(
            num_games=args.num_games,
            max_ticks=args.max_ticks,
            board_size=args.board_size,
            seed=args.seed,
        )
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-core`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
