"""
Command-line entry point: play the arena or watch a random agent
"""

import argparse
import logging

from arena.configs.arena_config import ARENA_CONFIG, ENV_CONFIG
from arena.simulation import ArenaConfig, new_state


def build_config(args) -> ArenaConfig:
    """ARENA_CONFIG with command-line overrides applied"""
    overrides = dict(ARENA_CONFIG)
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.max_enemies is not None:
        overrides["max_enemies"] = args.max_enemies
    return ArenaConfig(**overrides)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Top-down arena with a deadzone camera")
    parser.add_argument("--mode", type=str, default="play", choices=["play", "random"],
                        help="play interactively or run a random-action episode")
    parser.add_argument("--width", type=int, default=None, help="Viewport width")
    parser.add_argument("--height", type=int, default=None, help="Viewport height")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--max-enemies", type=int, default=None,
                        help="Cap on live enemies (default: unbounded)")
    parser.add_argument("--steps", type=int, default=ENV_CONFIG["max_steps"],
                        help="Episode length for --mode random")
    parser.add_argument("--no-render", action="store_true",
                        help="Run --mode random without a window")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    config = build_config(args)

    if args.mode == "random":
        from arena.arena_env import run_random_episode

        info = run_random_episode(
            render=not args.no_render, seed=args.seed, max_steps=args.steps, config=config
        )
        print(f"\n{'='*40}")
        print(f"Steps:   {info['step']}")
        print(f"Score:   {info['score']}")
        print(f"Enemies: {info['num_enemies']}")
        print(f"{'='*40}")
        return

    from arena.window import play

    state = new_state(config, seed=args.seed)
    play(state)
    print(f"Final score: {state.score}")


if __name__ == "__main__":
    main()
