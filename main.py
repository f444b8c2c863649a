import argparse

from randagent import config as defaults
from randagent.config import RunConfig
from randagent.runner import Runner


def main():
    parser = argparse.ArgumentParser(description="Seeded random agent runner")
    parser.add_argument(
        "--env-id",
        type=str,
        default=defaults.ENV_ID,
        help=f"Gymnasium environment id (default: {defaults.ENV_ID})"
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=defaults.EPISODES,
        help=f"Number of episodes to run (default: {defaults.EPISODES})"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=defaults.MAX_STEPS,
        help=f"Step limit per episode (default: {defaults.MAX_STEPS})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.SEED,
        help="Seed for the agent and the first environment reset (default: random)"
    )
    parser.add_argument(
        "--save-dir",
        type=str,
        default=defaults.SAVE_DIR,
        help=f"Directory for agent checkpoints, 'none' disables them (default: {defaults.SAVE_DIR})"
    )
    parser.add_argument(
        "--no-resume",
        action="store_true",
        help="Ignore existing checkpoints and start from the given seed"
    )
    parser.add_argument(
        "--print-interval",
        type=int,
        default=defaults.PRINT_INTERVAL,
        help="Number of steps between status prints, 0 disables them (default: 0)"
    )
    parser.add_argument(
        "--render-mode",
        type=str,
        default="none",
        choices=["human", "none"],
        help="Render mode: 'human' for visualization, 'none' for no rendering (default: none)"
    )

    args = parser.parse_args()

    config = RunConfig(
        env_id=args.env_id,
        episodes=args.episodes,
        max_steps=args.max_steps,
        seed=args.seed,
        save_dir=None if args.save_dir.lower() == "none" else args.save_dir,
        print_interval=args.print_interval,
        render_mode=None if args.render_mode == "none" else args.render_mode,
        resume=not args.no_resume,
    )

    runner = Runner(config)
    print(f"Environment: {config.env_id}")
    print(f"Action space: {runner.adapter.action_space}")
    print(f"Seed: {runner.agent.seed.hex()}")

    try:
        rewards = runner.run_episodes()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        rewards = runner.episode_rewards
    finally:
        runner.close()

    if rewards:
        print(f"\nMean reward over {len(rewards)} episodes: {sum(rewards) / len(rewards):.2f}")


if __name__ == "__main__":
    main()
