"""
Main entry point for the Can World.
===================================

Commands:
    train   - Train a Q-learning robot and write reports
    demo    - Watch one episode in text mode

Usage:
    python main.py train                         # Train with defaults
    python main.py train --episodes 5000 --seed 1
    python main.py demo --policy trained         # Train quickly, then watch
"""

from __future__ import annotations

import argparse
import sys

import demo
import train


def main():
    parser = argparse.ArgumentParser(
        description="Tabular Q-Learning robot collecting cans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py train                    # Train with default settings
  python main.py train --episodes 5000    # Train for 5000 episodes
  python main.py demo                     # Random robot, text mode
  python main.py demo --policy trained    # Trained robot, text mode
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    train_parser = subparsers.add_parser("train", help="Train the robot")
    train.add_train_arguments(train_parser)

    demo_parser = subparsers.add_parser("demo", help="Watch one episode")
    demo.add_demo_arguments(demo_parser)

    args = parser.parse_args()

    if args.command == "train":
        train.run_from_args(args)
    elif args.command == "demo":
        demo.run_from_args(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
