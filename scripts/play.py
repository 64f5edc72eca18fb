#!/usr/bin/env python3
"""
Play a Stellar Dynasties intrigue match in the terminal.

Both sides commit to a plot, reveal it, and the round resolves. Runs entirely
in-process: no server and no Game Hub needed.

Usage:
    # You (Duke) against a random bot (Baron)
    python scripts/play.py

    # Watch two bots play
    python scripts/play.py --bots 2

    # Reproducible bot choices
    python scripts/play.py --bots 2 --seed 7
"""
import argparse
import asyncio
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from intrigue.auth import AllowAllAuthGate
from intrigue.errors import IntrigueError
from intrigue.game import GameSessionManager
from intrigue.game.commitment import generate_plot_commitment
from intrigue.hub import LoggingNotificationHub
from intrigue.models.game import PlotAction
from intrigue.storage import InMemoryExpiringStore

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[91m"
GREEN = "\033[92m"
CYAN = "\033[96m"

CHOICES = {
    "a": PlotAction.ASSASSINATION,
    "b": PlotAction.BRIBERY,
    "r": PlotAction.REBELLION,
}


def parse_args():
    parser = argparse.ArgumentParser(description="Play a Stellar Dynasties intrigue match")
    parser.add_argument("--bots", type=int, choices=(1, 2), default=1,
                        help="Number of bot players (default: 1, you play the other side)")
    parser.add_argument("--stake", type=int, default=1000,
                        help="Points each player puts up (default: 1000)")
    parser.add_argument("--seed", type=int, help="Random seed for bot choices")
    return parser.parse_args()


def ask_human(name: str) -> PlotAction:
    while True:
        raw = input(f"{CYAN}{name}{RESET}, choose your plot [a]ssassination/[b]ribery/[r]ebellion: ")
        choice = CHOICES.get(raw.strip().lower()[:1])
        if choice is not None:
            return choice
        print(f"{RED}Unknown plot '{raw}'{RESET}")


async def play(args) -> int:
    rng = random.Random(args.seed)
    manager = GameSessionManager(
        store=InMemoryExpiringStore(),
        hub=LoggingNotificationHub(),
        auth_gate=AllowAllAuthGate(),
    )

    duke, baron = "duke", "baron"
    humans = {duke} if args.bots == 1 else set()
    session_id = rng.randrange(2**32)

    await manager.start_session(session_id, duke, baron, args.stake, args.stake)
    print(f"{BOLD}{'=' * 50}{RESET}")
    print(f"{BOLD}  STELLAR DYNASTIES: Duke vs Baron{RESET}")
    print(f"{BOLD}{'=' * 50}{RESET}")

    state = manager.get_game(session_id)
    while not state.ended:
        print(f"\n{BOLD}Round {state.round}{RESET}  "
              f"Duke {state.player_a.prestige} | Baron {state.player_b.prestige}")

        plots = {}
        for player in (duke, baron):
            action = ask_human(player.capitalize()) if player in humans else rng.choice(list(PlotAction))
            plots[player] = generate_plot_commitment(action)
            await manager.commit_plot(session_id, player, plots[player].commitment)

        for player, plot in plots.items():
            await manager.verify_plot(session_id, player, plot.action.value, plot.proof, plot.commitment)

        state = await manager.resolve_round(session_id)
        record = state.history[-1]
        print(f"  Duke: {record.action_a} ({record.delta_a:+d})  "
              f"Baron: {record.action_b} ({record.delta_b:+d})")

    color = GREEN if state.winner in humans or not humans else RED
    print(f"\n{color}{BOLD}{state.winner.capitalize()} wins "
          f"({state.player_a.prestige} - {state.player_b.prestige}){RESET}")
    return 0


def main():
    args = parse_args()
    try:
        return asyncio.run(play(args))
    except IntrigueError as e:
        print(f"{RED}Error: {e.code}{RESET}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print()
        return 1


if __name__ == "__main__":
    sys.exit(main())
