"""Headless driver for the client core.

    python -m gameclient login alice --resume
    python -m gameclient leaderboard 2 --limit 5
    python -m gameclient submit 2 12.345 --user alice --password secret
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional

from .context import GameContext, build_context
from .core.config import API_BASE_URL, LEADERBOARD_ROWS
from .core.logs import configure_logging
from .services import MemoryMarkerStore, format_elapsed, top_rows


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gameclient", description=__doc__.splitlines()[0])
    parser.add_argument("--base-url", default=API_BASE_URL, help="backend base URL")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument(
        "--no-local-save", action="store_true", help="keep save markers in memory only"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("login", "signup"):
        p = sub.add_parser(name, help=f"{name} and show the resume options")
        p.add_argument("username")
        p.add_argument("--password", default=None)
        p.add_argument("--resume", action="store_true", help="print the scene resume would load")
        p.add_argument("--new-game", action="store_true", help="start a new game after login")

    p = sub.add_parser("leaderboard", help="print the ranked list for a level")
    p.add_argument("level", type=int)
    p.add_argument("--limit", type=int, default=LEADERBOARD_ROWS)

    p = sub.add_parser("submit", help="log in and submit a run time")
    p.add_argument("level", type=int)
    p.add_argument("seconds", type=float)
    p.add_argument("--user", required=True)
    p.add_argument("--password", default=None)
    return parser


async def _auth(ctx: GameContext, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    action = ctx.auth.signup if args.command == "signup" else ctx.auth.login
    result = await action(args.username, password)
    if not result.ok:
        print(result.message or "Authentication failed.")
        return 1

    options = result.options
    print(f"Logged in as {result.username}")
    if options is not None:
        print(f"  start new game: {'yes' if options.can_start else 'no'}")
        print(f"  resume:         {'yes' if options.can_resume else 'no'}")
        if options.remote is not None:
            print(
                f"  remote: level={options.remote.level} coins={options.remote.coins} "
                f"lastScene={options.remote_scene or '-'}"
            )
    if args.new_game:
        print(f"New game at scene {await ctx.progress.start_new_game()}")
    elif args.resume:
        print(f"Resume loads scene {await ctx.progress.resume()}")
    return 0


async def _leaderboard(ctx: GameContext, args: argparse.Namespace) -> int:
    entries = await ctx.leaderboard.fetch(args.level)
    if entries is None:
        print("No leaderboard data received")
        return 1
    print(f"Level {args.level} - Leaderboard")
    if not entries:
        print("  (no runs yet)")
    for rank, name, time_text in top_rows(entries, args.limit):
        print(f"  {rank:<4} {name:<24} {time_text}")
    return 0


async def _submit(ctx: GameContext, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    result = await ctx.auth.login(args.user, password)
    if not result.ok:
        print(result.message or "Authentication failed.")
        return 1
    stored = await ctx.leaderboard.submit(args.level, args.seconds)
    print(f"{'Stored' if stored else 'Could not store'} {format_elapsed(args.seconds)} on level {args.level}")
    return 0 if stored else 1


_COMMANDS = {
    "login": _auth,
    "signup": _auth,
    "leaderboard": _leaderboard,
    "submit": _submit,
}


async def _run(args: argparse.Namespace) -> int:
    ctx = build_context(
        base_url=args.base_url,
        markers=MemoryMarkerStore() if args.no_local_save else None,
    )
    try:
        return await _COMMANDS[args.command](ctx, args)
    finally:
        await ctx.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
