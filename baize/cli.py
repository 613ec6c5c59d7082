"""
Baize CLI - Command-line interface for the engine.

Usage:
    baize play                     Score a frame interactively
    baize replay <actions.json>    Replay a list of actions, print the result
    baize serve                    Run the REST API
"""

import argparse
import json
import logging
import os
import sys

from .engine_core import (
    Action,
    Ball,
    Frame,
    FrameState,
    IllegalActionError,
    PlayerId,
    describe_history,
    frame_phase,
    legal_balls,
)

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  pot <ball> | <ball>     pot a ball (red, yellow, green, brown, blue, pink, black)
  foul <4-7>              foul by the player at the table
  end                     end the current visit
  toss <p1|p2>            coin toss winner on the respotted black
  name <p1|p2> <name>     rename a player
  reset                   start a new frame
  state | history | legal show the frame
  quit                    leave"""


class QuitCommand(Exception):
    """Raised by the `quit` command to leave the interactive loop."""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Baize - Snooker Frame Scorer",
        prog="baize",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("BAIZE_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING, or $BAIZE_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Score a frame interactively")
    play_parser.add_argument("--p1", default=None, help="Name of player 1")
    play_parser.add_argument("--p2", default=None, help="Name of player 2")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Replay actions from a JSON file")
    replay_parser.add_argument("actions_file", help="Path to a JSON list of actions")
    replay_parser.add_argument("--history", action="store_true", help="Print the frame log")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "replay":
        return cmd_replay(args)
    elif args.command == "serve":
        return cmd_serve(args)
    parser.print_help()
    return 1


def cmd_play(args):
    """Interactive scorer on stdin/stdout."""
    frame = Frame()
    if args.p1:
        frame.set_player_name(PlayerId.P1, args.p1)
    if args.p2:
        frame.set_player_name(PlayerId.P2, args.p2)

    print(HELP_TEXT)
    print()
    print(format_state(frame.state))
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        try:
            output = run_command(frame, line)
        except QuitCommand:
            break
        except (ValueError, IllegalActionError) as e:
            print(f"Error: {e}")
            continue
        if output:
            print(output)
    return 0


def cmd_replay(args):
    """Apply every action in a JSON file to a fresh frame."""
    try:
        with open(args.actions_file, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.actions_file}")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.actions_file}: {e}")
        return 1

    if not isinstance(entries, list):
        print("Error: Replay file must contain a JSON list of actions")
        return 1

    frame = Frame()
    for index, entry in enumerate(entries):
        try:
            frame.apply(Action.from_dict(entry))
        except (ValueError, KeyError, TypeError) as e:
            print(f"Error: Action {index} is malformed: {e}")
            return 1
        except IllegalActionError as e:
            print(f"Error: Action {index} rejected ({e.error_code.value}): {e.message}")
            print(format_state(frame.state))
            return 1

    logger.info("Replayed %d action(s)", len(entries))
    print(format_state(frame.state))
    if args.history:
        print()
        print("\n".join(describe_history(frame.state)))
    return 0


def cmd_serve(args):
    """Run the REST API under uvicorn."""
    import uvicorn

    uvicorn.run(
        "baize.api.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


def run_command(frame: Frame, line: str) -> str:
    """
    Execute one interactive command against a frame.

    Returns the text to show. Raises ValueError for unparseable input,
    IllegalActionError for rejected actions and QuitCommand for `quit`.
    """
    words = line.split()
    if not words:
        return ""
    command, rest = words[0].lower(), words[1:]

    if command in {"quit", "exit", "q"}:
        raise QuitCommand()
    if command in {"help", "?"}:
        return HELP_TEXT
    if command == "state":
        return format_state(frame.state)
    if command == "history":
        return "\n".join(describe_history(frame.state)) or "(no history)"
    if command == "legal":
        return _format_balls(legal_balls(frame.state)) or "(none)"

    if command == "pot":
        if len(rest) != 1:
            raise ValueError("Usage: pot <ball>")
        frame.pot(Ball.parse(rest[0]))
    elif command in {ball.value for ball in Ball}:
        frame.pot(Ball.parse(command))
    elif command == "foul":
        if len(rest) != 1 or not rest[0].isdigit():
            raise ValueError("Usage: foul <4-7>")
        frame.foul(int(rest[0]))
    elif command in {"end", "end-turn", "miss"}:
        frame.end_turn()
    elif command == "toss":
        if len(rest) != 1:
            raise ValueError("Usage: toss <p1|p2>")
        frame.resolve_coin_toss(PlayerId.parse(rest[0]))
    elif command == "name":
        if len(rest) < 2:
            raise ValueError("Usage: name <p1|p2> <name>")
        frame.set_player_name(PlayerId.parse(rest[0]), " ".join(rest[1:]))
    elif command == "reset":
        frame.reset_frame()
    else:
        raise ValueError(f"Unknown command: {command} (try 'help')")

    return format_state(frame.state)


def format_state(state: FrameState) -> str:
    """Scoreboard text for the terminal."""
    lines = []
    for player in PlayerId:
        marker = " (at table)" if player == state.current_player and not state.frame_over else ""
        lines.append(f"{state.name_of(player)}: {state.scores[player]}{marker}")
    lines.append(f"Break: {state.break_score}")
    lines.append(f"Reds left: {state.reds_remaining}")
    lines.append(f"Colors on table: {_format_balls(state.colors_remaining) or 'None'}")

    if state.frame_over:
        winner = state.winner
        lines.append(f"Frame Over! {state.name_of(winner)} wins." if winner else "Frame Over!")
    elif state.tie_break is not None and state.tie_break.awaiting_toss:
        lines.append("Scores level - black respotted. Toss a coin: toss <p1|p2>")
    else:
        lines.append(f"Legal: {_format_balls(legal_balls(state))} [{frame_phase(state).value}]")
    return "\n".join(lines)


def _format_balls(balls) -> str:
    return ", ".join(b.label for b in sorted(balls, key=lambda b: b.points))


if __name__ == "__main__":
    sys.exit(main())
