#!/usr/bin/env python3
"""
GuessWho CLI

1) serve
   - Start the HTTP runtime (FastAPI app in runtime/api/server.py) with uvicorn.

2) play
   - Play the game in the terminal against a running server:
       enter your full name, answer yes/no questions, confirm the guess.

Typical session:

    python cli/main.py serve --reload
    python cli/main.py play
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

# Ensure project root is on sys.path when running as a script
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from configs.settings import settings
from cli.client import GuessClient, ViewState
from exceptions.exceptions import ClientError


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


def cmd_serve(host: str, port: int, reload: bool) -> None:
    """Run the FastAPI runtime with uvicorn."""
    # Lazy import so `play` works without the server dependencies loaded.
    import uvicorn

    print(f"[GuessWho] Starting runtime on http://{host}:{port}")
    uvicorn.run("runtime.api.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# play
# ---------------------------------------------------------------------------


def _ask_yes_no(client: GuessClient, prompt: str, read: Callable[[str], str]) -> bool:
    """Prompt until the player types the localized yes or no (or y/n)."""
    yes = client.text("yes", "Yes")
    no = client.text("no", "No")
    while True:
        reply = read(f"{prompt} [{yes}/{no}] ").strip().lower()
        if reply in (yes.lower(), "y", "yes"):
            return True
        if reply in (no.lower(), "n", "no"):
            return False


def run_game(client: GuessClient, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
    """Drive the client state machine from terminal input until exit."""
    while True:
        if client.view is ViewState.START:
            fullname = ""
            while not fullname:
                fullname = read("Enter your full name: ").strip()
            write("[GuessWho] Searching...")
            client.start(fullname)
            if client.images:
                write(f"[GuessWho] Found {len(client.images)} photos, e.g. {client.images[0]}")

        elif client.view is ViewState.QUESTION:
            counter = ""
            if client.questions_asked is not None and client.max_questions is not None:
                counter = f"({client.questions_asked}/{client.max_questions}) "
            if _ask_yes_no(client, counter + client.question_text, read):
                client.answer_yes()
            else:
                client.answer_no()

        elif client.view is ViewState.IDENTIFY:
            if _ask_yes_no(client, client.identify_text, read):
                client.confirm_yes()
            else:
                client.confirm_no()

        elif client.view is ViewState.DONE:
            if _ask_yes_no(client, client.text("done_prompt", "One more?"), read):
                client.play_again()
            else:
                client.quit()

        elif client.view is ViewState.EXIT:
            write(client.text("goodbye", "Goodbye!"))
            write(client.text("thanks", "Thank you."))
            return


def cmd_play(server_url: str) -> int:
    client = GuessClient(base_url=server_url)
    try:
        run_game(client)
    except ClientError as e:
        print(f"[GuessWho] Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print()
        return 130
    finally:
        client.close()
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GuessWho CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = subparsers.add_parser("serve", help="Start the HTTP runtime")
    p_serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    p_serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    # play
    p_play = subparsers.add_parser("play", help="Play in the terminal against a running server")
    p_play.add_argument(
        "--server-url",
        default=settings.server_url,
        help="Server root URL (default: GUESSWHO_SERVER_URL or http://127.0.0.1:8000)",
    )

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "serve":
        cmd_serve(host=args.host, port=args.port, reload=args.reload)
    elif args.command == "play":
        sys.exit(cmd_play(server_url=args.server_url))
    else:
        parser.error(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
