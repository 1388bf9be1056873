"""Interactive console frontend for the memo API.

The console is the terminal counterpart of the browser memo list: it
loads the memos of the logged in user on start, lets the user add and
remove memos, and prints the store's status message after every
action.  All state lives in :class:`memo_store.MemoStore`, so the
console only renders it.

Configuration comes from environment variables, which can be
overridden on the command line:

``MEMO_API_BASE_URL``
    Base URL of the API including the prefix, default
    ``http://localhost:8000/api``.

``MEMO_API_TOKEN``
    Session token issued by the login service (see
    ``create_token.py`` for local development).  Required.

Commands: ``list``, ``new``, ``rm <id>``, ``reload``, ``help``,
``quit``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Awaitable, Callable, Optional, TextIO

from memo_api_client import DEFAULT_BASE_URL, MemoAPI
from memo_store import MemoStore


logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  list        show your memos
  new         write a new memo
  rm <id>     delete a memo
  reload      fetch memos from the server again
  help        show this help
  quit        leave"""


class MemoConsole:
    """Command loop driving a :class:`MemoStore`."""

    def __init__(
        self,
        store: MemoStore,
        read_line: Callable[[str], Awaitable[str]],
        out: TextIO = sys.stdout,
    ) -> None:
        self.store = store
        self.read_line = read_line
        self.out = out

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def _print_message(self) -> None:
        if self.store.message:
            self._print(self.store.message)

    def render(self) -> None:
        """Print the memo list, newest first."""
        if self.store.is_loading:
            self._print("Loading...")
            return
        memos = self.store.memos
        if not memos:
            self._print("No memos yet.")
            return
        for memo in memos:
            marker = "*" if memo.is_provisional else " "
            self._print(f"{marker}[{memo.id}] {memo.title}")
            if memo.content:
                self._print(f"      {memo.content}")

    async def handle_command(self, line: str) -> bool:
        """Execute one command line.  Returns ``False`` to stop the loop."""
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return True
        command, arg = parts[0].lower(), (parts[1] if len(parts) > 1 else "")

        if command in {"quit", "exit", "q"}:
            return False
        if command in {"help", "?"}:
            self._print(HELP_TEXT)
        elif command in {"list", "ls"}:
            self.render()
        elif command == "reload":
            await self.store.load()
            self._print_message()
            self.render()
        elif command == "new":
            try:
                self.store.draft.title = (await self.read_line("Title: ")).strip()
                self.store.draft.content = await self.read_line("Content: ")
            except EOFError:
                self.store.draft.clear()
                self._print()
                self._print("Cancelled.")
                return True
            await self.store.submit_draft()
            self._print_message()
        elif command in {"rm", "delete", "del"}:
            try:
                memo_id = int(arg)
            except ValueError:
                self._print("Usage: rm <id>")
                return True
            await self.store.delete(memo_id)
            self._print_message()
        else:
            self._print(f"Unknown command: {command}.  Type 'help' for a list of commands.")
        return True

    async def run(self) -> None:
        await self.store.load()
        self._print_message()
        self.render()
        while True:
            try:
                line = await self.read_line("> ")
            except EOFError:
                break
            if not await self.handle_command(line):
                break


async def _read_stdin(prompt: str) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, input, prompt)


async def _main(base_url: str, token: str) -> None:
    async with MemoAPI(base_url=base_url, token=token) as api:
        console = MemoConsole(MemoStore(api), _read_stdin)
        await console.run()


def main(argv: Optional[list] = None) -> None:
    ap = argparse.ArgumentParser(description="Console client for the memo API.")
    ap.add_argument("--base-url", default=os.getenv("MEMO_API_BASE_URL", DEFAULT_BASE_URL),
                    help="API base URL including the prefix")
    ap.add_argument("--token", default=os.getenv("MEMO_API_TOKEN"),
                    help="Session token (defaults to MEMO_API_TOKEN)")
    ap.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(message)s")
    if not args.token:
        logger.error("Missing session token: pass --token or set MEMO_API_TOKEN")
        sys.exit(1)
    try:
        asyncio.run(_main(args.base_url, args.token))
    except KeyboardInterrupt:
        logger.info("Console stopped by user.")


if __name__ == "__main__":
    main()
