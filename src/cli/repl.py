"""
Interactive REPL for the adventure console.

Provides a text-based interface for exploring and editing adventures.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import os
import readline

from src.content import LocationCommands, create_starter_world
from src.db.memory import InMemoryAuthenticator
from src.engine import (
    CommandEngine,
    CommandResult,
    EngineConfig,
    SessionContext,
    tokenize,
)
from src.engine.models import (
    CLEAR_SCREEN,
    ENTER_ADMIN_MODE,
    EXIT_ADMIN_MODE,
    EXIT_GAME,
    OUTPUT_MARKERS,
    PROMPT_PASSWORD,
)


def readline_options(before_cursor: str, text: str, suggestions: list[str]) -> list[str]:
    """
    Map engine suggestions onto readline replacements for `text`.

    Readline replaces only the last word, so a multi-word command name is
    offered as the rest of the name from that word on.
    """
    typed = " ".join(tokenize(before_cursor)).lower()
    if before_cursor and before_cursor[-1].isspace():
        typed += " "
    typed_word_start = len(typed) - len(text)

    options = [
        suggestion[typed_word_start:]
        for suggestion in suggestions
        if typed and suggestion.lower().startswith(typed)
    ]
    if options:
        return options

    # Argument completions replace the partial argument itself
    return [s for s in suggestions if s.lower().startswith(text.lower())]


class ConsoleREPL:
    """
    Interactive REPL for the adventure console.

    Handles user input, tab completion, and command output. Arrow-key recall
    is done by readline, whose history is rebuilt from the engine's
    HistoryNavigator after every submitted line, so both hold the same
    bounded, duplicate-free log. Front ends without readline call
    `engine.recall` directly.
    """

    def __init__(
        self,
        *,
        admin_password: str | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        world = create_starter_world()
        self.catalog = world.catalog
        self.engine = CommandEngine(
            LocationCommands(world.catalog, world.adventure_id).descriptors(),
            config=config,
            identifier_source=world.catalog,
            authenticator=InMemoryAuthenticator(admin_password),
        )
        self.context = SessionContext(current_location=world.starting_location_id)
        self.running = True
        self._matches: list[str] = []

    # --- Readline integration ---

    def _install_readline(self) -> None:
        readline.set_completer_delims(" \t\n")
        readline.set_completer(self._complete)
        readline.parse_and_bind("tab: complete")

    def _complete(self, text: str, state: int) -> str | None:
        """Readline completer backed by the engine's autocomplete."""
        if state == 0:
            buffer = readline.get_line_buffer()
            cursor = readline.get_endidx()
            result = self.engine.complete(buffer, cursor, self.context)
            self._matches = readline_options(buffer[:cursor], text, result.suggestions)
        if state < len(self._matches):
            return self._matches[state]
        return None

    def _sync_history(self) -> None:
        """Make arrow-key recall show exactly the engine's history."""
        readline.clear_history()
        for line in self.engine.history.entries():
            readline.add_history(line)

    # --- Output ---

    def _format_result(self, result: CommandResult) -> str:
        """Format a command result for display."""
        lines = [line for line in result.output if line not in OUTPUT_MARKERS]

        if result.error is not None:
            lines.append(f"Error: {result.error.message}")
            if result.error.suggestion:
                lines.append(result.error.suggestion)

        return "\n".join(lines)

    async def _handle_markers(self, result: CommandResult) -> None:
        """Act on front-end markers in a result."""
        if CLEAR_SCREEN in result.output:
            print("\033[2J\033[H", end="")

        if PROMPT_PASSWORD in result.output:
            password = getpass.getpass("Password: ")
            auth_result = await self.engine.authenticate(password, self.context)
            await self._show(auth_result)

        if ENTER_ADMIN_MODE in result.output:
            print('Entered admin mode. Type "help" for admin commands.')

        if EXIT_ADMIN_MODE in result.output:
            print("Returned to player mode.")

        if EXIT_GAME in result.output:
            self.running = False

    async def _show(self, result: CommandResult) -> None:
        text = self._format_result(result)
        if text:
            print()
            print(text)
            print()
        await self._handle_markers(result)

    def _prompt(self) -> str:
        if self.context.pending_confirmation is not None:
            return "(y/n) > "
        if self.context.is_admin:
            return "[admin] > "
        return "> "

    def _print_banner(self) -> None:
        """Print the console banner."""
        print("The Adventure Console")
        print("Type help for commands. Tab completes, arrow keys recall history.\n")

    async def process_input(self, text: str) -> CommandResult:
        """Submit one line to the engine."""
        result = await self.engine.submit(text, self.context)
        self._sync_history()
        return result

    async def run(self) -> None:
        """Run the interactive REPL."""
        self._install_readline()
        self._print_banner()

        await self._show(await self.engine.execute(self.engine.parse("look"), self.context))

        while self.running:
            try:
                user_input = input(self._prompt())

                if not user_input.strip() and self.context.pending_confirmation is None:
                    continue

                await self._show(await self.process_input(user_input))

            except KeyboardInterrupt:
                print("\n")
                self.running = False
            except EOFError:
                print("\n")
                self.running = False

        print("Thanks for playing!")


def run_console(admin_password: str | None = None) -> None:
    """
    Run the adventure console.

    Args:
        admin_password: Password that unlocks admin mode via sudo
    """
    repl = ConsoleREPL(admin_password=admin_password, config=EngineConfig.from_env())
    asyncio.run(repl.run())


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Adventure Console")
    parser.add_argument(
        "--admin-password",
        default=os.getenv("ADVENTURE_ADMIN_PASSWORD"),
        help="Password for admin mode (default: $ADVENTURE_ADMIN_PASSWORD)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_console(admin_password=args.admin_password)


if __name__ == "__main__":
    main()
