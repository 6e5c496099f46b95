"""
Help System

Builds man-page style help from command descriptors. Hand-written pages can
be installed for commands that need more than their descriptor says.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.engine.models import CommandDescriptor, GameMode
from src.engine.registry import CommandRegistry, normalize_name


class HelpExample(BaseModel):
    """An example invocation on a help page."""

    command: str
    description: str = ""


class HelpPage(BaseModel):
    """Detailed help for one command."""

    name: str
    synopsis: str
    description: str
    examples: list[HelpExample] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    see_also: list[str] = Field(default_factory=list)


def page_from_descriptor(command: CommandDescriptor) -> HelpPage:
    """Generate a help page from command metadata."""
    return HelpPage(
        name=command.name,
        synopsis=command.syntax or command.name,
        description=command.description,
        examples=[HelpExample(command=example) for example in command.examples],
        aliases=list(command.aliases),
        see_also=list(command.see_also),
    )


class HelpSystem:
    """Command listings and help pages over a registry."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry
        self._pages: dict[str, HelpPage] = {}

    def add_page(self, page: HelpPage) -> None:
        """Install a hand-written page, replacing the generated one."""
        self._pages[normalize_name(page.name)] = page

    def command_list(self, mode: GameMode) -> list[str]:
        """Get a formatted list of the commands available in `mode`."""
        commands = sorted(self._registry.available(mode), key=lambda cmd: cmd.name)

        if not commands:
            return ["No commands available."]

        width = max(len(cmd.name) for cmd in commands)
        lines = ["Available Commands:", ""]
        for cmd in commands:
            aliases = f" ({', '.join(cmd.aliases)})" if cmd.aliases else ""
            lines.append(f"  {cmd.name.ljust(width + 2)}{cmd.description}{aliases}")
        lines.append("")
        lines.append('Type "help <command>" for detailed information about a specific command.')
        return lines

    def command_help(self, name: str, mode: GameMode) -> HelpPage | None:
        """Get the help page for a command (or alias) available in `mode`."""
        command = self._registry.get(name)
        if command is None or not command.mode.allows(mode):
            return None
        return self._pages.get(command.name) or page_from_descriptor(command)

    def search(self, query: str, mode: GameMode | None = None) -> list[CommandDescriptor]:
        """
        Find commands whose name, description or aliases contain `query`.

        With `mode`, only commands a session in that mode may run are searched.
        """
        needle = query.lower()
        commands = self._registry.commands() if mode is None else self._registry.available(mode)
        return [
            cmd
            for cmd in commands
            if needle in cmd.name
            or needle in cmd.description.lower()
            or any(needle in alias for alias in cmd.aliases)
        ]

    @staticmethod
    def format_page(page: HelpPage) -> list[str]:
        """Format a help page for display."""
        lines = ["NAME", f"    {page.name}", "", "SYNOPSIS", f"    {page.synopsis}", ""]

        if page.description:
            lines.append("DESCRIPTION")
            lines.extend(f"    {line}" for line in page.description.split("\n"))
            lines.append("")

        if page.examples:
            lines.append("EXAMPLES")
            for example in page.examples:
                lines.append(f"    {example.command}")
                if example.description:
                    lines.append(f"        {example.description}")
            lines.append("")

        if page.aliases:
            lines.append("ALIASES")
            lines.append(f"    {', '.join(page.aliases)}")
            lines.append("")

        if page.see_also:
            lines.append("SEE ALSO")
            lines.append(f"    {', '.join(page.see_also)}")
            lines.append("")

        return lines
