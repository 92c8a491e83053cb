"""CLI entry point for tickle."""

import argparse
import importlib
import logging
import pkgutil
import sys

from rich.logging import RichHandler
from rich.markup import escape

from tickle import __version__, commands
from tickle.core.config import Settings, load_settings
from tickle.core.theme import console, err_console, print_error

DEFAULT_COMMAND = "tickle"


def _discover_commands() -> dict[str, dict]:
    """Discover all commands from the commands package."""
    discovered = {}
    for module_info in pkgutil.iter_modules(commands.__path__):
        if module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"tickle.commands.{module_info.name}")
        if hasattr(module, "COMMAND"):
            discovered[module_info.name] = module.COMMAND
    return discovered


def _print_help(cmds: dict[str, dict]) -> None:
    """Print modern styled help."""
    console.print("[title]tickle[/title] [muted]─[/muted] restart a systemd service or compose stack\n")
    console.print("[label]Usage:[/label]  tickle [value][command][/value] [muted][options] [service][/muted]\n")
    console.print("[label]Commands:[/label]")

    col_width = 30
    for name, meta in sorted(cmds.items(), key=lambda item: item[0] != DEFAULT_COMMAND):
        shown = "(default)" if name == DEFAULT_COMMAND else name
        args = meta.get("args", "")
        cmd_text = f"{shown} {args}".strip()
        padding = " " * max(1, col_width - len(cmd_text))
        arg_part = f" [muted]{args}[/muted]" if args else ""
        console.print(f"  [value]{shown}[/value]{arg_part}{padding}{meta['description']}")

        if meta.get("subcommands"):
            subs = [s[0] for s in meta["subcommands"]]
            console.print(f"{' ' * (col_width + 2)}[muted]└ {', '.join(subs)}[/muted]")

    console.print("\n[label]Options:[/label]")
    console.print("  [value]-f[/value], [value]--follow[/value]      Follow logs after the operation completes")
    console.print("  [value]-s[/value], [value]--stop-start[/value]  Force stop/start instead of restart (tickle only)")
    console.print("  [value]-v[/value], [value]--version[/value]     Show version information")
    console.print("  [value]-h[/value], [value]--help[/value]        Show this help message")

    console.print("\n[label]Behavior:[/label]")
    console.print("  Without a service name, tickle acts on the compose file in the current")
    console.print("  directory (down + up -d, up -d, or down). Otherwise it acts on the named")
    console.print("  systemd service. History is stored in ~/.tickle/history.log.")


class _StyledParser(argparse.ArgumentParser):
    """ArgumentParser with styled output."""

    def __init__(self, cmds: dict[str, dict], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._cmds = cmds

    def error(self, message: str) -> None:
        print_error(escape(message))
        console.print("Run [value]tickle --help[/value] for usage")
        sys.exit(1)

    def print_help(self, file=None) -> None:  # noqa: ARG002
        _print_help(self._cmds)


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    cmds = _discover_commands()

    parser = _StyledParser(cmds, prog="tickle", add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")

    # Everything else (subcommand, -f, -s, -n, service) is left in order.
    args, rest = parser.parse_known_args(sys.argv[1:] if argv is None else argv)

    if args.help:
        parser.print_help()
        return 0
    if args.version:
        console.print(f"tickle {__version__}")
        return 0

    settings = load_settings()
    _setup_logging(settings)

    if rest and rest[0] in cmds and rest[0] != DEFAULT_COMMAND:
        command, rest = rest[0], rest[1:]
    else:
        command = DEFAULT_COMMAND

    module = importlib.import_module(f"tickle.commands.{command}")
    return module.run(*rest, settings=settings)


if __name__ == "__main__":
    sys.exit(main())
