import typer
import logging
from typing import Optional

from config.settings import settings
from dispatchbot.core import DispatchBot

app = typer.Typer(
    name="dispatchbot",
    help="Prefix command bot for Discord",
    add_completion=False,
)


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@app.command()
def run(
    dev: bool = typer.Option(False, "--dev", help="Run with debug logging"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
) -> None:
    """Run the bot."""
    setup_logging(log_level or ("DEBUG" if dev else settings.log_level))

    bot = DispatchBot()
    bot.run()


@app.command()
def plugins() -> None:
    """List the plugins found in the configured plugin directories."""
    bot = DispatchBot()
    discovered = bot.plugin_loader.discover_plugins()

    typer.echo("📦 Available Plugins:")
    for plugin_name, path in discovered.items():
        enabled = not settings.enabled_plugins or any(
            plugin_name == name or plugin_name.startswith(f"{name}.") for name in settings.enabled_plugins
        )
        typer.echo(f"  {'✅' if enabled else '❌'} {plugin_name} ({path})")


@app.command()
def commands() -> None:
    """Load the plugins and list every registered command."""
    bot = DispatchBot()
    bot.load_plugins()

    aliases: dict[str, list[str]] = {}
    for alias, name in bot.registry.command_aliases.items():
        aliases.setdefault(name, []).append(alias)

    overview = bot.get_overview()
    typer.echo(
        f"🔌 {overview.plugin_count} plugins, {overview.command_count} commands, {overview.alias_count} aliases"
    )

    prefix = bot.registry.default_prefix
    typer.echo(f"📜 Registered Commands ({len(bot.registry.commands)}):")
    for name in sorted(bot.registry.commands):
        command = bot.registry.commands[name]
        line = f"  {prefix}{name}"
        if aliases.get(name):
            line += f" (aliases: {', '.join(aliases[name])})"
        if command.description:
            line += f" - {command.description}"
        if command.plugin_name:
            line += f" [{command.plugin_name}]"
        typer.echo(line)
        for sub_name in sorted(command.subcommands):
            typer.echo(f"    {prefix}{name} {sub_name}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
