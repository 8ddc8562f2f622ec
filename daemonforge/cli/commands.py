"""CLI commands for daemonforge."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from daemonforge import __logo__, __version__

app = typer.Typer(
    name="daemonforge",
    help=f"{__logo__} daemonforge - install autorun scripts for the host OS",
    no_args_is_help=True,
)

console = Console()

_state = {"config_path": None}


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} daemonforge v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config.json"),
):
    """daemonforge - install autorun scripts for the host OS."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    _state["config_path"] = config


def _load_config():
    from daemonforge.config.loader import load_config

    return load_config(_state["config_path"])


def _select_driver(config, template: Path | None = None, install_dir: Path | None = None):
    from daemonforge.drivers import discover_driver
    from daemonforge.errors import DaemonForgeError

    try:
        driver = discover_driver(config)
    except DaemonForgeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    if template is not None:
        driver.template_path = template
    if install_dir is not None:
        driver.install_dir = install_dir
    return driver


def _descriptor(name, executable, app_dir, description, author_name, author_email) -> dict:
    return {
        "appName": name,
        "appExecutable": executable,
        "appDir": str(app_dir),
        "appDescription": description,
        "authorName": author_name,
        "authorEmail": author_email,
    }


# ============================================================================
# Drivers
# ============================================================================


@app.command()
def drivers():
    """List every registered driver and whether it matches this host."""
    from daemonforge.drivers.registry import construct_all
    from daemonforge.errors import DaemonForgeError

    config = _load_config()
    try:
        all_drivers = construct_all(config=config)
    except DaemonForgeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Drivers")
    table.add_column("Driver", style="cyan")
    table.add_column("Ancestors")
    table.add_column("Specificity", justify="right")
    table.add_column("Installed")
    table.add_column("Install dir", style="dim")

    for driver in all_drivers:
        table.add_row(
            driver.shorthand,
            " > ".join(driver.ancestors) or "-",
            str(driver.specificity),
            "[green]✓[/green]" if driver.is_installed() else "[dim]no[/dim]",
            str(driver.install_dir or "-"),
        )

    console.print(table)


@app.command()
def detect():
    """Show the driver selected for this host."""
    driver = _select_driver(_load_config())
    details = driver.get_details()

    console.print(f"Driver:       [cyan]{details.shorthand}[/cyan]")
    console.print(f"Ancestors:    {', '.join(details.ancestors) or '-'}")
    console.print(f"Template:     {driver.template_path or '-'}")
    console.print(f"Install dir:  {driver.install_dir or '-'}")


# ============================================================================
# Autorun
# ============================================================================


NAME_OPTION = typer.Option(..., "--name", "-n", help="Unix-proof daemon name (appName)")
EXECUTABLE_OPTION = typer.Option(..., "--executable", "-e", help="Executable file name inside --dir")
DIR_OPTION = typer.Option(..., "--dir", "-d", help="Application directory (appDir)")
DESCRIPTION_OPTION = typer.Option(..., "--description", help="Short description")
AUTHOR_OPTION = typer.Option(..., "--author", help="Author name")
EMAIL_OPTION = typer.Option(..., "--email", help="Author email")
INSTALL_DIR_OPTION = typer.Option(None, "--install-dir", help="Override the driver's install directory")
TEMPLATE_OPTION = typer.Option(None, "--template", help="Override the driver's template file")


@app.command()
def render(
    name: str = NAME_OPTION,
    executable: str = EXECUTABLE_OPTION,
    app_dir: Path = DIR_OPTION,
    description: str = DESCRIPTION_OPTION,
    author: str = AUTHOR_OPTION,
    email: str = EMAIL_OPTION,
    template: Path = TEMPLATE_OPTION,
):
    """Print the autorun script without installing it."""
    from daemonforge.autorun.installer import render_autorun
    from daemonforge.errors import AutoRunFailed, DaemonForgeError

    config = _load_config()
    driver = _select_driver(config, template)
    descriptor = _descriptor(name, executable, app_dir, description, author, email)

    try:
        body = render_autorun(driver, descriptor, strict=config.autorun.strict_placeholders)
    except AutoRunFailed as e:
        for error in e.errors:
            console.print(f"[red]{error}[/red]")
        raise typer.Exit(1)
    except DaemonForgeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    typer.echo(body.decode("utf-8"), nl=False)


@app.command()
def install(
    name: str = NAME_OPTION,
    executable: str = EXECUTABLE_OPTION,
    app_dir: Path = DIR_OPTION,
    description: str = DESCRIPTION_OPTION,
    author: str = AUTHOR_OPTION,
    email: str = EMAIL_OPTION,
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing script"),
    install_dir: Path = INSTALL_DIR_OPTION,
    template: Path = TEMPLATE_OPTION,
):
    """Render and install the autorun script for this host."""
    config = _load_config()
    driver = _select_driver(config, template, install_dir)
    descriptor = _descriptor(name, executable, app_dir, description, author, email)

    result = driver.write_autorun(
        descriptor,
        overwrite=overwrite,
        mode=config.autorun.mode,
        strict=config.autorun.strict_placeholders,
    )

    if not result.ok:
        for message in result.messages():
            console.print(f"[red]{message}[/red]")
        raise typer.Exit(1)

    if result.written:
        console.print(f"[green]✓[/green] Installed {result.path} ({driver.shorthand})")
    else:
        console.print(f"[yellow]{result.path} already exists[/yellow] (use --overwrite to replace it)")
