import logging
import sys
from typing import Optional

import typer

from oaitool import __version__
from oaitool.commands import cluster, host
from oaitool.commands.common import State, fail
from oaitool.config import Config
from oaitool.exceptions import OaiError
from oaitool.logging import setup_logging

app = typer.Typer(help="oaitool - OpenShift Assisted Installer CLI.")

# Add all command groups
app.add_typer(cluster.app, name="cluster")
app.add_typer(host.app, name="host")


# Global options callback
@app.callback()
def callback(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None, "--config-file", "-f", help="Path to a YAML config file"
    ),
    offline_token: Optional[str] = typer.Option(
        None, "--offline-token", "-t", help="Offline token used to obtain an access token"
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", "-u", help="Assisted Installer API endpoint"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase log verbosity; repeat for debug"
    ),
):
    """OpenShift Assisted Installer CLI."""
    setup_logging(verbose)

    # State handed in by the caller (tests) is used as is
    if isinstance(ctx.obj, State):
        return

    try:
        config = Config.load(
            config_file,
            offline_token=offline_token,
            api_url=api_url,
            verbose=verbose or None,
        )
    except OaiError as e:
        fail(e)

    if config.verbose != verbose:
        setup_logging(config.verbose)
        logging.debug(f"verbosity {config.verbose} from {config.config_file or 'environment'}")

    ctx.obj = State(config)


@app.command()
def version():
    """Print the oaitool version."""
    typer.echo(__version__)


def main():
    try:
        app()
    except Exception as e:
        logging.debug("Unhandled exception", exc_info=True)
        logging.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
