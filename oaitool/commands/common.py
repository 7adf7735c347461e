"""Pieces shared by the command groups."""
import functools
import logging
from typing import NoReturn, Optional

import requests
import typer

from oaitool.config import Config
from oaitool.exceptions import OaiError
from oaitool.modules.assisted import AssistedClient

logger = logging.getLogger(__name__)

CLUSTER_OPTION_HELP = "Cluster id or name"


class State:
    """Per-invocation state carried in the typer context.

    The API client is created, and the offline token exchanged, the first
    time a command asks for it.
    """

    def __init__(self, config: Config, client: Optional[AssistedClient] = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> AssistedClient:
        if self._client is None:
            self._client = AssistedClient.from_config(self.config)
        return self._client


def get_state(ctx: typer.Context) -> State:
    return ctx.find_object(State)


def fail(error) -> NoReturn:
    """Report an error on stderr and exit non-zero."""
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def handle_errors(func):
    """Turn expected failures of a command into an error message and exit code 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OaiError, requests.RequestException, OSError) as e:
            logger.debug(f"{func.__name__} failed", exc_info=True)
            fail(e)
    return wrapper


def cluster_option():
    return typer.Option(..., "--cluster", "-c", help=CLUSTER_OPTION_HELP)
