"""Command groups of the oaitool CLI."""
from . import cluster, host

__all__ = ['cluster', 'host']
