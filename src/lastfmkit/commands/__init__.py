"""Command groups for the lastfmkit CLI.

This package provides sub-apps that are mounted by lastfmkit.cli.
"""

from . import album as album  # noqa: F401
from . import artist as artist  # noqa: F401
from . import config as config  # noqa: F401
from . import tag as tag  # noqa: F401
from . import track as track  # noqa: F401

__all__ = [
    "album",
    "artist",
    "config",
    "tag",
    "track",
]
