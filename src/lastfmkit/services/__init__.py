"""Per-domain Last.fm methods.

Each module holds plain async functions taking a
:class:`~lastfmkit.core.dispatcher.Dispatcher` as first argument.
"""

from . import album as album  # noqa: F401
from . import artist as artist  # noqa: F401
from . import auth as auth  # noqa: F401
from . import tag as tag  # noqa: F401
from . import track as track  # noqa: F401

__all__ = ["album", "artist", "auth", "tag", "track"]
