"""
ytpager – page through a YouTube channel's uploads with the Data API v3.

Import the public surface like so:

    from ytpager import PlaylistPager, OutOfRange

Everything else (modules whose names start with “_”) is internal and
subject to change without notice.
"""

import logging as _logging
from importlib import metadata as _metadata

# ─────────────────────────────────────────────────────────────────────────────
# Re-export PUBLIC objects from the internal implementation modules
# ─────────────────────────────────────────────────────────────────────────────
from ._auth import api_key_session, service_account_session
from ._data import DataClient
from ._models import (VideoRecord, PageResult, ChannelContentDetails, PlaylistItem,
                      PlaylistPage, VideoPlatform)
from ._pager import PlaylistPager
from ._errors import (YTPagerError, InvalidArgument, InitializationError, NotFound,
                      OutOfRange, UpstreamError, Cancelled, QuotaExceeded, RateLimited,
                      NotAuthorized, Forbidden, InvalidRequest, raise_for_status)

__all__: list[str] = [
    "api_key_session",
    "service_account_session",
    "DataClient",
    "PlaylistPager",
    "VideoRecord",
    "PageResult",
    "ChannelContentDetails",
    "PlaylistItem",
    "PlaylistPage",
    "VideoPlatform",
    "YTPagerError",
    "InvalidArgument",
    "InitializationError",
    "NotFound",
    "OutOfRange",
    "UpstreamError",
    "Cancelled",
    "QuotaExceeded",
    "RateLimited",
    "NotAuthorized",
    "Forbidden",
    "InvalidRequest",
    "raise_for_status"
]

# Library: leave handler configuration to the application
_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# ─────────────────────────────────────────────────────────────────────────────
# Version handling
# ─────────────────────────────────────────────────────────────────────────────
try:
    # Normal installed case – read version from package metadata
    __version__: str = _metadata.version(__name__)
except _metadata.PackageNotFoundError:
    # Running from a source checkout – fall back to __about__.py
    from .__about__ import __version__  # type: ignore[attr-defined]

# Clean up internal symbols so they don’t leak into dir(ytpager)
del _metadata, _logging
