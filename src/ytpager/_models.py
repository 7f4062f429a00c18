from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Protocol

import pandas as pd

__all__ = [
    "EMBED_URL_PREFIX",
    "WATCH_URL_PREFIX",
    "VideoRecord",
    "PageResult",
    "ChannelContentDetails",
    "PlaylistItem",
    "PlaylistPage",
    "VideoPlatform",
]

EMBED_URL_PREFIX: Final[str] = "https://www.youtube.com/embed/"
WATCH_URL_PREFIX: Final[str] = "https://www.youtube.com/watch?v="

_POST_COLUMNS: Final[list[str]] = ["id", "title", "embedUrl", "url"]


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VideoRecord:
    """One uploaded video, reduced to what a feed needs to render it."""

    id: str
    title: str

    @property
    def embed_url(self) -> str:
        return f"{EMBED_URL_PREFIX}{self.id}"

    @property
    def watch_url(self) -> str:
        return f"{WATCH_URL_PREFIX}{self.id}"

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "embedUrl": self.embed_url,
            "url": self.watch_url,
        }


@dataclass(frozen=True)
class PageResult:
    """A single page of a channel's uploads.

    Attributes:
        posts (tuple[VideoRecord, ...]):
            Videos in the order the platform returned them.
        has_more (bool):
            ``True`` when the platform issued a continuation token after
            this page.
    """

    posts: tuple[VideoRecord, ...] = field(default_factory=tuple)
    has_more: bool = False

    def to_dict(self) -> dict[str, object]:
        """Serialisable shape: ``{"posts": [...], "hasMore": bool}``."""
        return {
            "posts": [post.to_dict() for post in self.posts],
            "hasMore": self.has_more,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Return the posts as a DataFrame with ``id, title, embedUrl, url`` columns."""
        if not self.posts:
            return pd.DataFrame(columns=_POST_COLUMNS)
        return pd.DataFrame([post.to_dict() for post in self.posts], columns=_POST_COLUMNS)


# ---------------------------------------------------------------------------
# Collaborator results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChannelContentDetails:
    channel_id: str
    uploads_playlist_id: str


@dataclass(frozen=True)
class PlaylistItem:
    video_id: str
    title: str


@dataclass(frozen=True)
class PlaylistPage:
    items: tuple[PlaylistItem, ...] = ()
    next_page_token: str = ""  # "" when the platform sent none


class VideoPlatform(Protocol):
    """The two calls :class:`~ytpager.PlaylistPager` needs from the platform.

    :class:`~ytpager.DataClient` is the HTTP implementation; tests pass a
    canned double instead. Implementations must raise :class:`~ytpager.UpstreamError`
    (or a subclass) for transport and API failures; anything else reaches the
    caller of ``fetch_videos`` unwrapped.
    """

    def get_channel_content_details(
            self,
            channel_id: str,
            *,
            timeout: float | None = None,
    ) -> ChannelContentDetails | None:
        ...

    def list_playlist_items(
            self,
            playlist_id: str,
            *,
            page_token: str = "",
            max_results: int = 50,
            part: str = "snippet",
            timeout: float | None = None,
    ) -> PlaylistPage:
        ...
