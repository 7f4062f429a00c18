from __future__ import annotations

import logging
import pathlib
import threading
import time

from ._auth import api_key_session, service_account_session
from ._data import DataClient, DEFAULT_BASE_URL, PAGE_SIZE
from ._errors import (YTPagerError, Cancelled, InitializationError, InvalidArgument,
                      NotFound, OutOfRange, UpstreamError)
from ._models import PageResult, VideoPlatform, VideoRecord
from ._util import runtime_typecheck

__all__ = ["PlaylistPager"]

logger = logging.getLogger(__name__)


class _Deadline:
    """Cancel event plus optional wall-clock budget for one ``fetch_videos`` call."""

    def __init__(self, timeout: float | None, cancel: threading.Event | None):
        self.expires_at = None if timeout is None else time.monotonic() + timeout
        self.cancel = cancel

    def expired(self) -> bool:
        if self.cancel is not None and self.cancel.is_set():
            return True
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self) -> float | None:
        """Raise :class:`Cancelled` if done, else return the seconds left (or ``None``)."""
        if self.expired():
            raise Cancelled("operation cancelled")
        if self.expires_at is None:
            return None
        return self.expires_at - time.monotonic()


class PlaylistPager:
    """Page through a channel's uploads, one fixed-size page at a time.

    Pages are 1-based and hold up to 50 videos. The YouTube Data API only
    offers forward continuation tokens, so reaching page *N* costs *N*
    ``playlistItems.list`` calls: nothing is cached between invocations and
    every call re-walks from the first page.

    Args:
        api_key (str | None):
            Data API key. A session and :class:`DataClient` are built from it.
        client (VideoPlatform | None):
            Pre-built collaborator to use instead (a :class:`DataClient` or a
            test double).
        session (requests.Session | None):
            Pre-authenticated HTTP session to wrap in a :class:`DataClient`.
        base_url (str, optional):
            API root passed to the :class:`DataClient` built from *api_key* or
            *session*.

        **Exactly one** of *api_key*, *client* or *session* must be supplied.

    Raises:
        InitializationError: If the credential cannot produce a session.

    Examples:
         with PlaylistPager("AIza...") as pager:
             result = pager.fetch_videos("UC_x5XG1OV2P6uZZ5FSM9Ttw", page=2)
         result.to_dict()["hasMore"]
    """

    def __init__(
            self,
            api_key: str | None = None,
            *,
            client: VideoPlatform | None = None,
            session=None,
            base_url: str = DEFAULT_BASE_URL,
    ):
        if sum(x is not None for x in (api_key, client, session)) != 1:
            raise InitializationError("Supply exactly one of api_key, client, or session.")

        if client is None:
            if session is None:
                session = api_key_session(api_key)
            client = DataClient(session, base_url=base_url)
        self.client = client

    @classmethod
    def from_service_account(cls, json_path: str | pathlib.Path, **kwargs) -> PlaylistPager:
        """Build a pager authenticated with a service-account key file."""
        return cls(session=service_account_session(json_path), **kwargs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        close = getattr(self.client, "close", None)
        if callable(close):
            close()

    @staticmethod
    def _upstream(message: str, exc: UpstreamError, deadline: _Deadline) -> YTPagerError:
        if deadline.expired():
            return Cancelled(f"operation cancelled: {exc}")
        # Keep the concrete subclass (RateLimited, QuotaExceeded, ...) for callers.
        wrapped = type(exc)(f"{message}: {exc}", status_code=exc.status_code, reason=exc.reason)
        if hasattr(exc, "retry_after"):
            wrapped.retry_after = exc.retry_after
        return wrapped

    @runtime_typecheck
    def fetch_videos(
            self,
            channel_id: str,
            page: int,
            *,
            timeout: int | float | None = None,
            cancel: threading.Event | None = None,
    ) -> PageResult:
        """Return page *page* of *channel_id*'s uploads.

        Args:
            channel_id (str):
                **Required.** ID of the channel (``"UC..."``).
            page (int):
                **Required.** 1-based page number.
            timeout (float | None):
                Overall budget in seconds for every request this call makes.
            cancel (threading.Event | None):
                Set from another thread to abort between requests.

        Returns:
            PageResult: The page's videos and whether another page follows.

        Raises:
            InvalidArgument: If *page* < 1. No request is made.
            NotFound: If the channel does not exist.
            OutOfRange: If the uploads playlist ends before *page*.
            UpstreamError: On any transport or API failure.
            Cancelled: If *cancel* is set or *timeout* runs out.
        """
        if page < 1:
            raise InvalidArgument("page number must be greater than 0")

        deadline = _Deadline(timeout, cancel)

        # (1) uploads playlist
        remaining = deadline.check()
        try:
            details = self.client.get_channel_content_details(channel_id, timeout=remaining)
        except UpstreamError as exc:
            raise self._upstream("error getting channel details", exc, deadline) from exc
        if details is None:
            raise NotFound("channel not found")

        playlist_id = details.uploads_playlist_id
        logger.debug("channel %s uploads playlist %s", channel_id, playlist_id)

        # (2) walk continuation tokens up to the requested page
        page_token = ""
        for _ in range(1, page):
            remaining = deadline.check()
            try:
                skipped = self.client.list_playlist_items(
                    playlist_id, page_token=page_token, max_results=PAGE_SIZE,
                    part="snippet", timeout=remaining,
                )
            except UpstreamError as exc:
                raise self._upstream("error fetching playlist items", exc, deadline) from exc

            page_token = skipped.next_page_token
            if not page_token:
                logger.warning("channel %s: page %d is beyond the available results", channel_id, page)
                raise OutOfRange(f"page {page} is beyond the available results")

        # (3) the requested page
        remaining = deadline.check()
        try:
            result = self.client.list_playlist_items(
                playlist_id, page_token=page_token, max_results=PAGE_SIZE,
                part="snippet", timeout=remaining,
            )
        except UpstreamError as exc:
            raise self._upstream("error fetching playlist items", exc, deadline) from exc

        posts = tuple(VideoRecord(id=item.video_id, title=item.title) for item in result.items)
        return PageResult(posts=posts, has_more=bool(result.next_page_token))
