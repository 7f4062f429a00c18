from __future__ import annotations

import logging
import re
from typing import Any, Final, Mapping, MutableMapping, Sequence

import requests
from google.auth.exceptions import GoogleAuthError

from ._errors import UpstreamError, raise_for_status
from ._models import ChannelContentDetails, PlaylistItem, PlaylistPage
from ._util import runtime_typecheck, _validate_enum, _prune_none, _dig

__all__ = ["DataClient", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "PAGE_SIZE"]

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: Final[str] = "https://www.googleapis.com/youtube/v3"
DEFAULT_TIMEOUT: Final[float] = 60
PAGE_SIZE: Final[int] = 50

_CHANNEL_PARTS_ALLOWED: Final[set[str]] = {
    "auditDetails", "brandingSettings", "contentDetails", "contentOwnerDetails", "id",
    "localizations", "snippet", "statistics", "status", "topicDetails",
}
_PLAYLIST_ITEMS_PARTS_ALLOWED: Final[set[str]] = {"contentDetails", "id", "snippet", "status"}

_KEY_PARAM: Final[re.Pattern[str]] = re.compile(r"(?<=[?&]key=)[^&\s]+")


def _redact(text: str) -> str:
    """Blank out the API key that requests echoes back in connection errors."""
    return _KEY_PARAM.sub("REDACTED", text)


def _required_id(node: Mapping[str, Any], where: str, *keys: str) -> str:
    """Return a non-empty string at *keys*, else raise :class:`UpstreamError`."""
    try:
        value = _dig(node, *keys)
    except KeyError as exc:
        raise UpstreamError(f"{where} is missing {exc.args[0]}") from exc
    if not isinstance(value, str) or not value:
        raise UpstreamError(f"{where} has no usable {'.'.join(keys)}: {value!r}")
    return value


class DataClient:
    """Thin wrapper around the two **YouTube Data API v3** endpoints the pager uses.

    Responses are parsed into the frozen records from :mod:`ytpager._models`
    rather than returned as raw JSON, so anything consuming the client only
    ever sees ``ChannelContentDetails`` and ``PlaylistPage``.

    Args:
        session (requests.Session):
            HTTP session carrying the credential, as built by
            :func:`~ytpager.api_key_session` or
            :func:`~ytpager.service_account_session`.
        base_url (str, optional):
            API root to use instead of ``"https://www.googleapis.com/youtube/v3"``.

    Raises:
        ytpager.UpstreamError:
            On any transport failure, HTTP error status or malformed payload.
            HTTP errors arrive as the subclasses chosen by
            :func:`~ytpager._errors.raise_for_status`.
        ValueError, TypeError:
            Argument-validation errors from the individual methods.

    Examples:
         dc = DataClient(api_key_session("AIza..."))
         details = dc.get_channel_content_details("UC_x5XG1OV2P6uZZ5FSM9Ttw")
         page = dc.list_playlist_items(details.uploads_playlist_id)
    """

    def __init__(self, session, base_url: str = DEFAULT_BASE_URL):
        self.session = session
        self.base_url = base_url.rstrip("/")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.session.close()

    def _data_request(
            self,
            method: str,
            path: str,
            params: MutableMapping[str, object] | None = None,
            *,
            timeout: float | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method.upper(), url, params=params or {},
                timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            )
        except (requests.RequestException, GoogleAuthError) as exc:
            raise UpstreamError(_redact(str(exc))) from exc

        raise_for_status(resp)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamError(f"invalid JSON from {path}: {exc}", status_code=resp.status_code) from exc
        if not isinstance(payload, Mapping):
            raise UpstreamError(f"unexpected payload from {path}: {type(payload).__name__}",
                                status_code=resp.status_code)
        return dict(payload)

    @runtime_typecheck
    def get_channel_content_details(
            self,
            channel_id: str,
            *,
            part: str | Sequence[str] = "contentDetails",
            timeout: int | float | None = None,
    ) -> ChannelContentDetails | None:
        """Resolve a channel's uploads playlist via **channels.list**.

        Args:
            channel_id (str):
                **Required.** ID of the channel.
            part (str | Sequence[str]):
                Facets to request; must include ``"contentDetails"``.
            timeout (float | None):
                Seconds to wait for the response; defaults to 60.

        Returns:
            ChannelContentDetails | None:
                ``None`` when the API returns no channel for *channel_id*.

        Raises:
            ValueError: If *part* is not allowed or omits ``"contentDetails"``.
            UpstreamError: On transport/API failure or a payload without an
                uploads playlist.

        References:
            https://developers.google.com/youtube/v3/docs/channels/list
        """
        parts = _validate_enum("part", part, _CHANNEL_PARTS_ALLOWED)
        if "contentDetails" not in parts:
            raise ValueError("part must include 'contentDetails' to resolve the uploads playlist")

        params = {"part": ",".join(parts), "id": channel_id}
        logger.debug("channels.list id=%s", channel_id)
        payload = self._data_request("GET", "/channels", params, timeout=timeout)

        items = payload.get("items") or []
        if not items:
            return None

        uploads = _required_id(items[0], f"channel {channel_id} response",
                               "contentDetails", "relatedPlaylists", "uploads")

        return ChannelContentDetails(channel_id=items[0].get("id", channel_id), uploads_playlist_id=uploads)

    @runtime_typecheck
    def list_playlist_items(
            self,
            playlist_id: str,
            *,
            page_token: str = "",
            max_results: int = PAGE_SIZE,
            part: str | Sequence[str] = "snippet",
            timeout: int | float | None = None,
    ) -> PlaylistPage:
        """Fetch one page of **playlistItems.list**.

        Args:
            playlist_id (str):
                **Required.** ID of the playlist.
            page_token (str):
                Continuation token from the previous page; ``""`` for the
                first page.
            max_results (int):
                Maximum items per page (0–50).
            part (str | Sequence[str]):
                Facets to request; must include ``"snippet"``.
            timeout (float | None):
                Seconds to wait for the response; defaults to 60.

        Returns:
            PlaylistPage:
                Items in platform order and the ``nextPageToken`` (``""`` when
                this is the last page).

        Raises:
            ValueError: If *max_results* or *part* is out of range.
            UpstreamError: On transport/API failure or an item without a
                video ID.

        References:
            https://developers.google.com/youtube/v3/docs/playlistItems/list
        """
        if not 0 <= max_results <= PAGE_SIZE:
            raise ValueError(f"max_results must be between 0 and {PAGE_SIZE}, got {max_results}")

        parts = _validate_enum("part", part, _PLAYLIST_ITEMS_PARTS_ALLOWED)
        if "snippet" not in parts:
            raise ValueError("part must include 'snippet' to read video IDs and titles")

        params = _prune_none({
            "part": ",".join(parts),
            "playlistId": playlist_id,
            "maxResults": max_results,
            "pageToken": page_token or None,
        })
        logger.debug("playlistItems.list playlistId=%s pageToken=%r", playlist_id, page_token)
        payload = self._data_request("GET", "/playlistItems", params, timeout=timeout)

        items = []
        for raw in payload.get("items") or []:
            video_id = _required_id(raw, f"playlist {playlist_id} item", "snippet", "resourceId", "videoId")
            items.append(PlaylistItem(video_id=video_id, title=_dig(raw, "snippet", "title", default="") or ""))

        return PlaylistPage(items=tuple(items), next_page_token=payload.get("nextPageToken") or "")
