from __future__ import annotations

"""ytpager — **shared exception hierarchy** & HTTP‑error helper.

Every failure surfaced by :class:`~ytpager.PlaylistPager` is an instance of
:class:`YTPagerError`, and every class exposes a ``kind`` string so callers
can branch on it without importing the classes:

```python
from ytpager import PlaylistPager, UpstreamError, OutOfRange

try:
    result = pager.fetch_videos("UC_x5XG1OV2P6uZZ5FSM9Ttw", page=4)
except OutOfRange:
    result = None
except UpstreamError as e:
    logger.warning("youtube unavailable (%s): %s", e.kind, e)
```"""

from typing import ClassVar, Final

__all__ = [
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
    "raise_for_status",
]

# ---------------------------------------------------------------------------
# Base & specialised exceptions
# ---------------------------------------------------------------------------


class YTPagerError(Exception):
    """Base for *all* ytpager exceptions."""

    kind: ClassVar[str] = "YTPagerError"
    retryable: ClassVar[bool] = False


# ── Caller mistakes ---------------------------------------------------------
class InvalidArgument(YTPagerError, ValueError):
    """Argument rejected before any request was sent (e.g. ``page < 1``)."""

    kind = "InvalidArgument"


class InitializationError(YTPagerError):
    """The credential could not be turned into a usable API session."""

    kind = "InitializationError"


# ── Result boundaries -------------------------------------------------------
class NotFound(YTPagerError, LookupError):
    """The channel lookup returned no results."""

    kind = "NotFound"


class OutOfRange(YTPagerError, IndexError):
    """The requested page lies past the last page of the uploads playlist."""

    kind = "OutOfRange"


class Cancelled(YTPagerError):
    """The caller's cancel event fired or its deadline passed."""

    kind = "Cancelled"


# ── Upstream / transport ----------------------------------------------------
class UpstreamError(YTPagerError):
    """Any transport or API failure; the original message is preserved.

    ``status_code`` and ``reason`` are filled in when the failure came from an
    HTTP error response, and are ``None`` for network-level errors.
    """

    kind = "UpstreamError"
    retryable = True

    def __init__(self, message: str, *, status_code: int | None = None, reason: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class QuotaExceeded(UpstreamError):
    """Daily project quota or per‑user quota exhausted (HTTP 403)."""


class RateLimited(UpstreamError):
    """Short‑term rate‑limit hit (HTTP 429 or 403 *userRateLimitExceeded*).

    The exception exposes ``retry_after`` seconds when available so callers
    that retry on their own side know how long to wait.
    """

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class NotAuthorized(UpstreamError):
    """401 – invalid or revoked credentials."""


class Forbidden(UpstreamError):
    """403 – caller authenticated but not allowed to access the resource."""


class InvalidRequest(UpstreamError):
    """400 / 404 – malformed query parameters or unknown resource ID."""


# ---------------------------------------------------------------------------
# Helper – map HTTP response → exception class
# ---------------------------------------------------------------------------


_QUOTA_REASONS: Final[set[str]] = {
    "quotaExceeded",
    "dailyLimitExceeded",
    "userRateLimitExceeded",
    "rateLimitExceeded",
}

_RATE_REASONS: Final[set[str]] = {
    "userRateLimitExceeded",
    "rateLimitExceeded",
}


def _reason(resp) -> str:  # noqa: ANN001
    """Return the *reason* field from Google’s error payload or ``"unknown"``."""
    try:
        return resp.json()["error"]["errors"][0]["reason"]
    except (ValueError, KeyError, IndexError, TypeError):
        return "unknown"


def _retry_after(resp) -> int:  # noqa: ANN001
    try:
        return int(resp.headers.get("Retry-After", "0") or 0)
    except ValueError:
        return 0


def raise_for_status(resp) -> None:  # noqa: ANN001
    """Raise the appropriate :class:`UpstreamError` subclass for *resp*.

    Does **nothing** when the response code is < 400.
    """
    status = resp.status_code
    if status < 400:
        return

    reason = _reason(resp)
    message = f"YouTube API error {status}: {resp.text}"
    info = {"status_code": status, "reason": reason}

    # 401 ––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––––
    if status == 401:
        raise NotAuthorized(message, **info)

    # 403 – distinguish quota vs. generic forbidden  ––––––––––––––––––––
    if status == 403:
        if reason in _QUOTA_REASONS:
            if reason in _RATE_REASONS:
                raise RateLimited(message, _retry_after(resp), **info)
            raise QuotaExceeded(message, **info)
        raise Forbidden(message, **info)

    # 429 – explicit rate limit –––––––––––––––––––––––––––––––––––––––––
    if status == 429:
        raise RateLimited(message, _retry_after(resp), **info)

    # 400 / 404 – client errors ––––––––––––––––––––––––––––––––––––––––
    if status in (400, 404):
        raise InvalidRequest(message, **info)

    # Fallback – unknown 4xx/5xx –––––––––––––––––––––––––––––––––––––––
    raise UpstreamError(message, **info)
