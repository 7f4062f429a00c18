import json
import pathlib

import pytest

from ytpager import ChannelContentDetails, PlaylistItem, PlaylistPage

DATA_DIR = pathlib.Path(__file__).parent / "data"


def load_fixture(name):
    with open(DATA_DIR / name) as f:
        return json.load(f)


class FakePlatform:
    """Canned VideoPlatform: one channel, pages keyed by the token that fetches them.

    A value in *pages* (or *channel*) that is an exception is raised instead
    of returned. Every call is appended to ``calls``.
    """

    def __init__(self, channel=None, pages=None):
        self.channel = channel
        self.pages = pages or {}
        self.calls = []
        self.closed = False

    def get_channel_content_details(self, channel_id, *, timeout=None):
        self.calls.append(("channels", channel_id, timeout))
        if isinstance(self.channel, Exception):
            raise self.channel
        return self.channel

    def list_playlist_items(self, playlist_id, *, page_token="", max_results=50,
                            part="snippet", timeout=None):
        self.calls.append(("playlistItems", playlist_id, page_token, max_results, part))
        page = self.pages[page_token]
        if isinstance(page, Exception):
            raise page
        return page

    def close(self):
        self.closed = True

    @property
    def playlist_calls(self):
        return [c for c in self.calls if c[0] == "playlistItems"]


def make_page(*video_ids, next_token=""):
    return PlaylistPage(
        items=tuple(PlaylistItem(video_id=v, title=f"title {v}") for v in video_ids),
        next_page_token=next_token,
    )


@pytest.fixture
def uploads():
    return ChannelContentDetails(channel_id="UCabc", uploads_playlist_id="PLxyz")


@pytest.fixture
def fake_response(mocker):
    """Build a stand-in for ``requests.Response``."""

    def _make(payload=None, status_code=200, headers=None, text=None):
        resp = mocker.Mock()
        resp.status_code = status_code
        resp.headers = headers or {}
        resp.text = text if text is not None else json.dumps(payload)
        if isinstance(payload, Exception):
            resp.json.side_effect = payload
        else:
            resp.json.return_value = payload
        return resp

    return _make
