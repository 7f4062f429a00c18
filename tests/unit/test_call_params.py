from ytpager import DataClient
from conftest import load_fixture


def test_channel_lookup_params(mocker, fake_response):
    session = mocker.Mock()
    session.request.return_value = fake_response(load_fixture("channel_content_details.json"))
    dc = DataClient(session)

    dc.get_channel_content_details("UCabc", timeout=12.5)

    session.request.assert_called_once()
    args, kwargs = session.request.call_args
    assert args == ("GET", "https://www.googleapis.com/youtube/v3/channels")
    assert kwargs["params"] == {"part": "contentDetails", "id": "UCabc"}
    assert kwargs["timeout"] == 12.5


def test_first_page_omits_page_token(mocker, fake_response):
    session = mocker.Mock()
    session.request.return_value = fake_response(load_fixture("playlist_items_first.json"))

    DataClient(session).list_playlist_items("PLxyz")

    kwargs = session.request.call_args.kwargs
    assert kwargs["params"] == {"part": "snippet", "playlistId": "PLxyz", "maxResults": 50}
    assert kwargs["timeout"] == 60


def test_continuation_passes_page_token(mocker, fake_response):
    session = mocker.Mock()
    session.request.return_value = fake_response(load_fixture("playlist_items_last.json"))

    DataClient(session, base_url="http://localhost:8080/youtube/v3/").list_playlist_items(
        "PLxyz", page_token="EAAaBlBUOkNESQ", max_results=2, part=("snippet", "contentDetails"),
    )

    args, kwargs = session.request.call_args
    assert args[1] == "http://localhost:8080/youtube/v3/playlistItems"
    assert kwargs["params"]["pageToken"] == "EAAaBlBUOkNESQ"
    assert kwargs["params"]["maxResults"] == 2
    assert kwargs["params"]["part"] == "snippet,contentDetails"


def test_context_manager_closes_session(mocker):
    session = mocker.Mock()
    with DataClient(session):
        pass
    session.close.assert_called_once()
