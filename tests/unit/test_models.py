import pandas as pd

from ytpager import VideoRecord, PageResult


def test_derived_urls():
    video = VideoRecord(id="dQw4w9WgXcQ", title="Never Gonna Give You Up")
    assert video.embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"
    assert video.watch_url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_dataframe_columns():
    result = PageResult(posts=(VideoRecord("a1", "one"), VideoRecord("a2", "two")), has_more=True)
    df = result.to_dataframe()
    assert list(df.columns) == ["id", "title", "embedUrl", "url"]
    assert df["url"].tolist() == [
        "https://www.youtube.com/watch?v=a1",
        "https://www.youtube.com/watch?v=a2",
    ]


def test_empty_dataframe_keeps_columns():
    df = PageResult().to_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert df.empty
    assert list(df.columns) == ["id", "title", "embedUrl", "url"]
