import logging
from datetime import timedelta
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from diffbot.api import Diffbot
from diffbot.entity import Options, Request


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DIFFBOT_API_URL", raising=False)
    monkeypatch.delenv("DIFFBOT_FIELDS", raising=False)
    monkeypatch.delenv("DIFFBOT_TIMEOUT", raising=False)
    monkeypatch.delenv("DIFFBOT_CALLBACK", raising=False)
    monkeypatch.delenv("DIFFBOT_DISCUSSION", raising=False)


def test_params() -> None:
    api = Diffbot()
    params = api.params("article", Options(fields="title"))
    assert params == "&fields=title&discussion=false"


def test_params_dict() -> None:
    api = Diffbot()
    params = api.params("batch", {"timeout": timedelta(milliseconds=1500), "batch_relative_url": "/a b"})
    assert params == "&timeout=1500&relative_url=%2Fa+b"


def test_params_defaults(mocker: MockerFixture) -> None:
    mocker.patch.dict("os.environ", {"DIFFBOT_TIMEOUT": "PT2S", "DIFFBOT_CALLBACK": "cb"})

    api = Diffbot()
    assert api.params("foo") == "&timeout=2000&callback=cb"
    assert api.params("foo", Options()) == ""


def test_params_logging(caplog: pytest.LogCaptureFixture) -> None:
    api = Diffbot()
    with caplog.at_level(logging.DEBUG, logger="diffbot"):
        api.params("crawl/data", Options(crawl_format="csv"))

    assert "Encoded crawl/data parameters: '&format=csv'" in caplog.text


def test_url() -> None:
    api = Diffbot()
    url = api.url(
        {
            "method": "frontpage",
            "url": "http://example.com/",
            "options": {"frontpage_all": "true"},
        },
    )
    assert url == "https://api.diffbot.com/v3/frontpage?url=http%3A%2F%2Fexample.com%2F&all=true"


def test_url_defaults(mocker: MockerFixture) -> None:
    mocker.patch.dict("os.environ", {"DIFFBOT_API_URL": "http://localhost:8080/v3/", "DIFFBOT_FIELDS": "meta"})

    api = Diffbot()
    url = api.url(Request(method="analyze", url="http://example.com/"))
    assert url == "http://localhost:8080/v3/analyze?url=http%3A%2F%2Fexample.com%2F&fields=meta&discussion=false"


def test_url_no_params() -> None:
    api = Diffbot()
    assert api.url(Request(method="crawl")) == "https://api.diffbot.com/v3/crawl"


def test_headers() -> None:
    api = Diffbot()
    request = Request(method="article", options=Options(custom_header={"X-Forward-Cookie": "a=b"}))
    assert api.headers(request)["X-Forward-Cookie"] == "a=b"
    assert not api.headers(Request(method="article"))
