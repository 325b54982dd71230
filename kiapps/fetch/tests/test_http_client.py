import pytest
import requests

from kiapps.fetch.http_client import HttpClient


class _FakeResponse:
    def __init__(self, status=200, text="", content=b""):
        self.status_code = status
        self.text = text
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class _FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        r = self._responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


def _client(responses, **kwargs):
    sleeps = []
    client = HttpClient(session=_FakeSession(responses), sleep=sleeps.append, **kwargs)
    return client, sleeps


def test_get_bytes_paces_after_success():
    client, sleeps = _client(
        [_FakeResponse(content=b"%PDF")], pace_min_s=2.0, pace_jitter_s=0.0
    )
    assert client.get_bytes("https://x/a.pdf") == b"%PDF"
    assert sleeps == [2.0]


def test_retries_then_succeeds():
    client, sleeps = _client(
        [requests.ConnectionError("down"), _FakeResponse(text="<html/>")],
        max_retries=2,
        pace_min_s=0.0,
        pace_jitter_s=0.0,
    )
    assert client.get_text("https://x/") == "<html/>"
    assert len(client.session.calls) == 2
    assert len(sleeps) == 1  # one backoff, no pacing


def test_gives_up_after_max_retries():
    client, _ = _client(
        [_FakeResponse(status=500), _FakeResponse(status=503)],
        max_retries=1,
        pace_min_s=0.0,
        pace_jitter_s=0.0,
    )
    with pytest.raises(requests.HTTPError):
        client.get_bytes("https://x/a.pdf")


def test_proxy_and_verify_are_passed_through():
    client, _ = _client([_FakeResponse(text="ok")], proxy="http://proxy:8080", pace_min_s=0.0, pace_jitter_s=0.0)
    client.get_text("https://x/", verify=False)
    _, kwargs = client.session.calls[0]
    assert kwargs["proxies"] == {"http": "http://proxy:8080", "https": "http://proxy:8080"}
    assert kwargs["verify"] is False
