from unittest import mock

import pytest
import requests

from zameny.errors import FetchError
from zameny.services.fetcher import HttpClient, HttpConfig, fetch_bytes


def _config(retries=2):
    return HttpConfig(
        user_agent="test-agent",
        timeout_seconds=5,
        max_retries=retries,
        backoff_base_seconds=0,
    )


def _response(status_code, content=b""):
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = content
    resp.url = "https://example.test/zameny.doc"
    return resp


def _client(*responses, retries=2):
    session = mock.Mock(spec=requests.Session)
    session.headers = {}
    session.get.side_effect = list(responses)
    return HttpClient(_config(retries), session=session), session


def test_fetch_bytes_returns_content():
    client, session = _client(_response(200, b"payload"))
    assert client.fetch_bytes("https://example.test/zameny.doc") == b"payload"
    assert session.headers["User-Agent"] == "test-agent"
    session.get.assert_called_once()
    assert session.get.call_args.kwargs["timeout"] == 5


def test_retries_on_server_errors():
    client, session = _client(_response(503), _response(502), _response(200, b"ok"))
    assert client.fetch_bytes("https://example.test/zameny.doc") == b"ok"
    assert session.get.call_count == 3


def test_retries_on_connection_errors():
    client, session = _client(requests.ConnectionError("down"), _response(200, b"ok"))
    assert client.fetch_bytes("https://example.test/zameny.doc") == b"ok"
    assert session.get.call_count == 2


def test_gives_up_after_retries():
    client, session = _client(*[_response(500)] * 3, retries=2)
    with pytest.raises(FetchError) as excinfo:
        client.fetch_bytes("https://example.test/zameny.doc")
    assert excinfo.value.url == "https://example.test/zameny.doc"
    assert session.get.call_count == 3


def test_client_errors_are_not_retried():
    client, session = _client(_response(404), _response(200, b"never"))
    with pytest.raises(FetchError):
        client.fetch_bytes("https://example.test/zameny.doc")
    assert session.get.call_count == 1


def test_module_fetch_bytes_uses_given_client():
    client, session = _client(_response(200, b"doc"))
    assert fetch_bytes("https://example.test/zameny.doc", client) == b"doc"
    session.get.assert_called_once()
