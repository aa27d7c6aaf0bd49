from bookdesk.services import http_client
from bookdesk.services.book_api import BookApiClient
from config import settings


def test_create_http_client_uses_settings():
    client = http_client.create_http_client()
    try:
        assert client.timeout.read == settings.http_timeout
        assert client.timeout.connect == settings.connect_timeout
        assert client.follow_redirects is True
        assert client.headers["accept"] == "application/json"
    finally:
        client.close()


def test_timeout_override():
    client = http_client.create_http_client(timeout=1.5, connect_timeout=0.5)
    try:
        assert client.timeout.read == 1.5
        assert client.timeout.connect == 0.5
    finally:
        client.close()


def test_global_client_is_shared_and_closed():
    try:
        first = http_client.get_http_client()
        assert http_client.get_http_client() is first
        assert BookApiClient("http://books.test").client is first
    finally:
        http_client.close_http_client()
    assert first.is_closed
    assert http_client._global_client is None
