import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx

from bookdesk.book import Book
from bookdesk.services.http_client import get_http_client

logger = logging.getLogger(__name__)


class BookServiceError(Exception):
    """Base class for failures talking to the book API."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FetchError(BookServiceError):
    """The request did not go through or the response could not be decoded."""


class ApiError(BookServiceError):
    """The API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BookApiClient:
    """Client for the ``/api/books`` resource of the remote book service."""

    GET_FAILED = "Failed to load book."
    CREATE_FAILED = "Failed to register book."
    UPDATE_FAILED = "Failed to update book."
    DELETE_FAILED = "Failed to delete book."

    def __init__(self, base_url: str, client: Optional[httpx.Client] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = get_http_client()
        return self._client

    def _url(self, book_id: Any = None) -> str:
        url = f"{self.base_url}/api/books"
        if book_id is not None:
            url = f"{url}/{quote(str(book_id), safe='')}"
        return url

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise FetchError(f"Could not reach the book service: {e}") from e

    # ------------------------- Operations ------------------------- #
    def list_books(self) -> List[Book]:
        """GET the whole collection, in server order."""
        response = self._send("GET", self._url())
        if not response.is_success:
            raise FetchError(f"HTTP {response.status_code}")
        data = _decode(response)
        if not isinstance(data, list):
            raise FetchError("Unexpected response from the book service.")
        try:
            return [Book.from_dict(item) for item in data]
        except ValueError as e:
            raise FetchError(str(e)) from e

    def get_book(self, book_id: Any) -> Book:
        response = self._send("GET", self._url(book_id))
        if not response.is_success:
            raise ApiError(_error_message(response, self.GET_FAILED), response.status_code)
        return _decode_book(response)

    def create_book(self, book: Book) -> Book:
        response = self._send("POST", self._url(), json=book.to_payload())
        if not response.is_success:
            raise ApiError(_error_message(response, self.CREATE_FAILED), response.status_code)
        return _decode_book(response)

    def update_book(self, book_id: Any, book: Book) -> Book:
        """PUT a full replacement of the book stored under ``book_id``."""
        response = self._send("PUT", self._url(book_id), json=book.to_payload())
        if not response.is_success:
            raise ApiError(_error_message(response, self.UPDATE_FAILED), response.status_code)
        return _decode_book(response)

    def delete_book(self, book_id: Any) -> None:
        response = self._send("DELETE", self._url(book_id))
        if not response.is_success:
            raise ApiError(self.DELETE_FAILED, response.status_code)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise FetchError("Could not read the response from the book service.") from e


def _decode_book(response: httpx.Response) -> Book:
    try:
        return Book.from_dict(_decode(response))
    except ValueError as e:
        raise FetchError(str(e)) from e


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Use the server's ``message`` field when the error body carries one."""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return fallback
