from typing import Optional
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.testclient import TestClient
from pydantic import BaseModel

from bookdesk.services.book_api import BookApiClient
from bookdesk.utils.ui_helpers import OUTPUT_MODE_ENV, build_desk


class BookIn(BaseModel):
    title: str
    author: str
    isbn: str
    price: Optional[str] = None
    publishDate: Optional[str] = None


def create_book_service() -> FastAPI:
    """In-memory stand-in for the remote book API."""
    app = FastAPI()
    app.state.books = {}
    app.state.next_id = 1
    app.state.requests = []

    @app.middleware("http")
    async def record_requests(request: Request, call_next):
        app.state.requests.append((request.method, request.url.path))
        return await call_next(request)

    def _not_found() -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": "Book not found"})

    def _duplicate(isbn: str, book_id: Optional[int] = None) -> bool:
        return any(b["isbn"] == isbn and b["id"] != book_id for b in app.state.books.values())

    @app.get("/api/books")
    def list_books():
        return list(app.state.books.values())

    @app.get("/api/books/{book_id}")
    def get_book(book_id: int):
        book = app.state.books.get(book_id)
        return book if book else _not_found()

    @app.post("/api/books", status_code=201)
    def create_book(payload: BookIn):
        if _duplicate(payload.isbn):
            return JSONResponse(status_code=409, content={"message": "duplicate isbn"})
        book = {"id": app.state.next_id, **payload.model_dump()}
        app.state.books[book["id"]] = book
        app.state.next_id += 1
        return book

    @app.put("/api/books/{book_id}")
    def update_book(book_id: int, payload: BookIn):
        if book_id not in app.state.books:
            return _not_found()
        if _duplicate(payload.isbn, book_id):
            return JSONResponse(status_code=409, content={"message": "duplicate isbn"})
        book = {"id": book_id, **payload.model_dump()}
        app.state.books[book_id] = book
        return book

    @app.delete("/api/books/{book_id}", status_code=204)
    def delete_book(book_id: int):
        if app.state.books.pop(book_id, None) is None:
            return _not_found()
        return Response(status_code=204)

    return app


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # set_output_mode writes to the environment; keep each test isolated
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def book_service():
    return create_book_service()


@pytest.fixture
def service_client(book_service):
    with TestClient(book_service) as client:
        yield client


@pytest.fixture
def api(service_client):
    return BookApiClient("http://testserver", client=service_client)


@pytest.fixture
def desk(api):
    """Controller, table and slot wired to the in-memory service."""
    alert = MagicMock()
    confirm = MagicMock(return_value=True)
    controller, table, slot = build_desk(api, alert=alert, confirm=confirm)
    return controller, table, slot, alert, confirm
