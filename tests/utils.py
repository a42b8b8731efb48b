from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient

BOOKS_URL = "/api/v1/books"


def create_book(
    client: TestClient,
    title: str,
    author: str,
    isbn: str | None = None,
) -> dict[str, Any]:
    """Create a book through the API and return the response body."""
    payload: dict[str, Any] = {"title": title, "author": author}
    if isbn is not None:
        payload["isbn"] = isbn

    response = client.post(BOOKS_URL, json=payload)
    assert response.status_code == 201, response.text
    return response.json()
