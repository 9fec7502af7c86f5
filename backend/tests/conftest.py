"""Pytest configuration and shared fixtures.

Fixtures give every test its own document store and search index, so
tests never share corpus state.
"""

import itertools
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from app.docs.loader import new_document
from app.docs.models import Document, DocumentChunk
from app.docs.store import InMemoryDocumentStore
from app.main import create_app
from app.search.index import SearchIndex


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Return an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def index(store: InMemoryDocumentStore) -> SearchIndex:
    """Return a search index reading from the ``store`` fixture."""
    return SearchIndex(store)


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Build documents with increasing upload times.

    Later calls produce newer documents, so the store lists them first.
    """
    counter = itertools.count()

    def _make(text: str, name: str = "paper.pdf", file_id: str | None = None) -> Document:
        n = next(counter)
        return new_document(
            original_name=name,
            text_content=text,
            file_id=file_id or f"doc{n}",
            upload_time=f"2024-01-01T00:00:{n:02d}+00:00",
        )

    return _make


@pytest.fixture
def make_chunk() -> Callable[..., DocumentChunk]:
    """Build a standalone chunk for term-weight index tests."""

    def _make(content: str, document_id: str = "doc", chunk_index: int = 0) -> DocumentChunk:
        return DocumentChunk(
            id=f"{document_id}_chunk_{chunk_index}",
            document_id=document_id,
            content=content,
            page_number=1,
            chunk_index=chunk_index,
        )

    return _make


@pytest.fixture
def app():
    """Return an application that skips loading the documents folder."""
    return create_app(load_docs_on_startup=False)


@pytest.fixture
def client(app):
    """Return a test client for ``app``."""
    with TestClient(app) as test_client:
        yield test_client
