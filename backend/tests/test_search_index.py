"""Unit tests for SearchIndex: indexing, ranking, removal and rebuild."""

import threading
from typing import Callable, List, Optional

from app.docs.chunker import chunk_document
from app.docs.models import Document
from app.docs.store import InMemoryDocumentStore
from app.search.index import SearchIndex
from app.search.models import IndexStats

E2E_TEXT = "machine learning transforms healthcare. deep learning improves diagnosis."


def _add(store, index, document):
    store.save_document(document)
    index.index_document(document)
    return document


def test_search_on_empty_index_returns_nothing(index):
    assert index.search("anything", 10) == []
    assert index.get_index_stats().total_chunks == 0


def test_end_to_end_deep_learning(store, index, make_document):
    doc = _add(store, index, make_document(E2E_TEXT))

    results = index.search("deep learning", 10)

    assert len(results) == 1
    result = results[0]
    assert result.document is doc
    assert result.chunk.id == f"{doc.file_id}_chunk_0"
    assert result.similarity > 0
    assert "**deep**" in result.snippet
    assert "**learning**" in result.snippet
    assert index.search("quantum computing", 10) == []


def test_empty_query_matches_nothing(store, index, make_document):
    _add(store, index, make_document(E2E_TEXT))
    assert index.search("", 10) == []
    assert index.search("!!!", 10) == []


def test_results_sorted_by_score(store, index, make_document):
    weak = _add(store, index, make_document("learning once here"))
    strong = _add(store, index, make_document("learning learning learning"))

    results = index.search("learning", 10)

    assert [r.document.file_id for r in results] == [strong.file_id, weak.file_id]
    assert results[0].similarity > results[1].similarity


def test_ties_keep_insertion_order_and_are_repeatable(store, index, make_document):
    docs = [_add(store, index, make_document("same words here")) for _ in range(4)]

    first = [r.document.file_id for r in index.search("words", 10)]
    second = [r.document.file_id for r in index.search("words", 10)]

    assert first == [d.file_id for d in docs]
    assert first == second


def test_limit_truncates(store, index, make_document):
    for _ in range(5):
        _add(store, index, make_document("graph neural networks"))

    assert len(index.search("graph", 2)) == 2
    assert index.search("graph", 0) == []


def test_index_document_with_empty_text(store, index, make_document):
    doc = make_document("")
    store.save_document(doc)

    assert index.index_document(doc) == 0
    stats = index.get_index_stats()
    assert (stats.total_documents, stats.total_chunks) == (0, 0)


def test_reindexing_a_document_replaces_its_chunks(store, index, make_document):
    doc = _add(store, index, make_document("alpha " * 200))
    index.index_document(doc)

    stats = index.get_index_stats()
    assert stats.total_documents == 1
    assert stats.total_chunks == len(chunk_document(doc))


def test_removal_consistency(store, index, make_document):
    doc_a = _add(store, index, make_document("alpha topic " * 100))
    doc_b = _add(store, index, make_document("beta topic " * 60))

    assert index.remove_document_index(doc_a.file_id) is True

    stats = index.get_index_stats()
    assert stats.total_documents == 1
    assert stats.total_chunks == len(chunk_document(doc_b))
    results = index.search("topic alpha", 50)
    assert results
    assert all(r.chunk.document_id == doc_b.file_id for r in results)


def test_removing_unknown_document_is_a_noop(store, index, make_document):
    _add(store, index, make_document(E2E_TEXT))

    assert index.remove_document_index("missing") is False
    assert index.get_index_stats().total_chunks == 1


def test_rebuild_consistency(store, index, make_document):
    docs = [
        make_document("first paper " * 80),
        make_document("second paper " * 10),
        make_document(""),
        make_document("third paper " * 200),
    ]
    for doc in docs:
        store.save_document(doc)

    report = index.rebuild_index()

    expected = sum(len(chunk_document(d)) for d in store.get_all_documents())
    assert index.get_index_stats().total_chunks == expected
    assert report.stats.total_chunks == expected
    assert report.stats.total_documents == 3
    assert report.indexed_documents == 4
    assert report.failed == []


def test_rebuild_follows_store_order(store, index, make_document):
    older = make_document("identical text")
    newer = make_document("identical text")
    store.save_document(older)
    store.save_document(newer)

    index.rebuild_index()

    assert [r.document.file_id for r in index.search("identical", 10)] == [
        newer.file_id,
        older.file_id,
    ]


def test_rebuild_clears_previous_state(store, index, make_document):
    orphan = make_document("orphan words")
    index.index_document(orphan)  # never saved to the store

    index.rebuild_index()

    assert index.get_index_stats().total_chunks == 0
    assert index.search("orphan", 10) == []


class _ListStore:
    """Store returning a fixed list, used to inject a broken document."""

    def __init__(self, documents: List[Document]):
        self._documents = documents

    def get_document(self, file_id: str) -> Optional[Document]:
        for doc in self._documents:
            if doc.file_id == file_id:
                return doc
        return None

    def get_all_documents(self) -> List[Document]:
        return list(self._documents)


def test_rebuild_skips_failing_documents(make_document):
    good = make_document(E2E_TEXT)
    broken = make_document("placeholder")
    broken.text_content = None
    index = SearchIndex(_ListStore([broken, good]))

    report = index.rebuild_index()

    assert report.indexed_documents == 1
    assert [file_id for file_id, _ in report.failed] == [broken.file_id]
    assert "TypeError" in report.failed[0][1]
    assert len(index.search("deep learning", 10)) == 1


def test_search_drops_documents_missing_from_store(store, index, make_document):
    doc = _add(store, index, make_document(E2E_TEXT))
    store.delete_document(doc.file_id)

    assert index.search("deep learning", 10) == []


class _FlakyStore(_ListStore):
    def __init__(self, documents, failing_id):
        super().__init__(documents)
        self._failing_id = failing_id

    def get_document(self, file_id):
        if file_id == self._failing_id:
            raise ConnectionError("database unavailable")
        return super().get_document(file_id)


def test_search_drops_documents_when_store_lookup_fails(make_document):
    ok = make_document(E2E_TEXT)
    flaky = make_document("deep learning again")
    index = SearchIndex(_FlakyStore([ok, flaky], failing_id=flaky.file_id))
    index.index_document(ok)
    index.index_document(flaky)

    results = index.search("deep learning", 10)

    assert [r.document.file_id for r in results] == [ok.file_id]


def test_independent_instances_do_not_share_state(store, make_document):
    first = SearchIndex(store)
    second = SearchIndex(store)
    _add(store, first, make_document(E2E_TEXT))

    assert first.get_index_stats().total_chunks == 1
    assert second.get_index_stats().total_chunks == 0
    assert second.search("deep", 10) == []


class _InterleavingStore(InMemoryDocumentStore):
    """Store that runs ``writer`` on another thread right after a full listing.

    ``get_all_documents`` waits until the writer has changed the store and is
    about to touch the index, so the index update lands while a rebuild is
    still running.
    """

    def __init__(self):
        super().__init__()
        self.writer: Optional[Callable[[threading.Event], None]] = None
        self.thread: Optional[threading.Thread] = None

    def get_all_documents(self) -> List[Document]:
        snapshot = super().get_all_documents()
        writer, self.writer = self.writer, None
        if writer is not None:
            ready = threading.Event()
            self.thread = threading.Thread(target=writer, args=(ready,))
            self.thread.start()
            assert ready.wait(timeout=5)
        return snapshot


def test_upload_during_rebuild_stays_searchable(make_document):
    store = _InterleavingStore()
    index = SearchIndex(store)
    late = make_document(E2E_TEXT)

    def upload(ready):
        store.save_document(late)
        ready.set()
        index.index_document(late)

    store.writer = upload
    index.rebuild_index()
    store.thread.join(timeout=5)

    assert not store.thread.is_alive()
    assert index.get_index_stats() == IndexStats(total_documents=1, total_chunks=1)
    assert [r.document.file_id for r in index.search("deep learning", 10)] == [late.file_id]


def test_delete_during_rebuild_is_not_restored(make_document):
    store = _InterleavingStore()
    index = SearchIndex(store)
    kept = _add(store, index, make_document("graph neural networks"))
    gone = _add(store, index, make_document(E2E_TEXT))

    def delete(ready):
        store.delete_document(gone.file_id)
        ready.set()
        index.remove_document_index(gone.file_id)

    store.writer = delete
    index.rebuild_index()
    store.thread.join(timeout=5)

    assert not store.thread.is_alive()
    assert index.get_index_stats() == IndexStats(total_documents=1, total_chunks=1)
    assert index.search("deep learning", 10) == []
    assert [r.document.file_id for r in index.search("graph", 10)] == [kept.file_id]
