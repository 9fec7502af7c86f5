"""
ルーター共通の依存性（Depends で注入するもの）

app.main の起動処理で app.state に載せた SearchIndex / DocumentStore を取り出す。
テストでは app.dependency_overrides で差し替えられる。
"""
from fastapi import Request

from app.docs.store import InMemoryDocumentStore
from app.search.index import SearchIndex


def get_search_index(request: Request) -> SearchIndex:
    return request.app.state.search_index


def get_document_store(request: Request) -> InMemoryDocumentStore:
    return request.app.state.document_store
