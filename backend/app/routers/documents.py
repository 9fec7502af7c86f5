"""
Documents APIルーター（登録・一覧・詳細・削除）

【初心者向け】
- POST /api/documents: 抽出済みテキストを登録。インデックス作成はレスポンス後にバックグラウンドで行う
  （登録直後の検索にはまだ出てこないことがある）
- DELETE /api/documents/{file_id}: ストアから削除し、インデックスからもバックグラウンドで削除
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status

from app.core.errors import raise_not_found
from app.docs.loader import new_document
from app.docs.models import Document
from app.docs.store import InMemoryDocumentStore
from app.routers.deps import get_document_store, get_search_index
from app.schemas.documents import (
    DocumentCreateRequest,
    DocumentDeleteResponse,
    DocumentDetail,
    DocumentDetailResponse,
    DocumentInfo,
    DocumentListData,
    DocumentListResponse,
)
from app.search.index import SearchIndex

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()


def index_in_background(index: SearchIndex, document: Document) -> None:
    """バックグラウンドでインデックスを作る（失敗してもログだけ）"""
    try:
        index.index_document(document)
    except Exception as e:
        logger.error(f"インデックス作成に失敗しました: {document.file_id} - {type(e).__name__}: {e}")


def remove_in_background(index: SearchIndex, file_id: str) -> None:
    """バックグラウンドでインデックスから削除する（失敗してもログだけ）"""
    try:
        index.remove_document_index(file_id)
    except Exception as e:
        logger.error(f"インデックス削除に失敗しました: {file_id} - {type(e).__name__}: {e}")


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    store: InMemoryDocumentStore = Depends(get_document_store),
) -> DocumentListResponse:
    """ドキュメント一覧（新しい順）"""
    documents = [DocumentInfo.from_document(doc) for doc in store.get_all_documents()]
    return DocumentListResponse(data=DocumentListData(documents=documents, total=len(documents)))


@router.post("", response_model=DocumentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    request: DocumentCreateRequest,
    background_tasks: BackgroundTasks,
    store: InMemoryDocumentStore = Depends(get_document_store),
    index: SearchIndex = Depends(get_search_index),
) -> DocumentDetailResponse:
    """ドキュメントを登録し、インデックス作成をバックグラウンドに回す"""
    document = new_document(
        original_name=request.original_name,
        text_content=request.text_content,
        page_count=request.page_count,
        file_path=request.file_path,
    )
    store.save_document(document)
    background_tasks.add_task(index_in_background, index, document)

    return DocumentDetailResponse(
        message="ドキュメントを登録しました",
        data=DocumentDetail.from_document(document),
    )


@router.get("/{file_id}", response_model=DocumentDetailResponse)
async def get_document(
    file_id: str,
    store: InMemoryDocumentStore = Depends(get_document_store),
) -> DocumentDetailResponse:
    """ドキュメント詳細"""
    document = store.get_document(file_id)
    if document is None:
        raise_not_found("ドキュメントが存在しません")
    return DocumentDetailResponse(data=DocumentDetail.from_document(document))


@router.delete("/{file_id}", response_model=DocumentDeleteResponse)
async def delete_document(
    file_id: str,
    background_tasks: BackgroundTasks,
    store: InMemoryDocumentStore = Depends(get_document_store),
    index: SearchIndex = Depends(get_search_index),
) -> DocumentDeleteResponse:
    """ドキュメントを削除し、インデックス削除をバックグラウンドに回す"""
    if not store.delete_document(file_id):
        raise_not_found("ドキュメントが存在しません")
    background_tasks.add_task(remove_in_background, index, file_id)
    return DocumentDeleteResponse(message="ドキュメントを削除しました")
