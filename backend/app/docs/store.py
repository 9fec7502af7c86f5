"""
ドキュメントストア（ドキュメントの保存先）

【初心者向け】
- DocumentStore: Protocol。検索インデックスが必要とするのは get_document / get_all_documents だけ
- InMemoryDocumentStore: メモリ上の辞書に保存する実装（DBが無い環境のフォールバック）
- get_all_documents はアップロード日時の新しい順（DBの ORDER BY created_at DESC と同じ）
"""
import logging
import threading
from typing import Any, Dict, List, Optional, Protocol

from app.docs.models import Document

# ロガー設定
logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """
    ドキュメントストアのインターフェース

    検索インデックスはこのProtocolに準拠したオブジェクトから読み取るだけで、書き込みはしない
    """

    def get_document(self, file_id: str) -> Optional[Document]:
        """
        IDでドキュメントを取得

        Returns:
            Document。存在しない場合は None
        """
        ...

    def get_all_documents(self) -> List[Document]:
        """
        全ドキュメントを取得

        Returns:
            ストアが決めた順序のDocumentリスト
        """
        ...


class InMemoryDocumentStore:
    """メモリ上に保存するドキュメントストア"""

    def __init__(self) -> None:
        self._documents: Dict[str, Document] = {}
        self._lock = threading.Lock()

    def save_document(self, document: Document) -> None:
        """保存（同じ file_id があれば上書き）"""
        with self._lock:
            self._documents[document.file_id] = document
        logger.info(f"ドキュメントを保存しました: {document.file_id} ({document.original_name})")

    def get_document(self, file_id: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(file_id)

    def get_all_documents(self) -> List[Document]:
        with self._lock:
            documents = list(self._documents.values())
        # ISO-8601文字列はそのまま比較できる。同時刻は登録順を保つ（安定ソート）
        return sorted(documents, key=lambda doc: doc.upload_time, reverse=True)

    def delete_document(self, file_id: str) -> bool:
        """
        削除する

        Returns:
            削除できたら True、存在しなければ False
        """
        with self._lock:
            deleted = self._documents.pop(file_id, None) is not None
        if deleted:
            logger.info(f"ドキュメントを削除しました: {file_id}")
        return deleted

    def update_document_summary(self, file_id: str, summary: Dict[str, Any]) -> bool:
        """要約を更新する（存在しなければ False）"""
        with self._lock:
            document = self._documents.get(file_id)
            if document is None:
                return False
            document.summary = summary
            return True

    def update_document_keywords(self, file_id: str, keywords: List[str]) -> bool:
        """キーワードを更新する（存在しなければ False）"""
        with self._lock:
            document = self._documents.get(file_id)
            if document is None:
                return False
            document.keywords = list(keywords)
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._documents)
