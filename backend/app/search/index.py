"""
検索インデックス（チャンク分割・TF-IDF登録・検索・削除・再構築）

【初心者向け】
- SearchIndex が「全チャンクの並び」「TF-IDFモデル」「file_id → チャンク一覧」をまとめて持つ
- 登録: Document → chunk_document() → TermWeightIndex に追加
- 検索: クエリを正規化 → TF-IDFでスコア → スコア降順（安定ソート）→ 上位limit件 → ストアからDocumentを引く
- 削除: 残ったチャンクで TF-IDF を作り直す（コストは残りチャンク数に比例。削除は検索よりずっと少ない前提）
- FastAPIはバックグラウンド処理をスレッドで動かすため、状態の更新は threading.RLock で排他制御する
"""
import logging
import threading
from typing import Dict, List

from app.docs.chunker import chunk_document
from app.docs.models import Document, DocumentChunk
from app.docs.store import DocumentStore
from app.search.models import IndexStats, RebuildReport, SearchResult
from app.search.normalizer import normalize
from app.search.snippet import create_snippet
from app.search.tfidf import TermWeightIndex

# ロガー設定
logger = logging.getLogger(__name__)


class SearchIndex:
    """
    ドキュメント検索インデックス

    アプリ起動時に1つ作り、依存性注入（app.routers.deps）で各ルーターに渡す。
    テストでは独立したインスタンスをいくつでも作れる。
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._terms = TermWeightIndex()
        self._document_chunks: Dict[str, List[DocumentChunk]] = {}
        self._lock = threading.RLock()

    def index_document(self, document: Document) -> int:
        """
        ドキュメントをインデックスに登録する

        - 同じ file_id が登録済みなら、古いチャンクを消してから登録し直す
        - テキストが空ならチャンク0件（エラーにしない、統計にも数えない）

        Args:
            document: 登録するドキュメント

        Returns:
            登録したチャンク数
        """
        logger.info(f"ドキュメントのインデックス作成開始: {document.file_id}")
        chunks = chunk_document(document)

        with self._lock:
            if document.file_id in self._document_chunks:
                self._remove_locked(document.file_id)

            if chunks:
                self._document_chunks[document.file_id] = chunks
                self._terms.add_document_chunks(chunks)

        logger.info(f"ドキュメント {document.file_id} のインデックス作成完了: {len(chunks)} chunks")
        return len(chunks)

    def remove_document_index(self, file_id: str) -> bool:
        """
        ドキュメントのチャンクをインデックスから削除する

        Args:
            file_id: 削除するドキュメントのID

        Returns:
            削除したら True、登録されていなければ False
        """
        with self._lock:
            if file_id not in self._document_chunks:
                return False
            self._remove_locked(file_id)

        logger.info(f"ドキュメント {file_id} のインデックスを削除しました")
        return True

    def _remove_locked(self, file_id: str) -> None:
        # TF-IDFは点削除できないので、残りのチャンクで作り直して差し替える
        survivors = [chunk for chunk in self._terms.chunks if chunk.document_id != file_id]
        terms = TermWeightIndex()
        terms.rebuild(survivors)

        self._terms = terms
        del self._document_chunks[file_id]

    def rebuild_index(self) -> RebuildReport:
        """
        ストアの全ドキュメントからインデックスを作り直す

        - ストアが返した順序のまま登録する（並べ替えない）
        - 1件の失敗で全体を止めない（失敗はログに出して RebuildReport.failed に記録）

        Returns:
            RebuildReport
        """
        logger.info("検索インデックスの再構築を開始します...")
        terms = TermWeightIndex()
        document_chunks: Dict[str, List[DocumentChunk]] = {}
        report = RebuildReport(stats=IndexStats(total_documents=0, total_chunks=0))

        # ストアの読み取りから差し替えまでを1つの排他区間にする。
        # 途中で届いた index_document / remove_document_index は差し替え後の状態に適用される
        with self._lock:
            documents = self._store.get_all_documents()
            for document in documents:
                try:
                    chunks = chunk_document(document)
                    if chunks:
                        if document.file_id in document_chunks:
                            raise ValueError(f"file_id が重複しています: {document.file_id}")
                        terms.add_document_chunks(chunks)
                        document_chunks[document.file_id] = chunks
                    report.indexed_documents += 1
                except Exception as e:
                    logger.error(
                        f"ドキュメントのインデックス作成に失敗（スキップ）: "
                        f"{getattr(document, 'file_id', '?')} - {type(e).__name__}: {e}"
                    )
                    report.failed.append((getattr(document, "file_id", "?"), f"{type(e).__name__}: {e}"))

            # 作り終えてからまとめて差し替える（検索が作りかけの状態を見ないように）
            self._terms = terms
            self._document_chunks = document_chunks
            report.stats = self._stats_locked()

        logger.info(
            f"検索インデックスの再構築完了: {report.indexed_documents}/{len(documents)} documents, "
            f"{report.stats.total_chunks} chunks, failed={len(report.failed)}"
        )
        return report

    def get_index_stats(self) -> IndexStats:
        """インデックス統計を返す（読み取りのみ）"""
        with self._lock:
            return self._stats_locked()

    def _stats_locked(self) -> IndexStats:
        return IndexStats(
            total_documents=len(self._document_chunks),
            total_chunks=len(self._terms),
        )

    def search(self, query: str, limit: int = 10) -> List[SearchResult]:
        """
        クエリに似たチャンクを検索する

        - インデックスが空なら空リスト
        - スコアが0より大きいチャンクだけを候補にする
        - 同点は登録順のまま（安定ソート）
        - ストアに存在しなくなったドキュメントの候補は黙って除外する

        Args:
            query: 検索クエリ
            limit: 最大件数

        Returns:
            SearchResultのリスト（スコア降順）
        """
        if limit <= 0:
            return []

        with self._lock:
            if len(self._terms) == 0:
                return []
            scores = self._terms.score_against_query(normalize(query))
            candidates = [
                (self._terms.chunk_at(position), measure)
                for position, measure in scores.items()
            ]

        candidates.sort(key=lambda item: item[1], reverse=True)
        candidates = candidates[:limit]

        results: List[SearchResult] = []
        for chunk, measure in candidates:
            try:
                document = self._store.get_document(chunk.document_id)
            except Exception as e:
                logger.warning(
                    f"ドキュメント取得に失敗したため候補から除外: {chunk.document_id} - "
                    f"{type(e).__name__}: {e}"
                )
                continue

            if document is None:
                logger.debug(f"ストアに存在しないドキュメントを除外: {chunk.document_id}")
                continue

            results.append(
                SearchResult(
                    document=document,
                    chunk=chunk,
                    similarity=measure,
                    snippet=create_snippet(chunk.content, query),
                )
            )

        logger.info(
            f"検索完了: query='{query}', candidates={len(scores)}, returned={len(results)}"
        )
        return results
