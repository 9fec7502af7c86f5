"""
検索API用スキーマ（Search のレスポンス型）

【初心者向け】
- GET /api/search: { success, message, data: { query, results, total, stats } }
- results の各要素: document（file_id, original_name, upload_time）/ chunk（id, page_number, chunk_index）/ similarity / snippet
- stats はフロントエンドの既存実装に合わせて totalDocuments / totalChunks（キャメルケース）で返す
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from app.search.models import IndexStats, SearchResult


class IndexStatsData(BaseModel):
    """インデックス統計"""
    model_config = ConfigDict(populate_by_name=True)

    total_documents: int = Field(alias="totalDocuments")
    total_chunks: int = Field(alias="totalChunks")

    @classmethod
    def from_stats(cls, stats: IndexStats) -> "IndexStatsData":
        return cls(total_documents=stats.total_documents, total_chunks=stats.total_chunks)


class DocumentRef(BaseModel):
    """検索結果に含めるドキュメント情報"""
    file_id: str
    original_name: str
    upload_time: str


class ChunkRef(BaseModel):
    """検索結果に含めるチャンク情報"""
    id: str
    page_number: int  # 推定ページ番号（目安）
    chunk_index: int


class SearchResultItem(BaseModel):
    """検索結果1件"""
    document: DocumentRef
    chunk: ChunkRef
    similarity: float  # TF-IDFスコア（大きいほど一致が強い）
    snippet: str       # マッチ語を **語** で囲んだ抜粋

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultItem":
        return cls(
            document=DocumentRef(
                file_id=result.document.file_id,
                original_name=result.document.original_name,
                upload_time=result.document.upload_time,
            ),
            chunk=ChunkRef(
                id=result.chunk.id,
                page_number=result.chunk.page_number,
                chunk_index=result.chunk.chunk_index,
            ),
            similarity=result.similarity,
            snippet=result.snippet,
        )


class SearchData(BaseModel):
    query: str
    results: List[SearchResultItem]
    total: int
    stats: IndexStatsData


class SearchResponse(BaseModel):
    """検索レスポンス"""
    success: bool = True
    message: str
    data: SearchData


class FailedDocument(BaseModel):
    """再構築に失敗したドキュメント"""
    file_id: str
    error: str


class ReindexData(IndexStatsData):
    failed: List[FailedDocument] = []


class ReindexResponse(BaseModel):
    """再構築レスポンス"""
    success: bool = True
    message: str
    data: ReindexData


class StatsResponse(BaseModel):
    """統計レスポンス"""
    success: bool = True
    data: IndexStatsData
