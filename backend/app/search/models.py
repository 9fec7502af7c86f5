"""
検索まわりの型定義

- SearchResult: 1件の検索結果（ドキュメント・チャンク・スコア・スニペット）。クエリごとに作られ保存しない
- IndexStats: インデックス統計（いつでもインデックスから再計算できる）
- RebuildReport: 全件再構築の結果（失敗したドキュメントも含む）
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from app.docs.models import Document, DocumentChunk


@dataclass
class SearchResult:
    """検索結果1件"""
    document: Document
    chunk: DocumentChunk
    similarity: float
    snippet: str


@dataclass(frozen=True)
class IndexStats:
    """インデックス統計"""
    total_documents: int  # チャンクが1つ以上登録されているドキュメント数
    total_chunks: int     # 登録済みチャンクの総数


@dataclass
class RebuildReport:
    """全件再構築の結果"""
    stats: IndexStats
    indexed_documents: int = 0
    failed: List[Tuple[str, str]] = field(default_factory=list)  # (file_id, エラー内容)
