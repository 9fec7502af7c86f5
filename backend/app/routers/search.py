"""
Search APIルーター

- GET  /api/search?q=...&limit=...: チャンク検索
- POST /api/search/reindex: 全件再構築
- GET  /api/search/stats: インデックス統計
"""
import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.errors import raise_internal_error, raise_invalid_input
from app.core.settings import settings
from app.routers.deps import get_search_index
from app.schemas.search import (
    FailedDocument,
    IndexStatsData,
    ReindexData,
    ReindexResponse,
    SearchData,
    SearchResponse,
    SearchResultItem,
    StatsResponse,
)
from app.search.index import SearchIndex

# ロガー設定
logger = logging.getLogger(__name__)

router = APIRouter()

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def parse_limit(raw: Optional[str]) -> int:
    """
    limit を整数にして 1〜search_max_limit に収める

    先頭の整数部分だけを読む（"20abc" → 20）。読めない・0 の場合は search_default_limit
    """
    value = settings.search_default_limit
    if raw is not None:
        match = _LEADING_INT_RE.match(raw)
        if match and int(match.group(1)) != 0:
            value = int(match.group(1))
    return min(max(value, 1), settings.search_max_limit)


@router.get("", response_model=SearchResponse)
def search(
    q: Optional[str] = Query(default=None, description="検索クエリ"),
    limit: Optional[str] = Query(default=None, description="取得件数（1〜50、デフォルト10）"),
    index: SearchIndex = Depends(get_search_index),
) -> SearchResponse:
    """
    チャンクを検索する

    - q: 必須。空文字列や空白のみの場合はINVALID_INPUTエラー
    - limit: 任意。1〜50に丸める、デフォルト10
    """
    if not q or not q.strip():
        raise_invalid_input("検索クエリを入力してください")

    limit_num = parse_limit(limit)

    try:
        results = index.search(q, limit_num)
        stats = index.get_index_stats()
    except Exception as e:
        logger.error(f"検索に失敗しました: {type(e).__name__}: {e}", exc_info=True)
        raise_internal_error("検索に失敗しました")

    items = [SearchResultItem.from_result(result) for result in results]
    return SearchResponse(
        message="検索完了",
        data=SearchData(
            query=q,
            results=items,
            total=len(items),
            stats=IndexStatsData.from_stats(stats),
        ),
    )


@router.post("/reindex", response_model=ReindexResponse)
def reindex(index: SearchIndex = Depends(get_search_index)) -> ReindexResponse:
    """
    ストアの全ドキュメントからインデックスを作り直す

    個別ドキュメントの失敗は data.failed に入る（全体は成功扱い）
    """
    try:
        report = index.rebuild_index()
    except Exception as e:
        logger.error(f"インデックスの再構築に失敗しました: {type(e).__name__}: {e}", exc_info=True)
        raise_internal_error("インデックスの再構築に失敗しました")

    return ReindexResponse(
        message="インデックスの再構築が完了しました",
        data=ReindexData(
            total_documents=report.stats.total_documents,
            total_chunks=report.stats.total_chunks,
            failed=[FailedDocument(file_id=file_id, error=error) for file_id, error in report.failed],
        ),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(index: SearchIndex = Depends(get_search_index)) -> StatsResponse:
    """インデックス統計を返す"""
    return StatsResponse(data=IndexStatsData.from_stats(index.get_index_stats()))
