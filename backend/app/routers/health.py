"""
Health check APIルーター（死活確認用）

【初心者向け】
- GET /health: サーバーが生きているか確認するエンドポイント
- ついでにインデックス統計も返す（起動時の読み込みが終わったかの確認用）
"""
from fastapi import APIRouter, Depends

from app.routers.deps import get_search_index
from app.search.index import SearchIndex

router = APIRouter()


@router.get("")
def health_check(index: SearchIndex = Depends(get_search_index)):
    """ヘルスチェック用エンドポイント"""
    stats = index.get_index_stats()
    return {
        "status": "ok",
        "index": {"totalDocuments": stats.total_documents, "totalChunks": stats.total_chunks},
    }
