"""
FastAPIアプリケーションのエントリーポイント（アプリの起動入口）

【初心者向け】
このファイルは文献アシスタントのバックエンドAPIサーバーを起動する「玄関」です。
- FastAPI: PythonのWebフレームワーク。REST APIを簡単に作れる
- create_app() で DocumentStore と SearchIndex を1つずつ作り、app.state に載せる
- 起動イベントで DOCS_DIR のドキュメントを読み込み、検索インデックスを作ります

実行方法:
    pip install -e .
    uvicorn app.main:app --reload --port 8000 --app-dir backend
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.errors import AppError, app_error_handler
from app.core.settings import settings
from app.docs.loader import load_documents
from app.docs.store import InMemoryDocumentStore
from app.routers import documents, health, search
from app.search.index import SearchIndex

# ロガー設定
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_initial_documents(store: InMemoryDocumentStore, index: SearchIndex, docs_dir: str) -> int:
    """
    docs_dir のドキュメントをストアに保存し、インデックスを作り直す

    Returns:
        読み込んだドキュメント数
    """
    loaded = load_documents(docs_dir)
    for document in loaded:
        store.save_document(document)
    index.rebuild_index()
    return len(loaded)


def create_app(
    store: Optional[InMemoryDocumentStore] = None,
    load_docs_on_startup: Optional[bool] = None,
) -> FastAPI:
    """
    アプリを組み立てる（テストでは store を差し替えたり起動時読み込みを止めたりできる）
    """
    if store is None:
        store = InMemoryDocumentStore()
    if load_docs_on_startup is None:
        load_docs_on_startup = settings.load_docs_on_startup

    app = FastAPI(
        title="Literature Assistant API",
        description="Document search API",
        version="0.1.0",
    )
    app.state.document_store = store
    app.state.search_index = SearchIndex(store)

    # CORS設定: フロントエンド（Next.js）からAPIを呼ぶ際の跨域通信を許可
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AppError, app_error_handler)

    # ルーター登録: /health=死活確認, /api/documents=ドキュメント, /api/search=検索
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(documents.router, prefix="/api/documents", tags=["documents"])
    app.include_router(search.router, prefix="/api/search", tags=["search"])

    @app.on_event("startup")
    async def startup_event():
        """
        起動時の処理: DOCS_DIR内のドキュメントを読み込んでインデックスを作る
        """
        if not load_docs_on_startup:
            return
        try:
            count = load_initial_documents(store, app.state.search_index, settings.docs_dir)
            logger.info(f"起動時のドキュメント読み込み完了: {count}件")
        except Exception as e:
            # 失敗してもサーバ起動は落とさない（ログだけ出す）
            logger.error(f"起動時のインデックス作成に失敗しました: {type(e).__name__}: {e}")

    @app.get("/")
    async def root():
        """ルートエンドポイント"""
        return {"message": "Literature Assistant API"}

    return app


app = create_app()
