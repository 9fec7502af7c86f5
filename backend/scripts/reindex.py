#!/usr/bin/env python3
"""
検索インデックス再構築スクリプト

ドキュメントディレクトリの txt/pdf を読み込み、検索インデックスを作り直して統計を表示します。
--query を付けると、そのまま検索して上位の結果も表示します（インデックスの確認用）。

使用方法:
    python backend/scripts/reindex.py [--docs-dir DIR] [--query "deep learning"] [--limit 5]
"""
import sys
import logging
from pathlib import Path

# プロジェクトルートをパスに追加
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from app.core.settings import settings
from app.docs.loader import load_documents
from app.docs.store import InMemoryDocumentStore
from app.search.index import SearchIndex

# ロガー設定
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def reindex(docs_dir: str) -> SearchIndex:
    """
    再インデックスを実行

    1. docs_dir のドキュメントをストアに読み込む
    2. rebuild_index() で全件登録
    """
    store = InMemoryDocumentStore()
    for document in load_documents(docs_dir):
        store.save_document(document)

    index = SearchIndex(store)
    report = index.rebuild_index()

    logger.info(
        f"ドキュメント数: {report.stats.total_documents}, チャンク数: {report.stats.total_chunks}"
    )
    for file_id, error in report.failed:
        logger.warning(f"失敗: {file_id} - {error}")
    return index


def main():
    """メイン処理"""
    import argparse

    parser = argparse.ArgumentParser(description='検索インデックス再構築スクリプト')
    parser.add_argument(
        '--docs-dir',
        default=settings.docs_dir,
        help='ドキュメントディレクトリ（相対パスならリポジトリルート基準）'
    )
    parser.add_argument('--query', default=None, help='再構築後に実行する検索クエリ')
    parser.add_argument('--limit', type=int, default=settings.search_default_limit, help='検索結果の件数')
    args = parser.parse_args()

    logger.info("=" * 60)
    logger.info("検索インデックスの再構築を開始します")
    logger.info("=" * 60)

    try:
        index = reindex(args.docs_dir)
    except Exception as e:
        logger.error(f"インデックス再構築に失敗しました: {type(e).__name__}: {e}", exc_info=True)
        sys.exit(1)

    if args.query:
        results = index.search(args.query, args.limit)
        print(f"\n=== 検索結果: '{args.query}' ({len(results)}件) ===\n")
        for rank, result in enumerate(results, start=1):
            print(
                f"{rank}. {result.document.original_name} "
                f"[chunk={result.chunk.chunk_index}, page≈{result.chunk.page_number}] "
                f"score={result.similarity:.4f}"
            )
            print(f"   {result.snippet}\n")


if __name__ == "__main__":
    main()
