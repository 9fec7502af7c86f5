"""
ドキュメント読み込みモジュール（txt/pdf → Document）
"""
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import fitz  # PyMuPDF

from app.docs.models import Document

# ロガー設定
logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_document(
    original_name: str,
    text_content: str,
    page_count: int = 1,
    file_path: str = "",
    file_id: Optional[str] = None,
    upload_time: Optional[str] = None,
) -> Document:
    """
    抽出済みテキストから Document を作る

    Args:
        original_name: 元のファイル名
        text_content: 抽出済みテキスト
        page_count: ページ数
        file_path: 保存先パス
        file_id: 未指定ならuuid4で採番
        upload_time: 未指定なら現在時刻（UTC）

    Returns:
        Document
    """
    return Document(
        file_id=file_id or uuid.uuid4().hex,
        original_name=original_name,
        file_size=len(text_content.encode("utf-8")),
        page_count=page_count,
        text_content=text_content,
        file_path=file_path,
        upload_time=upload_time or _now_iso(),
    )


def _file_id_for(file_path: Path) -> str:
    # 同じファイルを読み直しても同じIDになるようにパスから決める
    return uuid.uuid5(uuid.NAMESPACE_URL, str(file_path.resolve())).hex


def _mtime_iso(file_path: Path) -> str:
    return datetime.fromtimestamp(file_path.stat().st_mtime, tz=timezone.utc).isoformat()


def load_txt_file(file_path: Path) -> Document:
    """
    TXTファイルを読み込む

    Args:
        file_path: ファイルパス

    Returns:
        Document
    """
    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()

    document = new_document(
        original_name=file_path.name,
        text_content=text,
        page_count=1,
        file_path=str(file_path),
        file_id=_file_id_for(file_path),
        upload_time=_mtime_iso(file_path),
    )
    document.file_size = file_path.stat().st_size
    return document


def load_pdf_file(file_path: Path) -> Optional[Document]:
    """
    PDFファイルを読み込む（テキスト抽出可能なもののみ）

    全ページのテキストを改行でつないで1つの Document にする

    Args:
        file_path: ファイルパス

    Returns:
        Document。テキストが1文字も取れなかった場合は None
    """
    doc = fitz.open(file_path)
    try:
        total_pages = len(doc)
        page_texts = []
        empty_pages = 0
        for page_num in range(total_pages):
            text = doc[page_num].get_text()
            if not text or not text.strip():
                empty_pages += 1
                continue
            page_texts.append(text)
    finally:
        doc.close()

    text_content = "\n".join(page_texts)
    if not text_content.strip():
        logger.warning(
            f"PDFからテキストが抽出できませんでした（画像PDFの可能性）: {file_path.name} "
            f"(全{total_pages}ページ)"
        )
        return None

    if empty_pages > 0:
        logger.info(
            f"PDF読み込み: {file_path.name} - {total_pages - empty_pages}ページ/{total_pages}ページ, "
            f"テキスト合計: {len(text_content)}文字, 空ページ: {empty_pages}ページ"
        )
    else:
        logger.info(f"PDF読み込み: {file_path.name} - {total_pages}ページ, テキスト合計: {len(text_content)}文字")

    document = new_document(
        original_name=file_path.name,
        text_content=text_content,
        page_count=total_pages,
        file_path=str(file_path),
        file_id=_file_id_for(file_path),
        upload_time=_mtime_iso(file_path),
    )
    document.file_size = file_path.stat().st_size
    return document


def _find_repo_root() -> Path:
    """
    リポジトリルートを取得する（backend/app/docs/loader.py から4階層上）

    Returns:
        リポジトリルートのPathオブジェクト（絶対パス）
    """
    current_file = Path(__file__).resolve()
    repo_root = current_file.parent.parent.parent.parent

    # backend/ が見つからなければ親を辿って探す
    if not (repo_root / "backend").is_dir():
        for parent in current_file.parents:
            if (parent / "backend").is_dir():
                repo_root = parent
                break

    return repo_root.resolve()


def resolve_docs_path(docs_dir: str | Path) -> Path:
    """相対パスならリポジトリルート基準で絶対パスにする"""
    docs_path = Path(docs_dir)
    if not docs_path.is_absolute():
        docs_path = _find_repo_root() / docs_path
    return docs_path.resolve()


def load_documents(docs_dir: str | Path) -> List[Document]:
    """
    ディレクトリ直下の txt/pdf を読み込む

    読み込めないファイルはログに出してスキップする

    Args:
        docs_dir: ドキュメントディレクトリ（相対パスならリポジトリルート基準）

    Returns:
        Documentのリスト（txt → pdf の順、それぞれファイル名順）
    """
    documents: List[Document] = []
    docs_path = resolve_docs_path(docs_dir)

    logger.info(f"DOCS_DIR実パス: {docs_path} (exists={docs_path.exists()})")
    if not docs_path.is_dir():
        logger.warning(f"ドキュメントディレクトリが存在しません: {docs_path}")
        return documents

    txt_files = sorted(docs_path.glob("*.txt"))
    pdf_files = sorted(docs_path.glob("*.pdf"))
    logger.info(f"読み込み対象ファイル: TXT={len(txt_files)}件, PDF={len(pdf_files)}件")

    for txt_file in txt_files:
        try:
            documents.append(load_txt_file(txt_file))
        except Exception as e:
            logger.warning(f"TXT読み込みエラー（スキップ）: {txt_file.name} - {type(e).__name__}: {e}")

    for pdf_file in pdf_files:
        try:
            document = load_pdf_file(pdf_file)
        except Exception as e:
            logger.error(f"PDF処理中にエラーが発生しました（スキップ）: {pdf_file.name} - {type(e).__name__}: {e}")
            continue
        if document is not None:
            documents.append(document)

    logger.info(f"ドキュメント読み込み完了: 合計={len(documents)}ドキュメント")
    return documents
