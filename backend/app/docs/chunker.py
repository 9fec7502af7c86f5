"""
ドキュメントチャンク分割モジュール（長文を検索用の塊に分割）

【初心者向け】
- チャンク = 検索の単位。長すぎると検索精度が落ちるため適度な大きさに分割
- 固定長（500文字）で切り、隣り合うチャンクは50文字ずつ重ねる（文の途中で切れても拾えるように）
- ページ番号は「1ページ≒2000文字」と仮定した推定値。実際のPDFのページとは一致しないことがある
"""
from typing import List

from app.core.settings import settings
from app.docs.models import Document, DocumentChunk


def estimate_page_number(offset: int, chars_per_page: int | None = None) -> int:
    """
    文字位置からページ番号を推定する（目安。実際のページ区切りとは無関係）

    Args:
        offset: チャンク開始位置（文字数）
        chars_per_page: 1ページあたりの文字数（None=settingsの値）

    Returns:
        1始まりのページ番号
    """
    if chars_per_page is None:
        chars_per_page = settings.chars_per_page
    return offset // chars_per_page + 1


def chunk_id(file_id: str, chunk_index: int) -> str:
    """チャンクIDを作る（file_id + 連番から決定的に決まる）"""
    return f"{file_id}_chunk_{chunk_index}"


def chunk_document(
    document: Document,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
) -> List[DocumentChunk]:
    """
    ドキュメントを固定長チャンクに分割する

    - 開始位置は 0, stride, 2*stride, ...（stride = chunk_size - chunk_overlap）
    - 最後のチャンクは chunk_size より短くてもよい（パディングしない）
    - 空テキストなら空リスト（エラーにしない）

    Args:
        document: ドキュメント
        chunk_size: チャンクサイズ（None=settingsの値）
        chunk_overlap: オーバーラップ文字数（None=settingsの値）

    Returns:
        DocumentChunkのリスト（chunk_index順）

    Raises:
        ValueError: chunk_overlap が chunk_size 以上の場合（前に進まなくなるため）
    """
    if chunk_size is None:
        chunk_size = settings.chunk_size
    if chunk_overlap is None:
        chunk_overlap = settings.chunk_overlap

    stride = chunk_size - chunk_overlap
    if chunk_size <= 0 or stride <= 0:
        raise ValueError(
            f"不正なチャンク設定です: chunk_size={chunk_size}, chunk_overlap={chunk_overlap}"
        )

    text = document.text_content
    chunks: List[DocumentChunk] = []

    for start in range(0, len(text), stride):
        index = len(chunks)
        chunks.append(
            DocumentChunk(
                id=chunk_id(document.file_id, index),
                document_id=document.file_id,
                content=text[start:start + chunk_size],
                page_number=estimate_page_number(start),
                chunk_index=index,
            )
        )

    return chunks
