"""
ドキュメント関連の型定義（データの形を明示）

【初心者向け】
- dataclass: フィールドだけ持つ軽量なクラス。JSONやDBとのやりとりでよく使う
- Document = アップロードされた1ファイル分のメタ情報と抽出済みテキスト
- DocumentChunk = チャンク分割後の1ブロック。検索の最小単位（作成後は変更しない）
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Document:
    """ドキュメント（1ファイル単位）"""
    file_id: str          # ドキュメントID（ストア内で一意）
    original_name: str    # アップロード時のファイル名（例: paper.pdf）
    file_size: int        # バイト数
    page_count: int       # ページ数
    text_content: str     # 抽出した生テキスト
    file_path: str        # 保存先パス
    upload_time: str      # ISO-8601形式
    summary: Optional[Dict[str, Any]] = None
    keywords: Optional[List[str]] = field(default=None)


@dataclass(frozen=True)
class DocumentChunk:
    """ドキュメントチャンク（分割後の1塊）"""
    id: str            # "{file_id}_chunk_{chunk_index}"
    document_id: str   # 所属ドキュメントの file_id
    content: str       # チャンクのテキスト（元テキストの部分文字列）
    page_number: int   # 推定ページ番号（1始まり、あくまで目安）
    chunk_index: int   # そのドキュメント内でのチャンク番号（0始まり）
