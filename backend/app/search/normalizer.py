"""
テキスト正規化（インデックス側とクエリ側で同じルールを使う）

【初心者向け】
- 小文字化 → 記号を空白に置換 → 連続空白を1つに → 前後の空白を削除
- 残すのは ASCII の英数字と "_"、空白、CJK統合漢字（U+4E00〜U+9FFF）のみ
- ロケールに依存しない（str.lower() と固定の正規表現だけで決まる）
- 分割は空白のみ。CJKの連続（例: "深度学习方法"）は1トークンのままなので、クエリ "学习" はこのトークンに一致しない
"""
import re
from typing import List

# 残す文字以外にマッチする（\w はUnicode対応になるため ASCII を明示）
_DISALLOWED_RE = re.compile(r"[^A-Za-z0-9_\s\u4e00-\u9fff]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    テキストを正規化する

    normalize(normalize(x)) == normalize(x) が常に成り立つ

    Args:
        text: 元のテキスト

    Returns:
        正規化されたテキスト
    """
    normalized = text.lower()
    normalized = _DISALLOWED_RE.sub(" ", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def tokenize(text: str) -> List[str]:
    """正規化してから空白で分割したトークン列を返す"""
    normalized = normalize(text)
    if not normalized:
        return []
    return normalized.split(" ")
