"""
スニペット（抜粋）作成

クエリ語を最も多く含む窓を選び、マッチした語を **語** で囲んで返す
"""
import re
from typing import List

from app.core.settings import settings


def _query_terms(query: str) -> List[str]:
    """クエリを空白で区切って小文字化する"""
    return query.lower().split()


def find_best_window(text: str, terms: List[str], max_length: int, step: int) -> int:
    """
    クエリ語を最も多く含む窓の開始位置を返す

    - 窓は max_length 文字、step 文字ずつずらす
    - スコア = 窓に含まれる（部分文字列として）異なるクエリ語の数
    - 同点なら先に見つかった（開始位置が小さい）窓を採用
    - text が max_length 以下なら窓は先頭の1つだけ

    Args:
        text: チャンクの本文
        terms: 小文字化済みクエリ語
        max_length: 窓の長さ
        step: ずらし幅

    Returns:
        窓の開始位置
    """
    text_lower = text.lower()
    unique_terms = list(dict.fromkeys(terms))

    best_start = 0
    best_score = 0
    for start in range(0, len(text) - max_length, step):
        segment = text_lower[start:start + max_length]
        score = sum(1 for term in unique_terms if term in segment)
        if score > best_score:
            best_score = score
            best_start = start
    return best_start


def highlight(snippet: str, terms: List[str]) -> str:
    """
    クエリ語を ** で囲む

    語ごとに順番に置換するだけなので、語同士が重なると
    （例: "learning" の後に "learn"）マーカーが入れ子になる
    """
    for term in terms:
        pattern = re.compile(f"({re.escape(term)})", re.IGNORECASE)
        snippet = pattern.sub(r"**\1**", snippet)
    return snippet


def create_snippet(text: str, query: str, max_length: int | None = None) -> str:
    """
    スニペット（抜粋）を作成する

    Args:
        text: チャンクの本文
        query: 検索クエリ（正規化前の入力そのまま）
        max_length: 最大文字数（None=settingsの値、デフォルト200）

    Returns:
        スニペット文字列（末尾が途中なら "..." を付ける）
    """
    if max_length is None:
        max_length = settings.snippet_max_length

    terms = _query_terms(query)
    start = find_best_window(text, terms, max_length, settings.snippet_step)

    snippet = highlight(text[start:start + max_length], terms)

    if start + max_length < len(text):
        snippet += "..."
    return snippet
