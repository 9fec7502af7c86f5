"""
TF-IDF 重みインデックス（コーパス全体の語の重み付けモデル）

【初心者向け】
- エントリ = 1チャンク。チャンクの本文を正規化 → トークン化 → ストップワード除去して語の出現回数を数える
- tf(語, エントリ) = そのエントリでの出現回数
- idf(語) = 1 + ln(N / (1 + df))   N=エントリ数, df=その語を含むエントリ数
- スコア = クエリの各トークンについて tf × idf を足し合わせたもの
- i番目のエントリと i番目のチャンクは必ず対応する（追加・再構築は両方を同時に更新する）
- 点削除はできないので、削除時は残りのチャンクで rebuild する（O(残りチャンク数)）
"""
import math
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from app.docs.models import DocumentChunk
from app.search.normalizer import tokenize
from app.search.stopwords import remove_stopwords


class TermWeightIndex:
    """チャンク列とTF-IDFモデルを同じ順序で保持するインデックス"""

    def __init__(self) -> None:
        self._chunks: List[DocumentChunk] = []
        self._entries: List[Counter] = []
        self._doc_freq: Counter = Counter()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def chunks(self) -> Sequence[DocumentChunk]:
        """登録順のチャンク列（読み取り専用として扱う）"""
        return tuple(self._chunks)

    def chunk_at(self, position: int) -> DocumentChunk:
        """position番目のエントリに対応するチャンク"""
        return self._chunks[position]

    def add_document_chunks(self, chunks: Iterable[DocumentChunk]) -> int:
        """
        チャンクをエントリとして順番に追加する

        Args:
            chunks: 追加するチャンク（chunk_index順）

        Returns:
            追加したエントリ数
        """
        added = 0
        for chunk in chunks:
            terms = Counter(remove_stopwords(tokenize(chunk.content)))
            self._entries.append(terms)
            self._chunks.append(chunk)
            self._doc_freq.update(terms.keys())
            added += 1
        return added

    def rebuild(self, chunks: Iterable[DocumentChunk]) -> None:
        """
        モデルを破棄し、与えられたチャンクを順番に追加し直す

        Args:
            chunks: 再登録するチャンク（登録したい順）
        """
        self._chunks = []
        self._entries = []
        self._doc_freq = Counter()
        self.add_document_chunks(chunks)

    def tf(self, term: str, position: int) -> int:
        """position番目のエントリでの term の出現回数"""
        return self._entries[position].get(term, 0)

    def idf(self, term: str) -> float:
        """
        term の逆文書頻度

        df <= N なので N >= 1 のとき常に正の値になる
        """
        total = len(self._entries)
        if total == 0:
            return 0.0
        return 1.0 + math.log(total / (1 + self._doc_freq.get(term, 0)))

    def score_against_query(self, normalized_query: str) -> Dict[int, float]:
        """
        正規化済みクエリに対する各エントリのスコアを計算する

        Args:
            normalized_query: normalize() 済みのクエリ

        Returns:
            { エントリ位置: スコア }（スコアが0より大きいエントリのみ、位置の昇順）
        """
        query_terms = tokenize(normalized_query)
        if not query_terms or not self._entries:
            return {}

        # 同じ語が複数回出てきたらその分だけ加算する
        idf_cache = {term: self.idf(term) for term in set(query_terms)}

        scores: Dict[int, float] = {}
        for position, entry in enumerate(self._entries):
            measure = 0.0
            for term in query_terms:
                count = entry.get(term, 0)
                if count:
                    measure += count * idf_cache[term]
            if measure > 0:
                scores[position] = measure
        return scores
