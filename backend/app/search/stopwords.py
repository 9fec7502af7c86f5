"""
ストップワード（検索に効かない頻出語）

コーパス側のエントリを作るときに除去する。クエリ側に残っていても
コーパスに出現しないので tf=0 になり、スコアには影響しない。
"""
from typing import Iterable, List

# 英語の一般的なストップワード + 1文字の英字・数字
ENGLISH_STOPWORDS = frozenset(
    """
    about above after again all also am an and another any are as at
    be because been before being below between both but by
    came can cannot come could did do does doing during each few for from further
    get got has had he have her here him himself his how
    if in into is it its itself like make many me might more most much must my myself
    never now of on only or other our ours ourselves out over own
    said same see should since so some still such
    take than that the their theirs them themselves then there these they this those
    through to too under until up very
    was way we well were what where when which while who whom with would why
    you your yours yourself
    a b c d e f g h i j k l m n o p q r s t u v w x y z
    0 1 2 3 4 5 6 7 8 9 _
    """.split()
)


def is_stopword(token: str) -> bool:
    """ストップワードかどうか"""
    return token in ENGLISH_STOPWORDS


def remove_stopwords(tokens: Iterable[str]) -> List[str]:
    """
    トークン列からストップワードを除去する（順序は保持）

    Args:
        tokens: 正規化済みトークン列

    Returns:
        ストップワード除去後のトークンリスト
    """
    return [token for token in tokens if not is_stopword(token)]
