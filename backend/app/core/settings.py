"""
アプリケーション設定（環境変数・定数の一元管理）

【初心者向け】
- Pydantic Settings: 環境変数や.envを読んで型付きで扱うための仕組み
- ここで定義した値は app.core.settings.settings から参照できる
- 主な分類: CORS, ドキュメント読み込み, チャンク分割, 検索, ログ
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """
    アプリケーション設定クラス
    環境変数（または.env）の値が自動でここにマッピングされる
    """

    # CORS設定
    cors_origins: List[str] = ["http://localhost:3000"]

    # 起動時に読み込むドキュメントディレクトリ（リポジトリルートからの相対パス）
    docs_dir: str = Field(
        default="documents",
        alias="DOCS_DIR",
        description="起動時に読み込む txt/pdf の置き場所"
    )
    load_docs_on_startup: bool = Field(
        default=True,
        alias="LOAD_DOCS_ON_STARTUP",
        description="起動時に docs_dir を読み込んでインデックスを作るか"
    )

    # チャンク分割設定（固定長 + オーバーラップ）
    chunk_size: int = Field(
        default=500,
        gt=0,
        alias="CHUNK_SIZE",
        description="チャンクサイズ（文字数）"
    )
    chunk_overlap: int = Field(
        default=50,
        alias="CHUNK_OVERLAP",
        description="チャンクオーバーラップ（文字数）"
    )
    chars_per_page: int = Field(
        default=2000,
        gt=0,
        alias="CHARS_PER_PAGE",
        description="推定ページ番号の計算に使う1ページあたりの文字数（目安）"
    )

    # スニペット設定
    snippet_max_length: int = Field(
        default=200,
        gt=0,
        alias="SNIPPET_MAX_LENGTH",
        description="スニペットの最大文字数"
    )
    snippet_step: int = Field(
        default=50,
        gt=0,
        alias="SNIPPET_STEP",
        description="スニペット窓をずらす幅（文字数）"
    )

    # 検索API設定
    search_default_limit: int = Field(
        default=10,
        alias="SEARCH_DEFAULT_LIMIT",
        description="limit未指定時の取得件数"
    )
    search_max_limit: int = Field(
        default=50,
        alias="SEARCH_MAX_LIMIT",
        description="取得件数の上限"
    )

    # ログ設定
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="ログレベル（DEBUG / INFO / WARNING / ERROR）"
    )

    # Pydantic v2の設定（Configクラスの代わりにmodel_configを使用）
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,  # Fieldのaliasとフィールド名の両方で読み込み可能
        extra="ignore"  # 未定義の環境変数を無視
    )


# グローバル設定インスタンス
settings = Settings()
