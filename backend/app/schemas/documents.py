"""
ドキュメントAPI用スキーマ

【初心者向け】
- DocumentCreateRequest: 抽出済みテキストを登録するリクエスト
- DocumentInfo: 一覧用（本文は含めない）
- DocumentDetail: 詳細用（summary / keywords を含む）
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from app.docs.models import Document


class DocumentCreateRequest(BaseModel):
    """ドキュメント登録リクエスト"""
    original_name: str = Field(..., min_length=1, description="元のファイル名")
    text_content: str = Field(..., description="抽出済みテキスト（空でもよい）")
    page_count: int = Field(default=1, ge=0, description="ページ数")
    file_path: str = Field(default="", description="保存先パス")


class DocumentInfo(BaseModel):
    """ドキュメント一覧の1件"""
    file_id: str
    original_name: str
    file_size: int
    page_count: int
    upload_time: str

    @classmethod
    def from_document(cls, document: Document) -> "DocumentInfo":
        return cls(
            file_id=document.file_id,
            original_name=document.original_name,
            file_size=document.file_size,
            page_count=document.page_count,
            upload_time=document.upload_time,
        )


class DocumentDetail(DocumentInfo):
    """ドキュメント詳細"""
    summary: Optional[Dict[str, Any]] = None
    keywords: Optional[List[str]] = None

    @classmethod
    def from_document(cls, document: Document) -> "DocumentDetail":
        return cls(
            file_id=document.file_id,
            original_name=document.original_name,
            file_size=document.file_size,
            page_count=document.page_count,
            upload_time=document.upload_time,
            summary=document.summary,
            keywords=document.keywords,
        )


class DocumentListData(BaseModel):
    documents: List[DocumentInfo]
    total: int


class DocumentListResponse(BaseModel):
    success: bool = True
    data: DocumentListData


class DocumentDetailResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: DocumentDetail


class DocumentDeleteResponse(BaseModel):
    success: bool = True
    message: str
