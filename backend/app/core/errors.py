"""
共通エラーハンドリング（APIで返すエラー形式の統一）

【初心者向け】
- フロントエンドが { "success": false, "message": "..." } で
  エラーを受け取れるよう、共通形式で例外を投げる
- raise_invalid_input 等のヘルパーで、コードごとのHTTPステータスを自動設定
- app.main で app_error_handler を登録し、detail をそのままJSONで返す
"""
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Literal

# エラーコード一覧（型安全のため Literal で定義）
ErrorCode = Literal[
    "INVALID_INPUT",
    "NOT_FOUND",
    "INTERNAL_ERROR",
]

# エラーコードとHTTPステータスのマッピング
ERROR_STATUS_MAP: dict[ErrorCode, int] = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(HTTPException):
    """アプリケーション共通エラー

    フロントエンドで期待される形式: { "success": false, "message": "..." }
    """

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(
            status_code=ERROR_STATUS_MAP[code],
            detail={"success": False, "message": message},
        )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """AppError を { success, message } 形式のレスポンスに変換する"""
    return JSONResponse(status_code=exc.status_code, content=exc.detail)


def raise_invalid_input(message: str) -> None:
    """INVALID_INPUTエラーを発生させる"""
    raise AppError("INVALID_INPUT", message)


def raise_not_found(message: str) -> None:
    """NOT_FOUNDエラーを発生させる

    HTTP 404と { "success": false, "message": "..." } を返す
    """
    raise AppError("NOT_FOUND", message)


def raise_internal_error(message: str) -> None:
    """INTERNAL_ERRORエラーを発生させる"""
    raise AppError("INTERNAL_ERROR", message)
