"""
API 回應模型
為所有端點提供統一的回應格式
"""

from typing import Any, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class OptionItem(BaseModel):
    """下拉選單選項"""

    label: str
    value: str
    sub_label: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ApiResponse(BaseModel):
    """成功回應"""

    status: str = "success"
    message: str
    data: Any = None


class ApiErrorResponse(BaseModel):
    """失敗回應"""

    status: str = "failed"
    message: str
    error_code: Optional[str] = Field(None, alias="errorCode")

    class Config:
        populate_by_name = True


def success_response(message: str, data: Any = None) -> dict:
    """組裝成功回應，data 需已是可序列化的結構"""
    return ApiResponse(message=message, data=data).model_dump()
