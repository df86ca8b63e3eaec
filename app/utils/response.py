# app/utils/response.py

from typing import TypeVar, Generic, Optional, Dict, Any
from pydantic import BaseModel

T = TypeVar("T")


def success_response(message: str, data: Optional[T] = None) -> Dict[str, Any]:
    return {
        "success": True,
        "message": message,
        "data": data,
    }


def bulk_message(verb: str, success_count: int, failed_count: int, noun: str = "item") -> str:
    message = f"{verb} {success_count} {noun}{'' if success_count == 1 else 's'}"
    if failed_count:
        message += f", {failed_count} failed"
    return message


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None
