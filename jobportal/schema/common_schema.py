# jobportal/schema/common_schema.py
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, HttpUrl, TypeAdapter, ValidationError

T = TypeVar("T")

_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> Optional[str]:
    """Validate as an http(s) URL but keep the caller's string; blank means unset"""
    value = value.strip()
    if not value:
        return None
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Must be a valid http(s) URL")
    return value


HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: Optional[T] = None


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    pages: int
    has_next: bool
    has_prev: bool


def envelope(data: Any = None, message: str = "") -> dict:
    return {"success": True, "message": message, "data": data}


def not_null(value: Any) -> Any:
    """Partial updates may leave a required field out but not clear it"""
    if value is None:
        raise ValueError("This field cannot be null")
    return value
