"""
Shared schema helpers: envelopes, camelCase aliases and value formatting

Every Decimal leaves the API as a string. Money is rendered with two
decimals, other quantities keep the scale they were stored with.
"""
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any, Generic, Optional, TypeVar
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, PlainSerializer, model_serializer
from pydantic.alias_generators import to_camel

from acaia.config import settings

CENTS = Decimal("0.01")

T = TypeVar("T")


def quantize_money(value) -> Decimal:
    """Round a monetary amount half-up to cents"""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value) -> Optional[str]:
    if value is None:
        return None
    return str(quantize_money(value))


def format_decimal(value) -> Optional[str]:
    if value is None:
        return None
    return str(Decimal(value))


def format_datetime_local(dt: datetime) -> Optional[str]:
    """Convert a UTC timestamp to the venue's local time string"""
    if dt is None:
        return None
    # Naive values coming back from SQLite are UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    local_dt = dt.astimezone(ZoneInfo(settings.display_timezone))
    return local_dt.strftime("%Y-%m-%d %H:%M:%S")


Money = Annotated[Decimal, PlainSerializer(format_money, return_type=Optional[str], when_used="json")]
Quantity = Annotated[Decimal, PlainSerializer(format_decimal, return_type=Optional[str], when_used="json")]


def serialize_decimals(value: Any) -> Any:
    """Walk a result graph and turn every Decimal into a string"""
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, dict):
        return {key: serialize_decimals(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_decimals(item) for item in value]
    return value


class CamelModel(BaseModel):
    """Base schema exposing camelCase JSON names"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope"""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None

    @model_serializer(mode="wrap")
    def drop_empty_message(self, handler):
        body = handler(self)
        if self.message is None:
            body.pop("message", None)
        return body


def ok(data=None, message: str = None) -> dict:
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body
