"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
import math
from decimal import Decimal, InvalidOperation
from typing import Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

# 纳秒时间戳上限（数据库 INTEGER 为有符号 64 位）
MAX_TIMESTAMP = 2 ** 63 - 1


def parse_decimal_text(value: str) -> Decimal:
    """解析十进制金额文本，必须是非负有限数"""
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError("must be a decimal number") from e
    if not number.is_finite() or number < 0:
        raise ValueError("must be a non-negative number")
    # 超出浮点范围的金额无法作为数值返回
    if not math.isfinite(float(number)):
        raise ValueError("must be within the numeric range")
    return number


def _decimal_text(v: str) -> str:
    parse_decimal_text(v)
    return v.strip()


# ============== 房屋 Schemas ==============

class HouseInit(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Optional[str] = None


class HouseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = None


class HouseResponse(BaseModel):
    id: str
    name: str
    owner: str
    address: Optional[str]
    created_date: int
    updated_at: Optional[int]
    model_config = ConfigDict(from_attributes=True)


# ============== 房间 Schemas ==============

class RoomPayload(BaseModel):
    house_id: str
    room_number: str = Field(..., min_length=1, max_length=20)
    type: Optional[str] = Field(None, max_length=50)
    price: str

    @field_validator("price")
    @classmethod
    def price_must_be_decimal(cls, v):
        return _decimal_text(v)


class RoomUpdate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    type: Optional[str] = Field(None, max_length=50)
    price: str

    @field_validator("price")
    @classmethod
    def price_must_be_decimal(cls, v):
        return _decimal_text(v)


class RoomResponse(BaseModel):
    id: str
    house_id: str
    room_number: str
    type: Optional[str]
    is_booked: bool
    price: str
    created_date: int
    updated_at: Optional[int]
    model_config = ConfigDict(from_attributes=True)


class RoomAvailabilityResponse(BaseModel):
    room_id: str
    check_in_date: int
    check_out_date: int
    available: bool


# ============== 客人 Schemas ==============

class GuestPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)


class GuestResponse(BaseModel):
    id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    created_date: int
    model_config = ConfigDict(from_attributes=True)


# ============== 预订 Schemas ==============

class ReservationPayload(BaseModel):
    room_id: str
    guest_id: str
    check_in_date: int = Field(..., ge=0, le=MAX_TIMESTAMP)
    check_out_date: int = Field(..., ge=0, le=MAX_TIMESTAMP)


class ReservationResponse(BaseModel):
    id: str
    house_id: Optional[str]
    room_id: str
    guest_id: str
    check_in_date: int
    check_out_date: int
    created_date: int
    model_config = ConfigDict(from_attributes=True)


class ReservationMessage(BaseModel):
    message: str
    reservation_id: str


# ============== 付款 Schemas ==============

class CheckOutRequest(BaseModel):
    amount: str

    @field_validator("amount")
    @classmethod
    def amount_must_be_decimal(cls, v):
        return _decimal_text(v)


class PaymentPayload(CheckOutRequest):
    reservation_id: str


class PaymentResponse(BaseModel):
    """付款结果：提示信息 + 数值金额"""
    msg: str
    amount: float


class PaymentRecordResponse(BaseModel):
    id: str
    reservation_id: str
    amount: str
    status: str
    created_date: int
    updated_at: Optional[int]
    model_config = ConfigDict(from_attributes=True)


# ============== 客人请求 Schemas ==============

class GuestRequestPayload(BaseModel):
    guest_id: str
    details: str = Field(..., min_length=1)


class GuestRequestStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=50)


class GuestRequestResponse(BaseModel):
    id: str
    guest_id: str
    details: str
    status: str
    created_date: int
    model_config = ConfigDict(from_attributes=True)


# ============== 通用 ==============

class MessageResponse(BaseModel):
    message: str


class IdResponse(BaseModel):
    id: str
