"""
本体对象定义 (Ontology Objects)
房屋、房间、客人、预订、付款、客人请求
实体之间只按 id 引用，不建外键，删除不级联
时间均为 Unix 纪元以来的纳秒数
"""
from enum import Enum
from sqlalchemy import Column, String, Text, Boolean, BigInteger
from app.database import Base

# 主键长度上限（字节）
ID_MAX_LENGTH = 44


# ============== 枚举定义 ==============

class PaymentStatus(str, Enum):
    """付款状态"""
    PAID = "Paid"            # 已支付


class GuestRequestStatus(str, Enum):
    """客人请求状态（可被更新为任意文本）"""
    PENDING = "Pending"      # 待处理


# ============== 本体对象定义 ==============

class House(Base):
    """
    房屋对象
    单房屋部署：整个系统最多一条记录
    """
    __tablename__ = "houses"

    id = Column(String(ID_MAX_LENGTH), primary_key=True)
    name = Column(String(100), nullable=False)
    owner = Column(String(100), nullable=False)        # 初始化房屋的调用方
    address = Column(Text)
    created_date = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger)


class Room(Base):
    """
    房间对象
    is_booked 只由预订生命周期维护
    """
    __tablename__ = "rooms"

    id = Column(String(ID_MAX_LENGTH), primary_key=True)
    house_id = Column(String(ID_MAX_LENGTH), nullable=False, index=True)
    room_number = Column(String(20), nullable=False)
    type = Column(String(50))                          # 房型，如 single/double/suite
    is_booked = Column(Boolean, nullable=False, default=False)
    price = Column(String(32), nullable=False)         # 十进制文本
    created_date = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger)


class Guest(Base):
    """客人对象"""
    __tablename__ = "guests"

    id = Column(String(ID_MAX_LENGTH), primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100))
    phone = Column(String(30))
    created_date = Column(BigInteger, nullable=False)


class Reservation(Base):
    """
    预订对象
    入住/离店构成半开区间 [check_in_date, check_out_date)
    """
    __tablename__ = "reservations"

    id = Column(String(ID_MAX_LENGTH), primary_key=True)
    house_id = Column(String(ID_MAX_LENGTH), index=True)
    room_id = Column(String(ID_MAX_LENGTH), nullable=False, index=True)
    guest_id = Column(String(ID_MAX_LENGTH), nullable=False, index=True)
    check_in_date = Column(BigInteger, nullable=False)
    check_out_date = Column(BigInteger, nullable=False)
    created_date = Column(BigInteger, nullable=False)


class Payment(Base):
    """付款流水"""
    __tablename__ = "payments"

    id = Column(String(ID_MAX_LENGTH), primary_key=True)
    reservation_id = Column(String(ID_MAX_LENGTH), nullable=False, index=True)
    amount = Column(String(32), nullable=False)        # 十进制文本
    status = Column(String(20), nullable=False, default=PaymentStatus.PAID.value)
    created_date = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger)


class GuestRequest(Base):
    """客人请求记录"""
    __tablename__ = "guest_requests"

    id = Column(String(ID_MAX_LENGTH), primary_key=True)
    guest_id = Column(String(ID_MAX_LENGTH), nullable=False, index=True)
    details = Column(Text, nullable=False)
    status = Column(String(50), nullable=False, default=GuestRequestStatus.PENDING.value)
    created_date = Column(BigInteger, nullable=False)
