"""
Pytest 配置和共享 fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.database import Base, get_db
from app.models import ontology  # noqa
from app.models.schemas import GuestPayload, RoomPayload
from app.security.auth import create_access_token
from app.services.guest_service import GuestService
from app.services.house_service import HouseService
from app.services.room_service import RoomService
from app.main import app

OWNER = "owner-principal"
STRANGER = "stranger-principal"

DAY = 24 * 60 * 60 * 10 ** 9  # 一天的纳秒数
BASE_TIME = 1_700_000_000 * 10 ** 9


class FakeClock:
    """每次调用前进 1 秒的确定性时钟"""

    def __init__(self, start: int = BASE_TIME):
        self.now = start

    def __call__(self) -> int:
        self.now += 10 ** 9
        return self.now


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def clock():
    return FakeClock()


# ============== 身份相关 Fixtures ==============

@pytest.fixture
def owner_headers():
    """房东的认证请求头"""
    return {"Authorization": f"Bearer {create_access_token(OWNER)}"}


@pytest.fixture
def stranger_headers():
    """非房东的认证请求头"""
    return {"Authorization": f"Bearer {create_access_token(STRANGER)}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_house(db_session, clock):
    """已初始化的房屋"""
    return HouseService(db_session, clock=clock).init_house("海边小屋", "1 Beach Road", owner=OWNER)


@pytest.fixture
def make_room(db_session, sample_house, clock):
    """房间工厂"""
    def _make(room_number="101", price="100.00", room_type="double"):
        return RoomService(db_session, clock=clock).add_room(RoomPayload(
            house_id=sample_house.id,
            room_number=room_number,
            type=room_type,
            price=price,
        ))
    return _make


@pytest.fixture
def sample_room(make_room):
    return make_room()


@pytest.fixture
def make_guest(db_session, clock):
    """客人工厂"""
    def _make(name="张三", email="zhangsan@example.com", phone="13800138000"):
        return GuestService(db_session, clock=clock).add_guest(
            GuestPayload(name=name, email=email, phone=phone)
        )
    return _make


@pytest.fixture
def sample_guest(make_guest):
    return make_guest()
