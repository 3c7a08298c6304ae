"""
房屋服务 - 本体操作层
单房屋部署：初始化一次，初始化调用方即房东
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from app.errors import AlreadyInitialized, NotFound, Unauthorized
from app.models.ontology import House
from app.models.schemas import HouseUpdate
from app.services.runtime import Clock, IdFactory, system_clock, uuid_id, booking_write_lock

logger = logging.getLogger(__name__)


class HouseService:
    """房屋服务"""

    def __init__(self, db: Session, clock: Clock = None, id_factory: IdFactory = None):
        self.db = db
        self._clock = clock or system_clock
        self._new_id = id_factory or uuid_id

    def init_house(self, name: str, address: Optional[str], owner: str) -> House:
        """初始化房屋，已存在则拒绝"""
        with booking_write_lock:
            if self.db.query(House).first() is not None:
                raise AlreadyInitialized("House has already been initialized")

            house = House(
                id=self._new_id(),
                name=name,
                owner=owner,
                address=address,
                created_date=self._clock(),
                updated_at=None,
            )
            self.db.add(house)
            self.db.commit()
            self.db.refresh(house)

        logger.info(f"House {house.id} initialized by {owner}")
        return house

    def get_house(self, house_id: str) -> House:
        house = self.db.query(House).filter(House.id == house_id).first()
        if not house:
            raise NotFound("House not found")
        return house

    def get_current_house(self) -> House:
        """获取本部署的房屋"""
        house = self.db.query(House).first()
        if not house:
            raise NotFound("House has not been initialized")
        return house

    def ensure_owner(self, house_id: str, caller: str) -> House:
        """校验调用方是房东"""
        house = self.get_house(house_id)
        if house.owner != caller:
            logger.warning(f"Caller {caller} rejected: not the owner of house {house_id}")
            raise Unauthorized("Only the house owner can perform this action")
        return house

    def update_house(self, house_id: str, data: HouseUpdate, caller: str) -> House:
        """更新房屋信息（仅房东）"""
        house = self.ensure_owner(house_id, caller)

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(house, key, value)
        house.updated_at = self._clock()

        self.db.commit()
        self.db.refresh(house)
        return house
