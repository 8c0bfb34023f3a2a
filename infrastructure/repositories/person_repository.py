"""
Person 仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from domain.person.entity import Person
from domain.person.repository import PersonRepository
from infrastructure.models.person import PersonModel


class SQLAlchemyPersonRepository(PersonRepository):
    """Person 仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: PersonModel) -> Person:
        """将数据库模型转换为领域实体"""
        return Person(id=model.id, name=model.name)

    async def create(self, person: Person) -> Person:
        db_person = PersonModel(name=person.name)
        self.session.add(db_person)
        await self.session.flush()  # 获取序列生成的ID
        return self._to_entity(db_person)

    async def get_by_id(self, person_id: int) -> Optional[Person]:
        result = await self.session.execute(
            select(PersonModel).where(PersonModel.id == person_id)
        )
        db_person = result.scalar_one_or_none()
        return self._to_entity(db_person) if db_person else None

    async def list_by_name(self, name: str) -> List[Person]:
        result = await self.session.execute(
            select(PersonModel)
            .where(PersonModel.name == name)
            .order_by(PersonModel.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def list_all(self) -> List[Person]:
        result = await self.session.execute(
            select(PersonModel).order_by(PersonModel.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def update_name(self, person_id: int, name: str) -> Optional[Person]:
        """显式 UPDATE 语句，不依赖会话的脏检查/flush"""
        result = await self.session.execute(
            update(PersonModel)
            .where(PersonModel.id == person_id)
            .values(name=name)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return Person(id=person_id, name=name)

    async def delete(self, person_id: int) -> bool:
        result = await self.session.execute(
            delete(PersonModel)
            .where(PersonModel.id == person_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
