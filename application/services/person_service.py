"""
Person 应用服务（application/services）- 对外暴露存储契约，每个操作一个事务
"""
from typing import Optional, List, Callable

from domain.person.entity import Person
from domain.common.unit_of_work import AbstractUnitOfWork
from application.dto import PersonDTO
from core.logging_config import get_logger


logger = get_logger(__name__)


class PersonApplicationService:
    """Person 应用服务

    查找不到不是错误：``find_by_id`` / ``update_person`` 返回 None，
    ``delete_person`` 返回 False。名称为空白时抛出 InvalidPersonNameException，
    且在打开事务之前校验，不会推进 id 序列。
    """

    def __init__(self, uow_factory: Callable[..., AbstractUnitOfWork]):
        self._uow_factory = uow_factory

    async def find_by_id(self, person_id: int) -> Optional[PersonDTO]:
        async with self._uow_factory(readonly=True) as uow:
            person = await uow.person_repository.get_by_id(person_id)
            return self._to_dto(person) if person else None

    async def find_by_name(self, name: str) -> List[PersonDTO]:
        async with self._uow_factory(readonly=True) as uow:
            people = await uow.person_repository.list_by_name(name)
            return [self._to_dto(p) for p in people]

    async def list_all(self) -> List[PersonDTO]:
        async with self._uow_factory(readonly=True) as uow:
            people = await uow.person_repository.list_all()
            return [self._to_dto(p) for p in people]

    async def create_person(self, name: str) -> PersonDTO:
        person = Person(id=None, name=name)
        async with self._uow_factory() as uow:
            created = await uow.person_repository.create(person)
        logger.info("person_created", person_id=created.id)
        return self._to_dto(created)

    async def update_person(self, person_id: int, name: str) -> Optional[PersonDTO]:
        Person.validate_name(name)
        async with self._uow_factory() as uow:
            updated = await uow.person_repository.update_name(person_id, name)
        if updated is None:
            logger.warning("person_update_missing", person_id=person_id)
            return None
        logger.info("person_updated", person_id=person_id)
        return self._to_dto(updated)

    async def delete_person(self, person_id: int) -> bool:
        async with self._uow_factory() as uow:
            deleted = await uow.person_repository.delete(person_id)
        if deleted:
            logger.info("person_deleted", person_id=person_id)
        else:
            logger.warning("person_delete_missing", person_id=person_id)
        return deleted

    @staticmethod
    def _to_dto(person: Person) -> PersonDTO:
        return PersonDTO.model_validate(person)
