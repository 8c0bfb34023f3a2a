"""
Person 仓储接口 - 定义数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Optional, List

from .entity import Person


class PersonRepository(ABC):
    """Person 仓储抽象接口 - 结果均按插入顺序（id 升序）返回"""

    @abstractmethod
    async def create(self, person: Person) -> Person:
        """插入新行，返回带有存储分配 id 的实体"""
        pass

    @abstractmethod
    async def get_by_id(self, person_id: int) -> Optional[Person]:
        pass

    @abstractmethod
    async def list_by_name(self, name: str) -> List[Person]:
        """精确匹配（区分大小写，无通配符）"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Person]:
        pass

    @abstractmethod
    async def update_name(self, person_id: int, name: str) -> Optional[Person]:
        """直接写入新名称；不存在时返回 None"""
        pass

    @abstractmethod
    async def delete(self, person_id: int) -> bool:
        """删除成功返回 True，不存在返回 False"""
        pass
