"""Unit of Work 抽象定义"""
from __future__ import annotations

from abc import ABC, abstractmethod

from domain.person.repository import PersonRepository


class AbstractUnitOfWork(ABC):
    """应用层事务边界控制抽象

    每个 ``async with`` 块对应一个事务：正常退出时提交，异常或只读时回滚。
    """

    person_repository: PersonRepository

    def __init__(self, *, readonly: bool = False) -> None:
        self._committed = False
        self._readonly = readonly
        self.person_repository = None  # type: ignore[assignment]

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc or self._readonly:
            await self.rollback()
        elif not self._committed:
            # 只在未显式提交时自动提交
            await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        """提交事务"""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """回滚事务"""
