"""
Person 领域实体 - 包含核心业务规则
"""
from dataclasses import dataclass
from typing import Optional

from domain.common.exceptions import InvalidPersonNameException


def is_blank(name: Optional[str]) -> bool:
    return name is None or not name.strip()


@dataclass
class Person:
    """Person 实体 - id 由存储层分配，创建后不可变"""

    id: Optional[int]
    name: str

    def __post_init__(self):
        self.validate_name(self.name)

    @staticmethod
    def validate_name(name: Optional[str]) -> None:
        """业务规则：名称不能为空或全为空白（不做 trim，按原样存储）"""
        if is_blank(name):
            raise InvalidPersonNameException(name)
