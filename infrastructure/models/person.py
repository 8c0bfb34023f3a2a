"""
Person 数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import BigInteger, Column, Integer, Sequence, Text

from .base import Base


# PostgreSQL 使用独立序列；SQLite 忽略 Sequence，改由 AUTOINCREMENT 保证 id 不复用
person_seq = Sequence("person_seq", start=1, metadata=Base.metadata)


class PersonModel(Base):
    """
    people 表映射

    id 由存储分配且单调递增，删除后不会被复用
    """
    __tablename__ = "people"
    __table_args__ = {
        "sqlite_autoincrement": True,
        "comment": "Person 实体表",
    }

    # SQLite 只有 INTEGER PRIMARY KEY 才能 AUTOINCREMENT
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        person_seq,
        primary_key=True,
        comment="主键ID",
    )
    name = Column(Text, nullable=False, comment="名称")

    def __repr__(self):
        return f"<PersonModel(id={self.id}, name='{self.name}')>"
