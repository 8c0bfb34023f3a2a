"""
数据传输对象（DTO）- 应用层与表现层之间的数据传输
"""
from pydantic import BaseModel, ConfigDict


class PersonDTO(BaseModel):
    """Person 响应DTO（与会话/ORM 对象解耦，可安全跨请求边界传递）"""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True, frozen=True)
