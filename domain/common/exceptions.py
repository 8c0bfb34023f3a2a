"""领域层业务异常定义，供领域与基础设施使用。

gRPC 层（grpc_app.interceptors.exceptions）负责把业务码映射为状态码，
领域层不反向依赖传输层。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
        error_type: str = "DomainValidationError",
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type=error_type,
            details=details,
            field=field,
        )


class InvalidPersonNameException(DomainValidationException):
    def __init__(self, name: Optional[str] = None):
        super().__init__(
            "Person name must not be blank",
            field="name",
            details={"name": name} if name is not None else None,
            error_type="InvalidPersonName",
        )
