from __future__ import annotations

from typing import Callable, Awaitable

import grpc

from core.logging_config import get_logger
from domain.common.exceptions import BusinessException
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id
from shared.codes import BusinessCode


logger = get_logger(__name__)


_STATUS_BY_CODE = {
    BusinessCode.PARAM_VALIDATION_ERROR: grpc.StatusCode.INVALID_ARGUMENT,
    BusinessCode.SYSTEM_ERROR: grpc.StatusCode.INTERNAL,
}


def business_code_to_grpc_status(code: int) -> grpc.StatusCode:
    try:
        bc = BusinessCode(code)
    except ValueError:
        return grpc.StatusCode.FAILED_PRECONDITION
    return _STATUS_BY_CODE.get(bc, grpc.StatusCode.FAILED_PRECONDITION)


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    """Turn exceptions escaping a servicer into gRPC status codes.

    BusinessException -> status from its code, logged without a stack;
    anything else (database, driver, bugs) -> INTERNAL, logged with its
    stack. Both set ``x-biz-code`` / ``x-error-type`` trailing metadata.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        method = handler_call_details.method

        async def _abort(context: grpc.aio.ServicerContext, status: grpc.StatusCode, code: int,
                         error_type: str, message: str, log_message: str, exc_info: bool = False) -> None:
            trailers = [
                ("x-biz-code", str(int(code))),
                ("x-error-type", error_type),
            ]
            request_id = get_request_id()
            if request_id:
                # abort trailers replace the ones RequestIdInterceptor set
                trailers.append((REQUEST_ID_META_KEY, request_id))
            logger.error(
                "grpc_mapped_error",
                method=method,
                code=str(int(code)),
                status=str(status),
                message=log_message,
                exc_info=exc_info,
            )
            await context.abort(status, message, trailing_metadata=tuple(trailers))

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except BusinessException as exc:
                status = business_code_to_grpc_status(exc.code)
                await _abort(context, status, exc.code, exc.error_type or "BusinessError", exc.message, exc.message)
            except grpc.aio.AbortError:
                # context.abort() from the servicer itself: status already set
                raise
            except Exception as exc:
                await _abort(
                    context,
                    grpc.StatusCode.INTERNAL,
                    BusinessCode.SYSTEM_ERROR,
                    "SystemError",
                    "Internal server error",
                    str(exc),
                    exc_info=True,
                )

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
