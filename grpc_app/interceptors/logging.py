from __future__ import annotations

import time
from typing import Callable, Awaitable

import grpc

from core.logging_config import get_logger


logger = get_logger(__name__)


class LoggingInterceptor(grpc.aio.ServerInterceptor):
    """Access log per call; request_id comes from structlog contextvars.

    Errors are logged by ExceptionMappingInterceptor, which runs inside this one.
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

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            start = time.perf_counter()
            logger.info("grpc_request", method=method, peer=context.peer())
            try:
                return await handler.unary_unary(request, context)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.info("grpc_request_done", method=method, elapsed_ms=round(elapsed_ms, 2))

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
