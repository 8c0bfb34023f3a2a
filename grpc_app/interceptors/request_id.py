from __future__ import annotations

import uuid
import contextvars
from typing import Callable, Awaitable

import grpc
from structlog.contextvars import bound_contextvars


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("grpc_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


class RequestIdInterceptor(grpc.aio.ServerInterceptor):
    """Propagate (or mint) ``x-request-id`` for every unary-unary call.

    The id is echoed back as trailing metadata and bound into structlog's
    contextvars so every log line of the call carries it.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        md = dict(handler_call_details.invocation_metadata or [])

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            request_id = md.get(REQUEST_ID_META_KEY) or str(uuid.uuid4())
            context.set_trailing_metadata(((REQUEST_ID_META_KEY, request_id),))
            token = _request_id_var.set(request_id)
            try:
                with bound_contextvars(request_id=request_id):
                    return await handler.unary_unary(request, context)
            finally:
                _request_id_var.reset(token)

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
