from __future__ import annotations

from typing import Optional, Sequence
import grpc
from grpc_health.v1 import health, health_pb2_grpc, health_pb2

from core.config import settings, GrpcSettings
from core.logging_config import get_logger
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.protos import person_pb2_grpc, SERVICE_NAME
from grpc_app.services.person_service import PersonService


logger = get_logger(__name__)


def _read(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _server_credentials(cfg: GrpcSettings) -> grpc.ServerCredentials:
    if not (cfg.tls.cert and cfg.tls.key):
        raise RuntimeError("GRPC TLS enabled but cert/key not provided")
    root_certificates = _read(cfg.tls.ca) if cfg.tls.ca else None
    return grpc.ssl_server_credentials(
        [(_read(cfg.tls.key), _read(cfg.tls.cert))],
        root_certificates=root_certificates,
        require_client_auth=bool(root_certificates),
    )


async def create_server(
    service: Optional[PersonService] = None,
    *,
    cfg: Optional[GrpcSettings] = None,
) -> tuple[grpc.aio.Server, int]:
    """Build (but do not start) the server; returns it with the bound port.

    Port 0 in config binds an ephemeral port, hence the returned port.
    """
    cfg = cfg or settings.grpc
    interceptors: Sequence[grpc.aio.ServerInterceptor] = (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business/infrastructure exceptions
    )

    options = [
        ("grpc.max_concurrent_streams", max(1, cfg.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=interceptors, options=options)

    person_pb2_grpc.add_PersonServiceServicer_to_server(service or PersonService(), server)

    # Health service
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    await health_svc.set(SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING)

    address = f"{cfg.host}:{cfg.port}"
    if cfg.tls.enabled:
        port = server.add_secure_port(address, _server_credentials(cfg))
    else:
        port = server.add_insecure_port(address)

    return server, port
