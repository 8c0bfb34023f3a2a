"""Protocol buffers for the gRPC layer.

Stubs are compiled from ``person.proto`` at import time via
``grpc.protos_and_services`` (backed by grpcio-tools), so there is no
generated code checked in. The path is resolved against ``sys.path``,
which means the project root must be importable (it is when running
``python grpc_main.py`` from the root, or under pytest's ``pythonpath``).
"""
from __future__ import annotations

import grpc


PERSON_PROTO = "grpc_app/protos/person.proto"

person_pb2, person_pb2_grpc = grpc.protos_and_services(PERSON_PROTO)

SERVICE_NAME = person_pb2.DESCRIPTOR.services_by_name["PersonService"].full_name

__all__ = ["person_pb2", "person_pb2_grpc", "SERVICE_NAME"]
