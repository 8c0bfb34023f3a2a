"""gRPC transport layer for the person service.

This package hosts:
- The protocol buffer contract (``protos/person.proto``) and its runtime-built stubs.
- Server bootstrap and interceptors.
- The thin servicer that maps gRPC requests to the person application service.
"""
