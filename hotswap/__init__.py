"""
hotswap - reflective access bridge for live-patched Python code

A pure library module with NO CLI or server code. Replacement classes
loaded by a hot-swap runtime use it to reach the private state and
behaviour of the objects created by the code they replace.

Usage:
    import logging
    import hotswap

    hotswap.install_logger(logging.getLogger("hotswap"))
    count = hotswap.read_field(Derived, "__count", obj)
    hotswap.write_field(Derived, "__count", obj, count + 1)
"""

from hotswap.api import (
    construct,
    install_logger,
    invoke_instance_method,
    invoke_static_method,
    read_field,
    read_static_field,
    trace,
    write_field,
    write_static_field,
)
from hotswap.errors import (
    AccessDenied,
    ArgumentMismatch,
    BridgeError,
    InstantiationFailure,
    MemberNotFound,
)

__all__ = [
    "construct",
    "install_logger",
    "invoke_instance_method",
    "invoke_static_method",
    "read_field",
    "read_static_field",
    "trace",
    "write_field",
    "write_static_field",
    "AccessDenied",
    "ArgumentMismatch",
    "BridgeError",
    "InstantiationFailure",
    "MemberNotFound",
]
