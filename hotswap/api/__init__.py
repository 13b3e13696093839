"""
Public API of the reflective access bridge.

Interface-agnostic: the hot-swap runtime, generated patch code or tests can
all call these functions directly.
"""
from .instant_runtime import (
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
]
