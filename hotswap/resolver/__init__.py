"""Member resolution: ancestor walk → declared member → bindable handle"""
from .hierarchy import ancestors, resolve_type, storage_name
from .fields import FieldHandle, find_field
from .methods import MethodHandle, find_method, check_arguments
from .constructors import ConstructorHandle, find_constructor

__all__ = [
    "ancestors",
    "resolve_type",
    "storage_name",
    "FieldHandle",
    "find_field",
    "MethodHandle",
    "find_method",
    "check_arguments",
    "ConstructorHandle",
    "find_constructor",
]
