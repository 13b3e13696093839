from __future__ import annotations
import logging
from dataclasses import dataclass
from types import FunctionType, GetSetDescriptorType, MemberDescriptorType
from typing import Any, Optional

from hotswap.utils.logging_sink import is_enabled, emit
from .hierarchy import ancestors, instance_dict, qualified_name, storage_name

_MISSING = object()
_NOT_FIELDS = (FunctionType, staticmethod, classmethod, property)
# Slots and C-level attributes hold per-instance data, never a class-level value
_INSTANCE_ONLY = (MemberDescriptorType, GetSetDescriptorType)


@dataclass(frozen=True)
class FieldHandle:
    """A resolved field: the class that declares it and its storage name."""
    declaring: type
    storage: str

    def get(self, instance: Optional[object]) -> Any:
        if instance is None:
            try:
                return self.declaring.__dict__[self.storage]
            except KeyError:
                raise AttributeError(
                    f"{qualified_name(self.declaring)} has no class attribute {self.storage}"
                ) from None
        return object.__getattribute__(instance, self.storage)

    def set(self, instance: Optional[object], value: Any) -> None:
        if instance is None:
            type.__setattr__(self.declaring, self.storage, value)
        else:
            object.__setattr__(instance, self.storage, value)


def _is_field_entry(entry: object, static: bool) -> bool:
    if entry is _MISSING or isinstance(entry, _NOT_FIELDS):
        return False
    return not (static and isinstance(entry, _INSTANCE_ONLY))


def find_field(owner: type, name: str, instance: Optional[object] = None) -> Optional[FieldHandle]:
    """Walk the ancestors of ``owner`` for the first class declaring ``name``.

    With an instance, a value stored in the instance ``__dict__`` under the
    class's storage name counts as declared by that class.
    """
    if is_enabled(logging.DEBUG):
        emit(logging.DEBUG, f"get_field_by_name:{name} in {qualified_name(owner)}")

    own = instance_dict(instance) if instance is not None else {}
    for cls in ancestors(owner):
        storage = storage_name(cls, name)
        if storage in own:
            return FieldHandle(cls, storage)
        if _is_field_entry(cls.__dict__.get(storage, _MISSING), instance is None):
            return FieldHandle(cls, storage)
    return None
