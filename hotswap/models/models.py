from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence, Union, runtime_checkable

# A class, or its dotted import path ("package.module.Outer.Inner")
TypeRef = Union[type, str]


class MemberKind(Enum):
    FIELD = "field"
    METHOD = "method"
    CONSTRUCTOR = "constructor"


@dataclass(frozen=True)
class MemberDescriptor:
    """What a caller asked the bridge to resolve.

    Only lives for the duration of one bridge call; it ends up in error
    messages and log records.
    """
    owner: TypeRef
    name: str
    kind: MemberKind
    signature: Optional[Sequence[type]] = None

    @property
    def owner_name(self) -> str:
        if isinstance(self.owner, type):
            return f"{self.owner.__module__}.{self.owner.__qualname__}"
        return str(self.owner)

    def describe(self) -> str:
        if self.signature is None:
            params = ""
        else:
            params = "(" + ", ".join(getattr(t, "__name__", repr(t)) for t in self.signature) + ")"
        if self.kind is MemberKind.FIELD:
            return f"field {self.name} in {self.owner_name}"
        if self.kind is MemberKind.CONSTRUCTOR:
            return f"constructor {self.owner_name}{params or '(...)'}"
        return f"method {self.name}{params} in {self.owner_name}"


# Minimal protocol for the process-wide logging sink installed by the host
@runtime_checkable
class LoggingSink(Protocol):
    def log(self, level: int, message: str, cause: Optional[BaseException] = None) -> None: ...
    def is_loggable(self, level: int) -> bool: ...
