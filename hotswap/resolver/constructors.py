from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .methods import signature_matches


@dataclass(frozen=True)
class ConstructorHandle:
    """The initializer declared directly on ``target``.

    ``init`` is None for a class that declares no ``__init__``: it only has
    the implicit no-argument constructor, which chains to the inherited
    initializer.
    """
    target: type
    init: Optional[Any]

    def allocate(self, args: Sequence[Any]) -> object:
        """Create the bare instance, bypassing the metaclass ``__call__``."""
        new = self.target.__new__
        if new is object.__new__:
            return object.__new__(self.target)
        return new(self.target, *args)

    def initialize(self, instance: object, args: Sequence[Any]) -> None:
        if self.init is None:
            super(self.target, instance).__init__()  # type: ignore[misc]
        else:
            self.init(instance, *args)


def find_constructor(target: type, param_types: Optional[Sequence[Any]]) -> Optional[ConstructorHandle]:
    """Constructors are not inherited: only ``target``'s own ``__init__`` is considered."""
    init = target.__dict__.get("__init__")
    if init is None:
        if not param_types:
            return ConstructorHandle(target, None)
        return None
    if signature_matches(init, True, param_types):
        return ConstructorHandle(target, init)
    return None
