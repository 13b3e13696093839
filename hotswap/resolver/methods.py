from __future__ import annotations
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from hotswap.errors import ArgumentMismatch
from hotswap.models import MemberDescriptor
from hotswap.utils.logging_sink import is_enabled, emit
from .hierarchy import ancestors, qualified_name, storage_name

_MISSING = object()
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _function_of(entry: object) -> object:
    if isinstance(entry, (staticmethod, classmethod)):
        return entry.__func__
    return entry


def _is_method_entry(entry: object) -> bool:
    if isinstance(entry, (staticmethod, classmethod)):
        return True
    return callable(entry) and not isinstance(entry, type)


def _takes_leading_self(entry: object, bound: bool) -> bool:
    """Whether the first positional parameter is supplied by binding."""
    if isinstance(entry, staticmethod):
        return False
    if isinstance(entry, classmethod):
        return True
    return bound


def positional_parameters(func: object, skip_first: bool) -> Optional[List[inspect.Parameter]]:
    """Positional parameters of ``func``; None when it has no introspectable signature."""
    try:
        sig = inspect.signature(func)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    params = [p for p in sig.parameters.values() if p.kind in _POSITIONAL]
    if skip_first and params:
        params = params[1:]
    return params


def _type_hints(func: object) -> dict:
    try:
        return typing.get_type_hints(func)
    except Exception:
        # Unresolvable forward references fall back to the raw annotations
        return {}


def _annotation_matches(annotation: Any, wanted: Any) -> bool:
    if annotation is inspect.Parameter.empty or annotation is Any:
        return True
    if annotation is wanted:
        return True
    if isinstance(annotation, str) and isinstance(wanted, type):
        return annotation in (wanted.__name__, wanted.__qualname__, qualified_name(wanted))
    try:
        return bool(annotation == wanted)
    except Exception:
        return False


def signature_matches(func: object, skip_first: bool, param_types: Optional[Sequence[Any]]) -> bool:
    """Exact match of the positional signature against ``param_types``.

    ``None`` param types match by name only; so does a callable whose
    signature cannot be introspected.
    """
    if param_types is None:
        return True
    params = positional_parameters(func, skip_first)
    if params is None:
        return True
    if len(params) != len(param_types):
        return False
    hints = _type_hints(func)
    return all(
        _annotation_matches(hints.get(p.name, p.annotation), wanted)
        for p, wanted in zip(params, param_types)
    )


def check_arguments(func: Callable[..., Any], args: Sequence[Any], member: MemberDescriptor) -> None:
    """Raise ArgumentMismatch when ``args`` cannot be bound to ``func``."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return
    try:
        sig.bind(*args)
    except TypeError as e:
        raise ArgumentMismatch(f"Cannot call {member.describe()} with {len(args)} argument(s): {e}", member) from e


@dataclass(frozen=True)
class MethodHandle:
    """A resolved method: declaring class, storage name and the raw class-dict entry."""
    declaring: type
    storage: str
    entry: object

    def bind(self, receiver: Optional[object], owner: type) -> Callable[..., Any]:
        """Bind to ``receiver`` (or ``owner`` for class-level calls) without
        going through ordinary attribute lookup on the receiver.
        """
        entry = self.entry
        if isinstance(entry, staticmethod):
            return entry.__func__
        if isinstance(entry, classmethod):
            cls = type(receiver) if receiver is not None else owner
            return types.MethodType(entry.__func__, cls)
        if receiver is None:
            return entry  # type: ignore[return-value]
        if isinstance(entry, types.FunctionType):
            return types.MethodType(entry, receiver)
        binder = getattr(type(entry), "__get__", None)
        if binder is None:
            return entry  # type: ignore[return-value]
        return binder(entry, receiver, type(receiver))


def find_method(
    owner: type,
    name: str,
    param_types: Optional[Sequence[Any]],
    bound: bool,
) -> Optional[MethodHandle]:
    """Walk the ancestors of ``owner`` for the first class declaring ``name``
    with a matching signature. ``bound`` says whether the call supplies a receiver.
    """
    tracing = is_enabled(logging.DEBUG)
    for index, cls in enumerate(ancestors(owner)):
        if index and tracing:
            emit(logging.DEBUG, f"get_method_by_name:Looking in {qualified_name(cls)} now")
        storage = storage_name(cls, name)
        entry = cls.__dict__.get(storage, _MISSING)
        if entry is _MISSING or not _is_method_entry(entry):
            continue
        skip_first = _takes_leading_self(entry, bound)
        if signature_matches(_function_of(entry), skip_first, param_types):
            return MethodHandle(cls, storage, entry)
    return None
