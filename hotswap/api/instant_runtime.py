"""
Reflective access bridge for hot-swapped code.

Replacement classes loaded at runtime call these functions to reach the
private fields, private/protected methods, class-level members and
constructors of the objects created by the code they replace. Members are
looked up through the ancestor chain on every call; nothing is cached.

Bridge failures raise ``hotswap.errors`` exceptions. Exceptions raised by
the invoked method or constructor reach the caller unchanged.

Usage:
    from hotswap import read_field, invoke_instance_method

    count = read_field(Derived, "__count", obj)
    total = invoke_instance_method(obj, "__total", [int], [count])
"""
import inspect
import logging
from typing import Any, Optional, Sequence

from hotswap.errors import AccessDenied, ArgumentMismatch, InstantiationFailure, MemberNotFound
from hotswap.models import MemberDescriptor, MemberKind, TypeRef
from hotswap.resolver import (
    FieldHandle,
    check_arguments,
    find_constructor,
    find_field,
    find_method,
    resolve_type,
)
from hotswap.resolver.hierarchy import qualified_name
from hotswap.utils.logging_sink import emit, install_logger, trace

__all__ = [
    "install_logger",
    "read_field",
    "write_field",
    "read_static_field",
    "write_static_field",
    "invoke_instance_method",
    "invoke_static_method",
    "construct",
    "trace",
]


def _severe(message: str, cause: Optional[BaseException]) -> None:
    emit(logging.ERROR, message, cause)


def _check(func: Any, args: Sequence[Any], member: MemberDescriptor) -> None:
    try:
        check_arguments(func, args, member)
    except ArgumentMismatch as e:
        _severe(str(e), e)
        raise


def _owner(ref: TypeRef, member: MemberDescriptor) -> type:
    cls = resolve_type(ref)
    if cls is None:
        error = MemberNotFound(member, f"cannot resolve type {ref!r}")
        _severe(str(error), error)
        raise error
    return cls


def _field(owner_ref: TypeRef, member: MemberDescriptor, instance: Optional[object]) -> FieldHandle:
    field_name = member.name
    owner = _owner(owner_ref, member)
    handle = find_field(owner, field_name, instance)
    if handle is None:
        error = MemberNotFound(member)
        _severe(str(error), error)
        raise error
    return handle


def read_field(owner_type: TypeRef, field_name: str, instance: Optional[object] = None) -> Any:
    """Read ``field_name`` declared on ``owner_type`` or any of its ancestors.

    With ``instance`` None the class-level (static) value is returned.
    """
    member = MemberDescriptor(owner_type, field_name, MemberKind.FIELD)
    handle = _field(owner_type, member, instance)
    try:
        return handle.get(instance)
    except (AttributeError, TypeError) as e:
        scope = " static" if instance is None else ""
        _severe(f"Exception during{scope} get_field {field_name}", e)
        raise AccessDenied(f"Cannot read field {field_name}: {e}", member) from e


def write_field(owner_type: TypeRef, field_name: str, instance: Optional[object], value: Any) -> None:
    """Set ``field_name`` declared on ``owner_type`` or any of its ancestors.

    With ``instance`` None the value is stored on the declaring class.
    """
    member = MemberDescriptor(owner_type, field_name, MemberKind.FIELD)
    handle = _field(owner_type, member, instance)
    try:
        handle.set(instance, value)
    except (AttributeError, TypeError) as e:
        _severe(f"Exception during set_field {field_name}", e)
        raise AccessDenied(f"Cannot write field {field_name}: {e}", member) from e


def read_static_field(owner_type: TypeRef, field_name: str) -> Any:
    return read_field(owner_type, field_name, None)


def write_static_field(owner_type: TypeRef, field_name: str, value: Any) -> None:
    write_field(owner_type, field_name, None, value)


def invoke_instance_method(
    receiver: object,
    method_name: str,
    param_types: Optional[Sequence[type]],
    args: Sequence[Any] = (),
) -> Any:
    """Invoke ``method_name`` on ``receiver``, found by walking its type's ancestors.

    Whatever the method raises propagates unchanged.
    """
    if receiver is None:
        raise TypeError("invoke_instance_method needs a receiver; use invoke_static_method for class-level calls")
    trace(f"protected_method:{method_name}", "on", receiver)

    owner = type(receiver)
    member = MemberDescriptor(owner, method_name, MemberKind.METHOD, param_types)
    handle = find_method(owner, method_name, param_types, bound=True)
    if handle is None:
        error = MemberNotFound(member)
        _severe(f"Exception while invoking {method_name}", error)
        raise error

    try:
        target = handle.bind(receiver, owner)
    except (AttributeError, TypeError) as e:
        _severe(f"Exception while invoking {method_name}", e)
        raise AccessDenied(f"Cannot bind {member.describe()}: {e}", member) from e
    _check(target, args, member)
    return target(*args)


def invoke_static_method(
    owner_type: TypeRef,
    method_name: str,
    param_types: Optional[Sequence[type]],
    args: Sequence[Any] = (),
) -> Any:
    """Invoke a class-level ``method_name`` found on ``owner_type`` or its ancestors.

    Whatever the method raises propagates unchanged.
    """
    member = MemberDescriptor(owner_type, method_name, MemberKind.METHOD, param_types)
    owner = _owner(owner_type, member)
    trace(f"protected_static_method:{method_name}", "on", qualified_name(owner))

    handle = find_method(owner, method_name, param_types, bound=False)
    if handle is None:
        error = MemberNotFound(member)
        _severe(f"Exception while invoking {method_name}", error)
        raise error

    try:
        target = handle.bind(None, owner)
    except (AttributeError, TypeError) as e:
        _severe(f"Exception while invoking {method_name}", e)
        raise AccessDenied(f"Cannot bind {member.describe()}: {e}", member) from e
    _check(target, args, member)
    return target(*args)


def construct(target_type: TypeRef, param_types: Optional[Sequence[type]], args: Sequence[Any] = ()) -> Any:
    """Create an instance of ``target_type`` through its own declared initializer.

    Whatever ``__new__`` or ``__init__`` raises propagates unchanged.
    """
    member = MemberDescriptor(target_type, "__init__", MemberKind.CONSTRUCTOR, param_types)
    target = _owner(target_type, member)
    handle = find_constructor(target, param_types)
    if handle is None:
        error = MemberNotFound(member)
        _severe("Exception while resolving constructor", error)
        raise error

    if handle.init is not None:
        _check(handle.init, (None, *args), member)
    elif args:
        error = ArgumentMismatch(
            f"{qualified_name(target)} only has the implicit no-argument constructor, "
            f"got {len(args)} argument(s)",
            member,
        )
        _severe(str(error), error)
        raise error

    if inspect.isabstract(target):
        error = InstantiationFailure(f"Cannot instantiate abstract class {qualified_name(target)}", member)
        _severe(f"Exception while instantiating {qualified_name(target)}", error)
        raise error

    instance = handle.allocate(args)
    if not isinstance(instance, target):
        error = InstantiationFailure(
            f"{qualified_name(target)}.__new__ returned {type(instance).__name__}, "
            f"not an instance of {target.__name__}",
            member,
        )
        _severe(f"Exception while instantiating {qualified_name(target)}", error)
        raise error
    handle.initialize(instance, args)
    return instance
