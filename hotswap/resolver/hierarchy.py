"""Ancestor-chain walking, private-name mangling and type lookup."""

from __future__ import annotations
import importlib
import logging
from typing import Any, Dict, Iterator, Optional

from hotswap.models import TypeRef

logger = logging.getLogger(__name__)


def resolve_type(ref: TypeRef) -> Optional[type]:
    """Return the class for ``ref``: a class, or a dotted path such as
    ``"package.module.Outer.Inner"``. None when the path does not resolve.
    """
    if isinstance(ref, type):
        return ref
    if not isinstance(ref, str):
        raise TypeError(f"Expected a class or a dotted path, got {type(ref).__name__}")

    parts = ref.split(".")
    # Longest importable module prefix wins, the rest is an attribute path
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attr in parts[split:]:
                target = getattr(target, attr)
        except AttributeError:
            logger.debug("Type path %s not found in module %s", ref, module_name)
            return None
        return target if isinstance(target, type) else None
    return None


def ancestors(cls: type) -> Iterator[type]:
    """Yield ``cls`` and each successive ancestor, most derived first."""
    yield from cls.__mro__


def storage_name(cls: type, name: str) -> str:
    """The name a member called ``name`` is stored under when declared in ``cls``.

    ``__name`` declared in class ``Base`` lives under ``_Base__name``.
    """
    if not name.startswith("__") or name.endswith("__"):
        return name
    stripped = cls.__name__.lstrip("_")
    if not stripped:
        return name
    return f"_{stripped}{name}"


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def instance_dict(instance: object) -> Dict[str, Any]:
    """The instance ``__dict__``, read without triggering attribute hooks."""
    try:
        return object.__getattribute__(instance, "__dict__")
    except (AttributeError, TypeError):
        return {}
