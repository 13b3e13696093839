"""
Bridge error taxonomy.

Only failures of the bridge itself (resolution, access, instantiation,
argument binding) are represented here. Exceptions raised by the code the
bridge invokes are never wrapped: they reach the caller as-is.
"""
from typing import Optional

from hotswap.models import MemberDescriptor


class BridgeError(Exception):
    """Base class for failures produced by the bridge itself."""

    def __init__(self, message: str, member: Optional[MemberDescriptor] = None):
        self.member = member
        super().__init__(message)


class MemberNotFound(BridgeError):
    """No class in the ancestor chain declares a matching member."""

    def __init__(self, member: MemberDescriptor, detail: str = ""):
        message = f"No such {member.describe()}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, member)


class AccessDenied(BridgeError):
    """The interpreter refused the raw read, write or bind of a resolved member."""


class InstantiationFailure(BridgeError):
    """The resolved constructor could not produce an instance of the target type."""


class ArgumentMismatch(BridgeError, TypeError):
    """Arguments do not bind to the resolved member's signature."""
