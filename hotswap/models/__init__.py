"""Data models and protocols"""
from .models import MemberDescriptor, MemberKind, LoggingSink, TypeRef

__all__ = ["MemberDescriptor", "MemberKind", "LoggingSink", "TypeRef"]
