from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SideEffects:
    """Which best-effort secondary writes a transaction actually made."""

    activity: bool = False
    notification: bool = False


@dataclass(frozen=True)
class TransactionResult(Generic[T]):
    """Primary value of a committed transaction plus its secondary effects.

    A transaction whose primary entity does not exist returns ``None``
    instead of a result, so holding one of these means the primary write
    went through.
    """

    value: T
    effects: SideEffects = field(default_factory=SideEffects)
