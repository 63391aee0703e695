"""Per-module documentation model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ts2jsdoc.models import (
    ClassDescriptor,
    EnumDescriptor,
    MethodDescriptor,
    VariableDescriptor,
)

Member = Union[VariableDescriptor, EnumDescriptor]


@dataclass
class SourceUnitModel:
    """Descriptors owned by one module identifier."""

    classes: list[ClassDescriptor] = field(default_factory=list)
    functions: list[MethodDescriptor] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)

    def extend(self, other: SourceUnitModel) -> None:
        """Append another unit's descriptors, keeping order."""
        self.classes.extend(other.classes)
        self.functions.extend(other.functions)
        self.members.extend(other.members)

    def is_empty(self) -> bool:
        """Check whether nothing documentable was found."""
        return not (self.classes or self.functions or self.members)
