"""Module identity of a source unit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceUnitModuleInfo:
    """Represents where a source unit lands in the documentation."""

    id: str
    file_name_without_ext: str
    is_main: bool
