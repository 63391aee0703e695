"""Per-run extraction state and the extraction pass over a typed program."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ts2jsdoc.declaration_extractor import DeclarationExtractor, UnitExtraction
from ts2jsdoc.module_path_resolver import ModulePathResolver
from ts2jsdoc.source_unit_model import SourceUnitModel
from ts2jsdoc.type_reference_resolver import TypeReferenceResolver
from ts2jsdoc.typed_program import check_errors

if TYPE_CHECKING:
    from ts2jsdoc.typed_program import TypedProgram

logger = logging.getLogger(__name__)


@dataclass
class ExtractionSession:
    """State of one extraction run.

    ``module_to_model`` owns every descriptor; ``main_mappings`` records what
    the main unit re-exports (origin module id -> names) until flattening
    consumes it; ``path_rewrites`` maps pre-flattening qualified paths to
    their new location.
    """

    main_module_id: str | None
    module_to_model: dict[str, SourceUnitModel] = field(default_factory=dict)
    main_mappings: dict[str, list[str]] = field(default_factory=dict)
    path_rewrites: dict[str, str] = field(default_factory=dict)

    def add(self, extraction: UnitExtraction) -> None:
        """Merge one unit's results into the model of its module."""
        module_id = extraction.module_info.id
        existing = self.module_to_model.get(module_id)
        if existing is None:
            self.module_to_model[module_id] = extraction.model
        else:
            existing.extend(extraction.model)

        for origin_id, names in extraction.reexports.items():
            self.main_mappings.setdefault(origin_id, []).extend(names)


def extract_program(
    program: TypedProgram,
    package_name: str | None,
    relative_out_dir: str,
    main_file: str | None = None,
) -> ExtractionSession:
    """Extract the documentation model of every non-declaration unit."""
    check_errors(program)

    module_paths = ModulePathResolver(
        package_name,
        relative_out_dir,
        program.common_source_directory,
        main_file,
    )
    type_resolver = TypeReferenceResolver(program, module_paths)
    extractor = DeclarationExtractor(program, module_paths, type_resolver)

    session = ExtractionSession(main_module_id=package_name)
    for unit in program.source_units():
        if unit.is_declaration_file:
            continue
        extraction = extractor.extract(unit)
        if extraction is None:
            continue
        logger.debug("Extracted %s as %s", unit.file_name, extraction.module_info.id)
        session.add(extraction)
    return session
