"""Orchestration logic for extracting and writing the documentation model."""

import os
from pathlib import Path
from typing import Any

from ts2jsdoc.assemble_modules import assemble_modules
from ts2jsdoc.doc_renderer import DocRenderer
from ts2jsdoc.errors import ConfigError
from ts2jsdoc.extraction_session import ExtractionSession, extract_program
from ts2jsdoc.flatten_exports import flatten_exports
from ts2jsdoc.load_class_examples import DEFAULT_WORKERS, load_class_examples
from ts2jsdoc.load_package_metadata import load_package_metadata
from ts2jsdoc.models import Example
from ts2jsdoc.typed_program import TypedProgram
from ts2jsdoc.write_modules import write_modules
from ts2jsdoc.yaml_model_renderer import YamlModelRenderer


def generate(
    base_path: Path, program: TypedProgram, config: dict[str, Any]
) -> ExtractionSession:
    """Extract every unit of the program and flatten the main module's re-exports."""
    package = load_package_metadata(base_path)
    package_name = config.get("packageName") or package["name"]
    main_file = config.get("main") or package["main"]

    compiler_out_dir = config.get("outDir") or program.out_dir
    if not compiler_out_dir:
        msg = "outDir is not specified in the compilerOptions"
        raise ConfigError(msg)

    session = extract_program(
        program,
        package_name,
        _relative_out_dir(base_path, compiler_out_dir),
        main_file,
    )
    flatten_exports(session)
    return session


def generate_and_write(
    base_path: Path,
    program: TypedProgram,
    config: dict[str, Any],
    renderer: DocRenderer | None = None,
) -> int:
    """Run the full pipeline and return the number of module files written."""
    if not config.get("out"):
        msg = "Please specify out in the generator configuration"
        raise ConfigError(msg)

    session = generate(base_path, program, config)
    class_examples = _load_examples(base_path, session, config)

    units = assemble_modules(
        session,
        renderer or YamlModelRenderer(),
        config.get("externalIfNotMain"),
        class_examples,
    )

    out_root = (base_path / config["out"]).resolve()
    print(f"Generating documentation model to {out_root}")
    written = write_modules(units, out_root)
    print(f"Generated {written} module files into: {out_root}")
    return written


def _relative_out_dir(base_path: Path, compiler_out_dir: str) -> str:
    out_dir = Path(compiler_out_dir)
    if not out_dir.is_absolute():
        out_dir = base_path / out_dir
    return Path(os.path.relpath(out_dir, base_path)).as_posix()


def _load_examples(
    base_path: Path, session: ExtractionSession, config: dict[str, Any]
) -> dict[str, list[Example]] | None:
    if not config.get("examples"):
        return None

    examples_dir = (base_path / config["examples"]).resolve()
    class_names = {
        clazz.name
        for model in session.module_to_model.values()
        for clazz in model.classes
    }
    workers = int(config.get("exampleWorkers") or DEFAULT_WORKERS)
    return load_class_examples(examples_dir, class_names, max_workers=workers)
