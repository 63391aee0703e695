"""Logic for loading per-class example snippets."""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ts2jsdoc.models import Example

DEFAULT_WORKERS = 4


def list_class_example_dirs(examples_dir: Path) -> set[str]:
    """Return the names of class example directories (no dots, not hidden)."""
    return {
        p.name
        for p in examples_dir.iterdir()
        if not p.name.startswith(".") and "." not in p.name and p.is_dir()
    }


def _read_example(path: Path) -> Example:
    return Example(
        name=path.stem,
        content=path.read_text(encoding="utf-8"),
        lang=path.suffix,
    )


def load_class_examples(
    examples_dir: Path,
    class_names: Iterable[str],
    max_workers: int = DEFAULT_WORKERS,
) -> dict[str, list[Example]]:
    """Load the snippets of every class that has an example directory.

    Files are read concurrently; each class's examples are sorted by name so
    the result does not depend on completion order.
    """
    existing = list_class_example_dirs(examples_dir)
    files: dict[str, list[Path]] = {}
    for class_name in sorted(set(class_names) & existing):
        class_dir = examples_dir / class_name
        files[class_name] = sorted(
            p
            for p in class_dir.iterdir()
            if not p.name.startswith(".") and "." in p.name and p.is_file()
        )

    result: dict[str, list[Example]] = {}
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {
            class_name: [executor.submit(_read_example, p) for p in paths]
            for class_name, paths in files.items()
        }
        for class_name, class_futures in futures.items():
            examples = [f.result() for f in class_futures]
            result[class_name] = sorted(examples, key=lambda e: (e.name, e.lang))
    return result
