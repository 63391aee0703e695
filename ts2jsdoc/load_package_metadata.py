"""Logic for reading the package name and entry point from package.json."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PLACEHOLDER_PACKAGE_NAME = "packageJsonNotDefined"


def load_package_metadata(base_path: Path) -> dict[str, Any]:
    """Return ``name`` and ``main`` of the package, with a placeholder name on failure."""
    package_file = base_path / "package.json"
    try:
        data = json.loads(package_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Cannot read %s (%s), using placeholder package name", package_file, e)
        return {"name": PLACEHOLDER_PACKAGE_NAME, "main": None}

    if not isinstance(data, dict):
        logger.warning("Unexpected content in %s, using placeholder package name", package_file)
        return {"name": PLACEHOLDER_PACKAGE_NAME, "main": None}
    return {
        "name": data.get("name") or PLACEHOLDER_PACKAGE_NAME,
        "main": data.get("main"),
    }
