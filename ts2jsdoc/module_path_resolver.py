"""Logic for mapping source units to documentation module identifiers."""

import posixpath

from ts2jsdoc.source_unit_module_info import SourceUnitModuleInfo
from ts2jsdoc.syntax import Node

NODE_MODULE_ID = "node"
INDEX_NAME = "index"


class ModulePathResolver:
    """Computes stable module identifiers from file locations and package config."""

    def __init__(
        self,
        package_name: str | None,
        relative_out_dir: str,
        common_source_directory: str,
        main_file: str | None = None,
    ) -> None:
        """Initialize the resolver with the package layout."""
        self.package_name = package_name
        out_dir = posixpath.normpath(relative_out_dir.replace("\\", "/") or ".").strip("/")
        # "." means the output lands next to package.json, adding no segment
        self.relative_out_dir = "" if out_dir == "." else out_dir
        self.common_source_directory = common_source_directory.replace("\\", "/")
        self.main_file = main_file.replace("\\", "/") if main_file else None

    def module_info(self, unit: Node) -> SourceUnitModuleInfo:
        """Return the module identifier of a source unit and whether it is main."""
        if unit.is_declaration_file and unit.file_name.endswith("node.d.ts"):
            return SourceUnitModuleInfo(NODE_MODULE_ID, "", is_main=False)

        file_name = unit.file_name.replace("\\", "/")
        dot = file_name.rfind(".")
        file_name_without_ext = file_name[:dot] if dot > file_name.rfind("/") else file_name
        name = self._relative_name(file_name_without_ext)

        segments: list[str] = []
        if self.package_name is not None:
            segments.append(self.package_name)
            if name != INDEX_NAME:
                segments.append(self.relative_out_dir)
        else:
            segments.append(self.relative_out_dir)
        if name != INDEX_NAME:
            segments.append(name)
        module_id = "/".join(s for s in segments if s)

        is_main = self._is_main(file_name_without_ext)
        if is_main and self.package_name is not None:
            module_id = self.package_name
        return SourceUnitModuleInfo(module_id, file_name_without_ext, is_main)

    def _relative_name(self, file_name_without_ext: str) -> str:
        if not self.common_source_directory:
            return file_name_without_ext
        return posixpath.relpath(file_name_without_ext, self.common_source_directory)

    def _is_main(self, file_name_without_ext: str) -> bool:
        if self.main_file is None:
            return file_name_without_ext.endswith("/main")

        # package.json "main" points into the output directory
        if self.relative_out_dir:
            main = posixpath.relpath(self.main_file, self.relative_out_dir)
        else:
            main = posixpath.normpath(self.main_file)
        candidate = f"{file_name_without_ext}.js"
        return candidate == main or candidate.endswith("/" + main)
