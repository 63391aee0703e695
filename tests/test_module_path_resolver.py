"""Tests for module identifier computation."""

from ts2jsdoc.module_path_resolver import ModulePathResolver
from ts2jsdoc.syntax import Node, SyntaxKind


def unit(file_name: str, *, is_declaration_file: bool = False) -> Node:
    """Create an empty source unit."""
    return Node(
        kind=SyntaxKind.SOURCE_FILE,
        file_name=file_name,
        is_declaration_file=is_declaration_file,
    )


def test_regular_file_gets_out_dir_segment() -> None:
    """Verify package name, output directory and relative name are joined."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src")
    info = resolver.module_info(unit("/work/src/util.ts"))
    assert info.id == "my-pkg/out/util"
    assert info.file_name_without_ext == "/work/src/util"
    assert not info.is_main


def test_nested_file() -> None:
    """Verify nested directories are kept in the identifier."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src")
    assert resolver.module_info(unit("/work/src/sub/index.ts")).id == "my-pkg/out/sub/index"


def test_root_index_is_package_name() -> None:
    """Verify the root index file maps to the bare package name."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src")
    assert resolver.module_info(unit("/work/src/index.ts")).id == "my-pkg"


def test_conventional_main_without_config() -> None:
    """Verify a file named main is the entry point when none is configured."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src")
    info = resolver.module_info(unit("/work/src/main.ts"))
    assert info.is_main
    assert info.id == "my-pkg"


def test_configured_main_file() -> None:
    """Verify the configured entry point is matched on a path segment boundary."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src", main_file="out/api.js")
    api = resolver.module_info(unit("/work/src/api.ts"))
    assert api.is_main
    assert api.id == "my-pkg"

    other = resolver.module_info(unit("/work/src/myapi.ts"))
    assert not other.is_main
    assert other.id == "my-pkg/out/myapi"

    # With a configured entry point the conventional name no longer applies
    assert not resolver.module_info(unit("/work/src/main.ts")).is_main


def test_node_declarations_are_special_cased() -> None:
    """Verify the runtime's ambient declarations map to a fixed identifier."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src")
    info = resolver.module_info(
        unit("/work/node_modules/@types/node/node.d.ts", is_declaration_file=True)
    )
    assert info.id == "node"
    assert not info.is_main


def test_without_package_name() -> None:
    """Verify the output directory starts the identifier when no package is known."""
    resolver = ModulePathResolver(None, "out", "/work/src")
    assert resolver.module_info(unit("/work/src/util.ts")).id == "out/util"


def test_windows_separators() -> None:
    """Verify backslashes are normalized before computing the identifier."""
    resolver = ModulePathResolver("my-pkg", "out", "C:/work/src")
    assert resolver.module_info(unit("C:\\work\\src\\util.ts")).id == "my-pkg/out/util"


def test_identifier_is_deterministic() -> None:
    """Verify the same unit always yields the same identifier."""
    resolver = ModulePathResolver("my-pkg", "out", "/work/src")
    source = unit("/work/src/a/b.ts")
    assert resolver.module_info(source) == resolver.module_info(source)


def test_output_next_to_package_adds_no_segment() -> None:
    """Verify an output directory equal to the project root is left out of ids."""
    for out_dir in (".", "", "./"):
        resolver = ModulePathResolver("pkg", out_dir, "/w/src")
        assert resolver.module_info(unit("/w/src/util.ts")).id == "pkg/util"
        assert resolver.module_info(unit("/w/src/index.ts")).id == "pkg"

    bare = ModulePathResolver(None, ".", "/w/src")
    assert bare.module_info(unit("/w/src/util.ts")).id == "util"


def test_out_dir_is_normalized() -> None:
    """Verify redundant path parts in the output directory are dropped."""
    resolver = ModulePathResolver("pkg", "./out/", "/w/src")
    assert resolver.module_info(unit("/w/src/util.ts")).id == "pkg/out/util"


def test_main_file_with_root_out_dir() -> None:
    """Verify the entry point is still found when output goes to the root."""
    resolver = ModulePathResolver("pkg", ".", "/w/src", main_file="api.js")
    assert resolver.module_info(unit("/w/src/api.ts")).is_main
