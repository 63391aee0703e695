"""Logic for rewriting qualified module paths at render time."""

MODULE_PREFIX = "module:"
EXTERNAL_PREFIX = "external:"


class ModulePathMapper:
    """Maps qualified paths to their final form for one rendered module.

    Paths of relocated symbols are rewritten through the rewrite table. When
    rendering the main module with an external alias target configured,
    references into other modules become ``external:<Name>`` and are recorded
    in ``external_to_module``.
    """

    def __init__(
        self,
        module_id: str,
        main_module_id: str | None,
        path_rewrites: dict[str, str],
        external_if_not_main: str | None = None,
    ) -> None:
        """Initialize the mapper for the module being rendered."""
        self.module_id = module_id
        self.main_module_id = main_module_id
        self.path_rewrites = path_rewrites
        self.external_if_not_main = external_if_not_main
        self.external_to_module: dict[str, str] = {}

    def __call__(self, old_path: str) -> str:
        """Return the final path for ``old_path``."""
        if not old_path.startswith(MODULE_PREFIX):
            return old_path

        new_path = self.path_rewrites.get(old_path)
        if new_path is not None:
            return new_path

        if self.module_id == self.main_module_id and self.external_if_not_main is not None:
            dot = old_path.rfind(".")
            target_module = old_path[len(MODULE_PREFIX) : dot]
            if dot < 0 or target_module == self.main_module_id:
                return old_path
            # Renderers only show the short name of an external symbol.
            value = old_path[dot + 1 :]
            self.external_to_module[value] = target_module
            return EXTERNAL_PREFIX + value

        return old_path
