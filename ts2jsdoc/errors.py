"""Exceptions raised while extracting the documentation model."""


class Ts2JsdocError(Exception):
    """Base class for errors that abort a generation run."""


class TypeResolutionError(Ts2JsdocError):
    """Raised when a type the extractor must record cannot be named."""

    def __init__(self, message: str, source_text: str = "") -> None:
        """Keep the offending source text for diagnostics."""
        self.source_text = source_text
        if source_text:
            message = f"{message}: {source_text}"
        super().__init__(message)


class ProgramDiagnosticsError(Ts2JsdocError):
    """Raised when the type-checked program reports errors."""

    def __init__(self, messages: list[str]) -> None:
        """Join all diagnostics into one message."""
        self.messages = messages
        super().__init__("\n".join(messages))


class ProgramDumpError(Ts2JsdocError):
    """Raised when a typed program dump is malformed."""


class ConfigError(Ts2JsdocError):
    """Raised when required generator options are missing."""
