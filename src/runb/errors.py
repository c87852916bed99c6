"""Error taxonomy for the Running Belt plugin.

Every failure the plugin reports derives from RunbError so the CLI can map
them to a single exit status. Where a failure also has a natural builtin
category (bad type, bad value, I/O) the error inherits from it too.
"""


class RunbError(Exception):
    """Base class for all plugin errors."""


class ConfigurationError(RunbError, ValueError):
    """Configuration is missing or invalid."""


class DisabledError(RunbError):
    """The plugin was disabled through SENHASEGURA_DISABLE_RUNB."""

    def __init__(
        self, message: str = "SENHASEGURA_DISABLE_RUNB is set to true. Plugin is disabled."
    ):
        super().__init__(message)


class UpstreamError(RunbError):
    """The secret retrieval call to the DSM API failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TypeMismatchError(RunbError, TypeError):
    """A secret field that must be a string was not."""

    def __init__(self, kind: str, field: str, value: object):
        self.kind = kind
        self.field = field
        self.actual_type = type(value).__name__
        super().__init__(
            f"Field '{field}' in {kind} must be a string, got {self.actual_type}"
        )


class InvalidToolError(RunbError, ValueError):
    """The requested CI/CD tool identifier is not supported."""

    def __init__(self, tool: str, valid_tools: list[str]):
        self.tool = tool
        self.valid_tools = list(valid_tools)
        valid = ", ".join(self.valid_tools[:-1]) + f" or {self.valid_tools[-1]}"
        super().__init__(
            f"Tool '{tool}' is invalid, it must be one of the following values: {valid}"
        )


class InjectionIOError(RunbError, OSError):
    """Writing the variables file failed."""
