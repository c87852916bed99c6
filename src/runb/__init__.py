"""Running Belt plugin.

Reads application secrets from senhasegura DSM and writes them as
environment variable declarations in the syntax of the calling CI/CD tool.
"""

from .dispatcher import dispatch, resolve_tool
from .errors import (
    ConfigurationError,
    DisabledError,
    InjectionIOError,
    InvalidToolError,
    RunbError,
    TypeMismatchError,
    UpstreamError,
)
from .formats import TEMPLATES, FormatTemplate, Tool
from .injector import DEFAULT_SECRETS_FILE, inject
from .models import InjectionResult, Secret
from .normalizer import normalize

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_SECRETS_FILE",
    "TEMPLATES",
    "ConfigurationError",
    "DisabledError",
    "FormatTemplate",
    "InjectionIOError",
    "InjectionResult",
    "InvalidToolError",
    "RunbError",
    "Secret",
    "Tool",
    "TypeMismatchError",
    "UpstreamError",
    "dispatch",
    "inject",
    "normalize",
    "resolve_tool",
]
