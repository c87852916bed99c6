"""Route variables to the output format of the selected CI/CD tool."""

import logging
import os
from collections.abc import Mapping

from .errors import InvalidToolError
from .formats import Tool, get_template, valid_tools
from .injector import DEFAULT_SECRETS_FILE, inject

logger = logging.getLogger(__name__)


def resolve_tool(tool: str | Tool) -> Tool:
    """Look up a tool by its identifier.

    Matching is case-sensitive and there are no aliases.

    Raises:
        InvalidToolError: If the identifier is not supported.
    """
    if isinstance(tool, Tool):
        return tool
    try:
        return Tool(tool)
    except ValueError:
        raise InvalidToolError(tool, valid_tools()) from None


def dispatch(
    tool: str | Tool,
    variables: Mapping[str, str],
    path: str | os.PathLike[str] = DEFAULT_SECRETS_FILE,
) -> dict[str, str]:
    """Inject variables using the format of the given tool.

    Args:
        tool: Tool identifier, e.g. "github" or "linux".
        variables: Normalized variable mapping.
        path: Variables file to append to.

    Returns:
        The variables that were written.

    Raises:
        InvalidToolError: If the tool is unknown. No file is touched.
        InjectionIOError: If writing the file fails.
    """
    selected = resolve_tool(tool)
    logger.debug("Using %s output format", selected.value)
    return inject(variables, get_template(selected), path)
