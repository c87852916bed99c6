"""Write normalized variables to the pipeline's variables file."""

import logging
import os
from collections.abc import Mapping

from .errors import InjectionIOError
from .formats import FormatTemplate

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_FILE = ".runb.vars"

_OPEN_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_APPEND
_FILE_MODE = 0o660


def _opener(path: str, flags: int) -> int:
    return os.open(path, _OPEN_FLAGS, _FILE_MODE)


def inject(
    variables: Mapping[str, str],
    template: FormatTemplate,
    path: str | os.PathLike[str] = DEFAULT_SECRETS_FILE,
) -> dict[str, str]:
    """Append one rendered line per variable to the variables file.

    The file is created when missing and never truncated, so several runs in
    the same pipeline accumulate into it. Lines are not deduplicated.

    Args:
        variables: Variable name to value mapping.
        template: Line template of the selected tool.
        path: Variables file to append to.

    Returns:
        The variables that were written. Empty when there was nothing to do.

    Raises:
        InjectionIOError: If the file cannot be opened, written or closed.
            Lines written before the failure stay in the file.
    """
    logger.info("Injecting secrets!")

    if not variables:
        logger.info("No secrets to be injected!")
        return {}

    path = os.fspath(path)

    try:
        with open(path, "a", encoding="utf-8", opener=_opener) as fh:
            for name, value in variables.items():
                logger.debug("Injecting secret into %s: %s", path, name)
                fh.write(template.render(name, value))
                # Surface write errors here rather than on close
                fh.flush()
    except OSError as e:
        logger.error("Failed to write secrets file %s: %s", path, e.strerror or e)
        raise InjectionIOError(f"Failed to write secrets file {path}: {e}") from e

    logger.info("Secrets injected! %d variable(s) written to %s", len(variables), path)
    return dict(variables)
