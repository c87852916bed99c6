"""Base64 helpers for the context sent along with a secrets request."""

import base64
import logging
import os
from collections.abc import Mapping

logger = logging.getLogger(__name__)


def replace_specials(text: str) -> str:
    """Make base64 text safe to send as a form field."""
    return text.replace("+", "-").replace("/", "_").rstrip("=")


def _encode(text: str) -> str:
    return replace_specials(base64.b64encode(text.encode("utf-8")).decode("ascii"))


def encode_environment(environ: Mapping[str, str] | None = None) -> str:
    """Encode the process environment as NAME=value lines."""
    if environ is None:
        environ = os.environ
    return _encode("\n".join(f"{key}={value}" for key, value in environ.items()))


def encode_mapping_file(path: str | None) -> str:
    """Encode the contents of the variable mapping file.

    Returns an empty string when no mapping file is configured or it cannot
    be read.
    """
    if not path:
        logger.debug("Mapping file not found, proceeding...")
        return ""

    logger.debug("Using mapping file: %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        logger.warning("Could not read mapping file %s: %s", path, e)
        return ""

    return _encode(content)
