"""Flatten DSM secret records into a single variable mapping.

Each credential kind gets its own conversion function so a malformed field
is reported against the kind it came from. Later entries win on name
collisions, in the order cloud, PAM, ephemeral, key/value.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .errors import TypeMismatchError
from .models import Secret

logger = logging.getLogger(__name__)


def _to_string_map(kind: str, record: Mapping[str, Any]) -> dict[str, str]:
    """Convert a loosely typed field mapping into string pairs.

    Unset (None) fields are skipped.

    Raises:
        TypeMismatchError: If a field name or value is not a string.
    """
    result: dict[str, str] = {}
    for key, value in record.items():
        if value is None:
            continue
        if not isinstance(key, str):
            raise TypeMismatchError(kind, repr(key), key)
        if not isinstance(value, str):
            raise TypeMismatchError(kind, key, value)
        result[key] = value
    return result


def cloud_credential_to_map(credential: Mapping[str, Any]) -> dict[str, str]:
    return _to_string_map("cloud credential", credential)


def pam_credential_to_map(credential: Mapping[str, Any]) -> dict[str, str]:
    return _to_string_map("PAM credential", credential)


def ephemeral_credential_to_map(credential: Mapping[str, Any]) -> dict[str, str]:
    return _to_string_map("ephemeral credential", credential)


def key_values_to_map(key_values: Mapping[str, Any]) -> dict[str, str]:
    return _to_string_map("key/value block", key_values)


def normalize(secrets: Iterable[Secret]) -> dict[str, str]:
    """Flatten secret records into one name -> value mapping.

    Args:
        secrets: Secret records in the order returned by the API.

    Returns:
        Mapping of variable name to value. When two sub-records produce the
        same name, the one processed last wins.

    Raises:
        TypeMismatchError: If any field value is not a string. Nothing is
            returned in that case, so no partial output can be written.
    """
    variables: dict[str, str] = {}

    for secret in secrets:
        for credential in secret.cloud_credentials:
            variables.update(cloud_credential_to_map(credential))
        for credential in secret.pam_credentials:
            variables.update(pam_credential_to_map(credential))
        for credential in secret.ephemeral_credentials:
            variables.update(ephemeral_credential_to_map(credential))
        variables.update(key_values_to_map(secret.key_values))

    logger.debug("Normalized %d variable(s)", len(variables))
    return variables
