"""Running Belt: fetch application secrets and inject them into a pipeline."""

import logging

from .client import DSMClient
from .config import RunbConfig
from .dispatcher import dispatch, resolve_tool
from .errors import DisabledError
from .logging_utils import SecretRedactingFilter
from .models import InjectionResult
from .normalizer import normalize

logger = logging.getLogger(__name__)


def run_belt(
    config: RunbConfig,
    tool: str,
    application: str,
    system: str,
    environment: str,
    client: DSMClient | None = None,
    redactor: SecretRedactingFilter | None = None,
) -> InjectionResult:
    """Read the application's secrets and write them in the tool's format.

    Args:
        config: Plugin configuration.
        tool: CI/CD tool identifier.
        application: Application name.
        system: Application system.
        environment: Application environment.
        client: DSM client to use. One is built from config when omitted.
        redactor: Log filter to register the secret values with.

    Returns:
        InjectionResult with the variables that were written.

    Raises:
        DisabledError: If SENHASEGURA_DISABLE_RUNB is set. Nothing else runs.
        InvalidToolError: If the tool is unknown, before any network call.
        UpstreamError: If reading the secrets fails.
        TypeMismatchError: If a secret field is not a string.
        InjectionIOError: If writing the variables file fails.
    """
    if config.disabled:
        raise DisabledError()

    selected = resolve_tool(tool)

    if client is None:
        with DSMClient(config) as owned_client:
            secrets = owned_client.read_data(application, system, environment)
    else:
        secrets = client.read_data(application, system, environment)

    variables = normalize(secrets)
    if redactor is not None:
        redactor.add_values(variables.values())

    injected = dispatch(selected, variables, config.secrets_file)
    return InjectionResult(tool=selected.value, path=config.secrets_file, variables=injected)
