"""DSM API client for reading application secrets.

Authenticates with OAuth2 client credentials and reads the secrets bound to
an application/system/environment triple. Every failure is reported as an
UpstreamError so no output is written for a failed read.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import RunbConfig
from .encoding import encode_environment, encode_mapping_file
from .errors import ConfigurationError, UpstreamError
from .models import ApplicationData, Secret

logger = logging.getLogger(__name__)

TOKEN_PATH = "/iso/oauth2/token"
APPLICATION_PATH = "/iso/dapp/application"
USER_AGENT = "senhasegura-runb/1.0"


class DSMClient:
    """Client for the DSM application secrets endpoint."""

    def __init__(self, config: RunbConfig, http_client: httpx.Client | None = None):
        """Initialize the client.

        Args:
            config: Plugin configuration. api_url is required.
            http_client: Optional pre-built httpx client (not closed by us).

        Raises:
            ConfigurationError: If no API URL is configured.
        """
        if not config.api_url:
            raise ConfigurationError(
                "SENHASEGURA_URL environment variable or api_url config key is required"
            )
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=config.timeout,
            verify=config.verify_ssl,
            headers={"User-Agent": USER_AGENT},
        )
        self._token: str | None = None

    def __enter__(self) -> "DSMClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _url(self, path: str) -> str:
        return f"{self.config.api_url}{path}"

    def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        url = self._url(path)
        logger.debug("POST %s", url)
        try:
            response = self._client.post(url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("DSM request timed out: %s", e)
            raise UpstreamError(f"DSM request to {path} timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error("DSM request error: %s", e)
            raise UpstreamError(f"DSM request to {path} failed: {e}") from e

        if response.status_code == 401:
            raise UpstreamError(
                "DSM authentication failed. Client credentials may be invalid.",
                status_code=401,
            )
        if response.status_code >= 400:
            logger.error(
                "DSM request failed: HTTP %d - %s", response.status_code, response.text[:200]
            )
            raise UpstreamError(
                f"DSM request to {path} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"DSM returned a non-JSON response for {path}",
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise UpstreamError(
                f"DSM returned an unexpected response for {path}",
                status_code=response.status_code,
            )
        return body

    def authenticate(self) -> str | None:
        """Obtain a bearer token using OAuth2 client credentials.

        Returns:
            The access token, or None when no client credentials are set.

        Raises:
            UpstreamError: If the token request fails.
        """
        if not self.config.has_client_credentials:
            logger.debug("No client credentials configured, skipping authentication")
            return None

        body = self._post(
            TOKEN_PATH,
            data={"grant_type": "client_credentials"},
            auth=(self.config.client_id, self.config.client_secret),
        )
        token = body.get("access_token")
        if not isinstance(token, str) or not token:
            raise UpstreamError("DSM token response did not contain an access_token")

        self._token = token
        logger.info("Authenticated with DSM")
        return token

    def read_data(self, application: str, system: str, environment: str) -> list[Secret]:
        """Read the secrets registered for an application.

        The encoded process environment and mapping file are sent along so
        the server can record the execution context.

        Args:
            application: Application name.
            system: Application system.
            environment: Application environment.

        Returns:
            Secret records in server order.

        Raises:
            UpstreamError: If the request fails or the response is malformed.
        """
        if self._token is None:
            self.authenticate()

        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        form = {
            "application": application,
            "system": system,
            "environment": environment,
            "environment_variables": encode_environment(),
            "map_file": encode_mapping_file(self.config.mapping_file),
        }

        logger.info(
            "Reading secrets for application=%s system=%s environment=%s",
            application,
            system,
            environment,
        )
        body = self._post(APPLICATION_PATH, data=form, headers=headers)

        payload = body.get("application", body)
        if not isinstance(payload, dict):
            raise UpstreamError("DSM response 'application' field is not an object")
        try:
            data = ApplicationData.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError(f"DSM returned malformed secrets: {e}") from e

        logger.info("Received %d secret(s)", len(data.secrets))
        return data.secrets
