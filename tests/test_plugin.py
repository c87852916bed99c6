"""Tests for the end-to-end plugin run."""

import logging
from unittest.mock import Mock

import pytest

from runb.client import DSMClient
from runb.config import RunbConfig
from runb.errors import (
    DisabledError,
    InvalidToolError,
    TypeMismatchError,
    UpstreamError,
)
from runb.logging_utils import SecretRedactingFilter
from runb.models import Secret
from runb.plugin import run_belt


@pytest.fixture
def config(vars_file):
    return RunbConfig(api_url="https://dsm.example.com", secrets_file=str(vars_file))


@pytest.fixture
def client(sample_secrets):
    mock_client = Mock(spec=DSMClient)
    mock_client.read_data.return_value = sample_secrets
    return mock_client


def test_run_belt_writes_variables(config, client, vars_file):
    result = run_belt(config, "linux", "app", "sys", "env", client=client)

    client.read_data.assert_called_once_with("app", "sys", "env")
    assert result.tool == "linux"
    assert result.path == str(vars_file)
    assert result.count == 7
    assert result.variables["DB_PASSWORD"] == "kv-pass"

    lines = vars_file.read_text().splitlines()
    assert len(lines) == 7
    assert "declare -x DB_PASSWORD='kv-pass'" in lines


def test_disabled_short_circuits(config, client, vars_file):
    config.disabled = True

    with pytest.raises(DisabledError, match="SENHASEGURA_DISABLE_RUNB is set to true"):
        run_belt(config, "linux", "app", "sys", "env", client=client)

    client.read_data.assert_not_called()
    assert not vars_file.exists()


def test_invalid_tool_before_network(config, client, vars_file):
    with pytest.raises(InvalidToolError):
        run_belt(config, "gitlab", "app", "sys", "env", client=client)

    client.read_data.assert_not_called()
    assert not vars_file.exists()


def test_upstream_failure_writes_nothing(config, client, vars_file):
    client.read_data.side_effect = UpstreamError("boom", status_code=503)

    with pytest.raises(UpstreamError):
        run_belt(config, "github", "app", "sys", "env", client=client)

    assert not vars_file.exists()


def test_type_mismatch_writes_nothing(config, client, vars_file):
    client.read_data.return_value = [
        Secret(key_values={"OK": "fine"}),
        Secret(key_values={"PORT": 5432}),
    ]

    with pytest.raises(TypeMismatchError):
        run_belt(config, "linux", "app", "sys", "env", client=client)

    assert not vars_file.exists()


def test_no_secrets_is_noop(config, client, vars_file):
    client.read_data.return_value = []

    result = run_belt(config, "circleci", "app", "sys", "env", client=client)

    assert result.count == 0
    assert not vars_file.exists()


def test_registers_values_with_redactor(config, client):
    redactor = SecretRedactingFilter()

    run_belt(config, "linux", "app", "sys", "env", client=client, redactor=redactor)

    record = logging.LogRecord(
        "runb", logging.INFO, __file__, 1, "password is %s", ("kv-pass",), None
    )
    redactor.filter(record)
    assert "kv-pass" not in record.getMessage()
