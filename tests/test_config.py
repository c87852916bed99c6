"""Tests for configuration loading."""

import pytest

from runb.config import RunbConfig, load_config
from runb.errors import ConfigurationError


def test_defaults_with_empty_environment():
    config = load_config(environ={})

    assert config == RunbConfig()
    assert config.secrets_file == ".runb.vars"
    assert config.disabled is False
    assert config.verify_ssl is True
    assert config.timeout == 30.0
    assert config.has_client_credentials is False


def test_environment_values():
    config = load_config(
        environ={
            "SENHASEGURA_URL": "https://dsm.example.com/",
            "SENHASEGURA_CLIENT_ID": "client",
            "SENHASEGURA_CLIENT_SECRET": "secret",
            "SENHASEGURA_SECRETS_FILE": "out.env",
            "SENHASEGURA_MAPPING_FILE": "map.json",
            "SENHASEGURA_TIMEOUT": "5",
            "SENHASEGURA_VERIFY_SSL": "false",
        }
    )

    assert config.api_url == "https://dsm.example.com"
    assert config.has_client_credentials is True
    assert config.secrets_file == "out.env"
    assert config.mapping_file == "map.json"
    assert config.timeout == 5.0
    assert config.verify_ssl is False


@pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on"])
def test_disable_switch_true(value):
    assert load_config(environ={"SENHASEGURA_DISABLE_RUNB": value}).disabled is True


@pytest.mark.parametrize("value", ["false", "0", "no", ""])
def test_disable_switch_false(value):
    assert load_config(environ={"SENHASEGURA_DISABLE_RUNB": value}).disabled is False


def test_invalid_boolean():
    with pytest.raises(ConfigurationError, match="disabled"):
        load_config(environ={"SENHASEGURA_DISABLE_RUNB": "maybe"})


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_timeout(value):
    with pytest.raises(ConfigurationError, match="timeout"):
        load_config(environ={"SENHASEGURA_TIMEOUT": value})


def test_empty_secrets_file_falls_back_to_default():
    config = load_config(environ={"SENHASEGURA_SECRETS_FILE": ""})

    assert config.secrets_file == ".runb.vars"


def test_yaml_file_with_env_var_keys(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text(
        "SENHASEGURA_URL: https://dsm.example.com\n"
        "SENHASEGURA_DISABLE_RUNB: true\n"
        "secrets_file: from-file.vars\n"
    )

    config = load_config(str(config_file), environ={})

    assert config.api_url == "https://dsm.example.com"
    assert config.disabled is True
    assert config.secrets_file == "from-file.vars"


def test_environment_overrides_file(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text("api_url: https://file.example.com\ntimeout: 10\n")

    config = load_config(
        str(config_file), environ={"SENHASEGURA_URL": "https://env.example.com"}
    )

    assert config.api_url == "https://env.example.com"
    assert config.timeout == 10.0


def test_config_file_from_environment(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text("secrets_file: custom.vars\n")

    config = load_config(environ={"SENHASEGURA_CONFIG_FILE": str(config_file)})

    assert config.secrets_file == "custom.vars"


def test_unknown_keys_are_ignored(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text("unknown_key: 1\n")

    assert load_config(str(config_file), environ={}) == RunbConfig()


def test_empty_yaml_file(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text("")

    assert load_config(str(config_file), environ={}) == RunbConfig()


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read config file"):
        load_config(str(tmp_path / "missing.yaml"), environ={})


def test_config_file_must_be_mapping(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ConfigurationError, match="YAML dictionary"):
        load_config(str(config_file), environ={})


def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "runb.yaml"
    config_file.write_text("key: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(str(config_file), environ={})
