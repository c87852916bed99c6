"""pytest configuration for runb tests."""

import os
import sys
from pathlib import Path

import pytest

# Add src directory to path so tests can import runb
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from runb.models import Secret  # noqa: E402


@pytest.fixture(autouse=True)
def clean_senhasegura_env(monkeypatch):
    """Keep the developer's own SENHASEGURA_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("SENHASEGURA_"):
            monkeypatch.delenv(name)


@pytest.fixture
def vars_file(tmp_path):
    """Path of a variables file that does not exist yet."""
    return tmp_path / ".runb.vars"


@pytest.fixture
def sample_secrets():
    """Two secret records covering every credential kind."""
    return [
        Secret(
            secret_id="1",
            secret_name="aws",
            cloud_credentials=[
                {"AWS_ACCESS_KEY_ID": "AKIAEXAMPLE", "AWS_SECRET_ACCESS_KEY": "wJalr"},
            ],
            pam_credentials=[{"DB_USER": "admin", "DB_PASSWORD": "pam-pass"}],
            ephemeral_credentials=[{"TMP_TOKEN": "eph-1"}],
            key_values={"API_URL": "https://api.example.com"},
        ),
        Secret(
            secret_id="2",
            secret_name="app",
            key_values={"DB_PASSWORD": "kv-pass", "FEATURE_FLAG": "on"},
        ),
    ]
