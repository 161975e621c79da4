"""
Shared fixtures for dms_exporter tests.

AWS calls never leave the process: clients are wrapped in botocore Stubbers
and ambient credentials come from fake environment variables.
"""

import boto3
import pytest
from botocore.stub import Stubber

from dms_exporter.gauges import GaugeStore


@pytest.fixture
def aws_env(monkeypatch, tmp_path):
    """Fake ambient credentials, isolated from any local AWS config."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)


@pytest.fixture
def store() -> GaugeStore:
    return GaugeStore()


@pytest.fixture
def dms_stub(aws_env):
    client = boto3.client("dms", region_name="us-west-2")
    with Stubber(client) as stubber:
        yield client, stubber


@pytest.fixture
def sts_stub(aws_env):
    client = boto3.client("sts", region_name="us-west-2")
    with Stubber(client) as stubber:
        yield client, stubber
