"""
Shared fixtures for CLI tests.
"""

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, sample_config_path):
    """Invoke the root command against the sample dataset."""
    from runtime_compat.cli.main import cli

    def _run(*args, **kwargs):
        return cli_runner.invoke(cli, ["--config", str(sample_config_path), *args], **kwargs)

    return _run
