"""Test configuration and fixtures."""

from unittest.mock import Mock

import pytest

from stale_repo_audit.config import AuditConfig
from stale_repo_audit.github_client.client import GitHubClient
from stale_repo_audit.github_client.models import RepositoryState

SAMPLE_HTML = """
<html>
<body>
<h2>Command Line</h2>
<ul>
<li><a href="https://github.com/acme/cli-tool">cli-tool</a> - Build CLIs.</li>
<li><a href="https://github.com/acme/old-lib">old-lib</a> - Unmaintained.</li>
<li><a href="https://example.com/project">project</a> - Not on GitHub.</li>
<li><a>no-href</a> - Broken anchor.</li>
<li><strong>New</strong> <a href="https://github.com/acme/ignored">ignored</a></li>
</ul>
<ul>
<li><a href="https://github.com/acme/cli-tool/blob/main/README.md">readme</a></li>
<li><a href="https://github.com/other/parser">parser</a> - Parse things.
  <ul><li><a href="https://github.com/other/nested">nested</a></li></ul>
</li>
</ul>
</body>
</html>
"""


@pytest.fixture
def sample_html() -> str:
    """Rendered list document with a mix of link shapes."""
    return SAMPLE_HTML


@pytest.fixture
def audit_config() -> AuditConfig:
    """Default configuration tracking a test repository."""
    return AuditConfig(tracking_owner="testorg", tracking_repo="awesome-test")


@pytest.fixture
def mock_client() -> Mock:
    """GitHub client reporting every repository as healthy and active."""
    client = Mock(spec=GitHubClient)
    client.get_repository_state.return_value = RepositoryState(
        status_code=200, archived=False
    )
    client.get_commits_since.return_value = [{"sha": "abc123"}]
    client.list_open_issues.return_value = []
    return client
