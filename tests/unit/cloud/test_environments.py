"""Tests for Azure cloud environment resolution."""

from __future__ import annotations

import pytest

from ttlsweep.cloud.environments import CloudEnvironment


class TestCloudEnvironment:
    """Test suite for CloudEnvironment.resolve."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("china", CloudEnvironment.CHINA),
            ("CHINA", CloudEnvironment.CHINA),
            ("usa", CloudEnvironment.USA),
            ("German", CloudEnvironment.GERMAN),
            ("global", CloudEnvironment.GLOBAL),
        ],
    )
    def test_known_names_case_insensitive(self, name: str, expected: CloudEnvironment) -> None:
        assert CloudEnvironment.resolve(name) is expected

    @pytest.mark.parametrize("name", [None, "", "mars", "AzureCloud"])
    def test_unknown_or_missing_falls_back_to_global(self, name) -> None:
        assert CloudEnvironment.resolve(name) is CloudEnvironment.GLOBAL

    def test_credential_scope(self) -> None:
        assert CloudEnvironment.USA.credential_scope == "https://management.usgovcloudapi.net/.default"
        assert CloudEnvironment.GLOBAL.authority_host == "login.microsoftonline.com"
