"""Tests for AzureResourceClient and error translation.

Test coverage for the Azure SDK boundary with mocked management clients.
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from azure.core.exceptions import ClientAuthenticationError, HttpResponseError, ResourceNotFoundError

from ttlsweep.cloud.client import AzureResourceClient, authenticate, translate_error
from ttlsweep.cloud.environments import CloudEnvironment
from ttlsweep.errors import AuthenticationError, OpaqueError, ProviderError, SubscriptionNotFoundError

VM_ID = "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Compute/virtualMachines/vm1"


def make_http_error(status_code: int, code: str, message: str) -> HttpResponseError:
    error = HttpResponseError(message=message)
    error.status_code = status_code
    error.error = Mock(code=code, message=message)
    return error


def make_provider(resource_type: str, api_versions: list) -> Mock:
    provider_type = Mock(resource_type=resource_type, api_versions=api_versions)
    return Mock(resource_types=[provider_type])


@pytest.fixture
def resource_client() -> Mock:
    return Mock()


@pytest.fixture
def client(resource_client: Mock) -> AzureResourceClient:
    return AzureResourceClient(
        credential=Mock(),
        subscription_id="s",
        resource_client=resource_client,
        subscription_client=Mock(),
    )


class TestAuthenticate:
    """Test suite for service principal login."""

    @patch("ttlsweep.cloud.client.ClientSecretCredential")
    def test_uses_environment_authority(self, mock_credential_class: Mock) -> None:
        credential = authenticate("cid", "secret", "tenant", CloudEnvironment.CHINA)

        mock_credential_class.assert_called_once_with(
            tenant_id="tenant",
            client_id="cid",
            client_secret="secret",
            authority="login.chinacloudapi.cn",
        )
        credential.get_token.assert_called_once_with("https://management.chinacloudapi.cn/.default")

    @patch("ttlsweep.cloud.client.ClientSecretCredential")
    def test_rejected_credentials_raise_fatal_error(self, mock_credential_class: Mock) -> None:
        mock_credential_class.return_value.get_token.side_effect = ClientAuthenticationError(message="bad secret")

        with pytest.raises(AuthenticationError, match="bad secret"):
            authenticate("cid", "secret", "tenant")


class TestTranslateError:
    """Test suite for SDK exception translation."""

    def test_http_response_error_becomes_provider_error(self) -> None:
        error = translate_error(make_http_error(409, "Conflict", "Resource is in use"))

        assert isinstance(error, ProviderError)
        assert error.status_code == 409
        assert error.error_code == "Conflict"
        assert error.message == "Resource is in use"

    def test_other_errors_become_opaque(self) -> None:
        error = translate_error(ConnectionError("connection reset"))

        assert isinstance(error, OpaqueError)
        assert error.description == "connection reset"

    def test_opaque_error_without_message_uses_class_name(self) -> None:
        assert translate_error(TimeoutError()).description == "TimeoutError"


class TestAzureResourceClient:
    """Test suite for AzureResourceClient class."""

    def test_get_subscription_name(self, client: AzureResourceClient) -> None:
        client.subscriptions.subscriptions.get.return_value = Mock(display_name="Prod")

        assert client.get_subscription_name() == "Prod"
        client.subscriptions.subscriptions.get.assert_called_once_with("s")

    def test_unknown_subscription_is_fatal(self, client: AzureResourceClient) -> None:
        client.subscriptions.subscriptions.get.side_effect = ResourceNotFoundError(message="not found")

        with pytest.raises(SubscriptionNotFoundError):
            client.get_subscription_name()

    def test_list_resources_expands_created_time(self, client: AzureResourceClient, resource_client: Mock) -> None:
        item = Mock(id=VM_ID, type="Microsoft.Compute/virtualMachines", created_time=None, location="eastus")
        resource_client.resources.list.return_value = iter([item])

        resources = client.list_resources()

        resource_client.resources.list.assert_called_once_with(expand="createdTime")
        assert [r.resource_id for r in resources] == [VM_ID]

    def test_delete_resource_prefers_stable_api_version(
        self, client: AzureResourceClient, resource_client: Mock
    ) -> None:
        resource_client.providers.get.return_value = make_provider(
            "virtualMachines", ["2024-11-01-preview", "2024-07-01", "2023-09-01"]
        )

        client.delete_resource("Microsoft.Compute/virtualMachines", VM_ID)

        resource_client.providers.get.assert_called_once_with("Microsoft.Compute")
        resource_client.resources.begin_delete_by_id.assert_called_once_with(VM_ID, "2024-07-01")
        resource_client.resources.begin_delete_by_id.return_value.result.assert_called_once_with()

    def test_api_version_is_cached(self, client: AzureResourceClient, resource_client: Mock) -> None:
        resource_client.providers.get.return_value = make_provider("virtualMachines", ["2024-07-01"])

        client.delete_resource("Microsoft.Compute/virtualMachines", VM_ID)
        client.delete_resource("Microsoft.Compute/virtualMachines", VM_ID + "2")

        assert resource_client.providers.get.call_count == 1

    def test_nested_resource_type(self, client: AzureResourceClient, resource_client: Mock) -> None:
        resource_client.providers.get.return_value = make_provider("servers/databases", ["2023-08-01-preview"])

        client.delete_resource("Microsoft.Sql/servers/databases", "/db-id")

        resource_client.providers.get.assert_called_once_with("Microsoft.Sql")
        resource_client.resources.begin_delete_by_id.assert_called_once_with("/db-id", "2023-08-01-preview")

    def test_unknown_resource_type_is_opaque_error(self, client: AzureResourceClient, resource_client: Mock) -> None:
        resource_client.providers.get.return_value = make_provider("other", ["2024-01-01"])

        with pytest.raises(OpaqueError, match="No API version"):
            client.delete_resource("Microsoft.Compute/virtualMachines", VM_ID)

        resource_client.resources.begin_delete_by_id.assert_not_called()

    def test_delete_conflict_becomes_provider_error(self, client: AzureResourceClient, resource_client: Mock) -> None:
        resource_client.providers.get.return_value = make_provider("virtualMachines", ["2024-07-01"])
        resource_client.resources.begin_delete_by_id.return_value.result.side_effect = make_http_error(
            409, "Conflict", "in use"
        )

        with pytest.raises(ProviderError) as exc_info:
            client.delete_resource("Microsoft.Compute/virtualMachines", VM_ID)

        assert exc_info.value.status_code == 409

    def test_delete_resource_group(self, client: AzureResourceClient, resource_client: Mock) -> None:
        client.delete_resource_group("rg1")

        resource_client.resource_groups.begin_delete.assert_called_once_with("rg1")
        resource_client.resource_groups.begin_delete.return_value.result.assert_called_once_with()

    def test_delete_resource_group_failure(self, client: AzureResourceClient, resource_client: Mock) -> None:
        resource_client.resource_groups.begin_delete.side_effect = make_http_error(409, "ScopeLocked", "locked")

        with pytest.raises(ProviderError):
            client.delete_resource_group("rg1")

    def test_list_resources_in_group(self, client: AzureResourceClient, resource_client: Mock) -> None:
        resource_client.resources.list_by_resource_group.return_value = [
            Mock(id=VM_ID, type="Microsoft.Compute/virtualMachines", created_time=None, location="eastus")
        ]

        assert len(client.list_resources_in_group("rg")) == 1
        resource_client.resources.list_by_resource_group.assert_called_once_with("rg")
