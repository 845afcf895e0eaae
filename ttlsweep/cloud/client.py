"""Azure Resource Manager listing and deletion service.

Wraps azure-mgmt-resource for a single subscription and translates SDK
exceptions into the sweeper's error types, so callers never inspect Azure
exception shapes themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from azure.core.exceptions import ClientAuthenticationError, HttpResponseError, ResourceNotFoundError
from azure.identity import ClientSecretCredential
from azure.mgmt.resource import ResourceManagementClient, SubscriptionClient

from ttlsweep.cloud.environments import CloudEnvironment
from ttlsweep.errors import AuthenticationError, OpaqueError, ProviderError, SubscriptionNotFoundError
from ttlsweep.models.resource import CloudResource, ResourceGroup

logger = logging.getLogger(__name__)


def authenticate(
    client_id: str,
    client_secret: str,
    tenant_id: str,
    environment: CloudEnvironment = CloudEnvironment.GLOBAL,
) -> ClientSecretCredential:
    """Log in with a service principal secret.

    A token is requested immediately so bad credentials fail here rather than
    on the first Resource Manager call.

    Args:
        client_id: Service principal application ID
        client_secret: Service principal secret
        tenant_id: Azure AD tenant ID
        environment: Target Azure cloud

    Returns:
        Credential usable by management clients

    Raises:
        AuthenticationError: If the credentials are rejected
    """
    credential = ClientSecretCredential(
        tenant_id=tenant_id,
        client_id=client_id,
        client_secret=client_secret,
        authority=environment.authority_host,
    )
    try:
        credential.get_token(environment.credential_scope)
    except ClientAuthenticationError as e:
        raise AuthenticationError(f"Authentication failed for client {client_id}: {e.message}") from e
    return credential


def translate_error(error: Exception) -> ProviderError | OpaqueError:
    """Convert an SDK exception into a tagged deletion error."""
    if isinstance(error, HttpResponseError):
        error_code = error.error.code if error.error is not None else None
        message = error.error.message if error.error is not None and error.error.message else error.message
        return ProviderError(status_code=error.status_code, error_code=error_code, message=message)
    return OpaqueError(str(error) or error.__class__.__name__)


class AzureResourceClient:
    """Resource Manager operations scoped to one subscription.

    Attributes:
        subscription_id: Subscription being swept
        environment: Azure cloud the clients talk to
    """

    def __init__(
        self,
        credential: Any,
        subscription_id: str,
        environment: CloudEnvironment = CloudEnvironment.GLOBAL,
        resource_client: Optional[ResourceManagementClient] = None,
        subscription_client: Optional[SubscriptionClient] = None,
    ) -> None:
        """Initialize client.

        Args:
            credential: Azure credential (see authenticate())
            subscription_id: Subscription ID
            environment: Target Azure cloud
            resource_client: Pre-built ResourceManagementClient (optional)
            subscription_client: Pre-built SubscriptionClient (optional)
        """
        self.subscription_id = subscription_id
        self.environment = environment
        self._credential = credential
        self._resource_client = resource_client
        self._subscription_client = subscription_client
        self._api_versions: dict[str, str] = {}

    @property
    def resources(self) -> ResourceManagementClient:
        if self._resource_client is None:
            self._resource_client = ResourceManagementClient(
                self._credential,
                self.subscription_id,
                base_url=self.environment.resource_manager_url,
                credential_scopes=[self.environment.credential_scope],
            )
        return self._resource_client

    @property
    def subscriptions(self) -> SubscriptionClient:
        if self._subscription_client is None:
            self._subscription_client = SubscriptionClient(
                self._credential,
                base_url=self.environment.resource_manager_url,
                credential_scopes=[self.environment.credential_scope],
            )
        return self._subscription_client

    def get_subscription_name(self) -> Optional[str]:
        """Fetch the subscription display name.

        Raises:
            SubscriptionNotFoundError: If the subscription does not exist
        """
        try:
            subscription = self.subscriptions.subscriptions.get(self.subscription_id)
        except ResourceNotFoundError as e:
            raise SubscriptionNotFoundError(self.subscription_id) from e
        return subscription.display_name

    def list_resources(self) -> list[CloudResource]:
        """List every resource in the subscription with its creation time."""
        return [CloudResource.from_azure(item) for item in self.resources.resources.list(expand="createdTime")]

    def list_resource_groups(self) -> list[ResourceGroup]:
        return [ResourceGroup.from_azure(item) for item in self.resources.resource_groups.list()]

    def list_resources_in_group(self, group_name: str) -> list[CloudResource]:
        """List resources in a resource group.

        Raises:
            ProviderError: If Resource Manager rejects the listing
            OpaqueError: On any other failure
        """
        try:
            return [
                CloudResource.from_azure(item)
                for item in self.resources.resources.list_by_resource_group(group_name)
            ]
        except Exception as e:
            raise translate_error(e) from e

    def delete_resource(self, resource_type: str, resource_id: str) -> None:
        """Delete a resource by ID and wait for completion.

        Args:
            resource_type: Provider type (e.g. "Microsoft.Network/virtualNetworks")
            resource_id: Full resource identifier

        Raises:
            ProviderError: If Resource Manager rejects the deletion
            OpaqueError: On any other failure
        """
        try:
            api_version = self._resolve_api_version(resource_type)
            poller = self.resources.resources.begin_delete_by_id(resource_id, api_version)
            poller.result()
        except (ProviderError, OpaqueError):
            raise
        except Exception as e:
            raise translate_error(e) from e

    def delete_resource_group(self, group_name: str) -> None:
        """Delete a resource group and wait for completion.

        Raises:
            ProviderError: If Resource Manager rejects the deletion
            OpaqueError: On any other failure
        """
        try:
            self.resources.resource_groups.begin_delete(group_name).result()
        except Exception as e:
            raise translate_error(e) from e

    def _resolve_api_version(self, resource_type: str) -> str:
        """Find an API version for a resource type, preferring stable ones.

        Results are cached per client instance.
        """
        key = resource_type.lower()
        if key in self._api_versions:
            return self._api_versions[key]

        if "/" not in resource_type:
            raise OpaqueError(f"Invalid resource type: {resource_type}")

        namespace, type_name = resource_type.split("/", 1)
        provider = self.resources.providers.get(namespace)

        for provider_type in provider.resource_types or []:
            if provider_type.resource_type.lower() != type_name.lower():
                continue
            versions = provider_type.api_versions or []
            stable = [v for v in versions if "preview" not in v.lower()]
            chosen = (stable or versions or [None])[0]
            if chosen is None:
                break
            logger.debug(f"Using API version {chosen} for {resource_type}")
            self._api_versions[key] = chosen
            return chosen

        raise OpaqueError(f"No API version found for resource type {resource_type}")
