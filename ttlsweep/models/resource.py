"""Resource and resource group models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass
class CloudResource:
    """Provisioned Azure resource as listed from Resource Manager.

    Attributes:
        resource_id: Full ARM identifier
            (/subscriptions/<sub>/resourceGroups/<rg>/providers/<ns>/<type>/<name>)
        resource_type: Provider type (e.g. "Microsoft.Compute/virtualMachines")
        created_at: Creation time, None when Azure does not report one
        name: Resource name (optional)
        location: Azure region (optional)
    """

    resource_id: str
    resource_type: str
    created_at: Optional[datetime] = None
    name: Optional[str] = None
    location: Optional[str] = None

    @property
    def resource_group(self) -> Optional[str]:
        """Resource group segment of the identifier, None if not group scoped."""
        parts = self.resource_id.strip("/").split("/")
        for index, part in enumerate(parts[:-1]):
            if part.lower() == "resourcegroups":
                return parts[index + 1]
        return None

    @classmethod
    def from_azure(cls, item: Any) -> "CloudResource":
        """Build from an azure-mgmt-resource GenericResourceExpanded."""
        return cls(
            resource_id=item.id,
            resource_type=item.type,
            created_at=getattr(item, "created_time", None),
            name=item.name,
            location=item.location,
        )


@dataclass
class ResourceGroup:
    """Azure resource group."""

    name: str
    location: Optional[str] = None

    @classmethod
    def from_azure(cls, item: Any) -> "ResourceGroup":
        return cls(name=item.name, location=item.location)
