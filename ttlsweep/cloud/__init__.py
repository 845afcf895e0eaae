"""Azure provider boundary.

Classes:
    AzureResourceClient: Listing and deletion service for one subscription
    CloudEnvironment: Supported Azure clouds
"""

from __future__ import annotations

__all__ = [
    "AzureResourceClient",
    "CloudEnvironment",
]
