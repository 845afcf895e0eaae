"""Azure cloud environments selectable from the command line."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class CloudEnvironment(Enum):
    """Azure cloud with its authority host and Resource Manager endpoint.

    Values are (key, authority_host, resource_manager_url).
    """

    GLOBAL = ("global", "login.microsoftonline.com", "https://management.azure.com/")
    CHINA = ("china", "login.chinacloudapi.cn", "https://management.chinacloudapi.cn/")
    USA = ("usa", "login.microsoftonline.us", "https://management.usgovcloudapi.net/")
    GERMAN = ("german", "login.microsoftonline.de", "https://management.microsoftazure.de/")

    def __init__(self, key: str, authority_host: str, resource_manager_url: str) -> None:
        self.key = key
        self.authority_host = authority_host
        self.resource_manager_url = resource_manager_url

    @property
    def credential_scope(self) -> str:
        """Token scope for Resource Manager calls."""
        return self.resource_manager_url + ".default"

    @classmethod
    def resolve(cls, name: Optional[str]) -> "CloudEnvironment":
        """Resolve an environment name, case-insensitive.

        Unknown or empty names fall back to the global cloud.

        Args:
            name: Environment name ("china", "usa", "german", ...)

        Returns:
            Matching CloudEnvironment
        """
        if not name:
            return cls.GLOBAL

        wanted = name.strip().lower()
        for env in cls:
            if env.key == wanted:
                return env

        logger.warning(f"Unknown environment '{name}', using global Azure cloud")
        return cls.GLOBAL
