"""Exemption prefix evaluation.

Resources whose identifier starts with a configured prefix are protected
from deletion for the whole run.
"""

from __future__ import annotations

from typing import Iterable, Optional


class ExemptionMatcher:
    """Case-insensitive resource ID prefix matcher.

    Prefixes are evaluated in configuration order and the first match wins.
    The matched prefix is only used for reporting.

    Attributes:
        prefixes: Lower-cased exemption prefixes in configuration order
    """

    def __init__(self, prefixes: Iterable[str]) -> None:
        """Initialize matcher.

        Args:
            prefixes: Resource ID prefixes (blank entries are ignored)
        """
        self.prefixes: list[str] = []
        for prefix in prefixes:
            normalized = prefix.strip().lower()
            if normalized and normalized not in self.prefixes:
                self.prefixes.append(normalized)

    def match(self, resource_id: str) -> Optional[str]:
        """Return the first prefix the resource ID starts with, or None."""
        lowered = resource_id.lower()
        for prefix in self.prefixes:
            if lowered.startswith(prefix):
                return prefix
        return None

    def is_exempt(self, resource_id: str) -> tuple[bool, Optional[str]]:
        """Check if resource is exempt from deletion.

        Args:
            resource_id: Full resource identifier

        Returns:
            Tuple of (is_exempt, reason)
                is_exempt: True if the ID starts with any exemption prefix
                reason: Human-readable reason, None if not exempt
        """
        prefix = self.match(resource_id)
        if prefix is None:
            return False, None
        return True, f"starts with persist prefix {prefix}"
