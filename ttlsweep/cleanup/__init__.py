"""Subscription cleanup module.

This module deletes resources older than a retention threshold and then
reclaims resource groups left empty.

Classes:
    SubscriptionCleaner: Main orchestrator for a sweep run
    ResourceSweeper: Age and exemption filtered resource deletion
    GroupSweeper: Empty resource group reclamation
    ExemptionMatcher: Protected identifier prefix evaluation
    AuditStorage: Audit log storage and retrieval
"""

from __future__ import annotations

__all__ = [
    "SubscriptionCleaner",
    "ResourceSweeper",
    "GroupSweeper",
    "ExemptionMatcher",
    "AuditStorage",
]
