"""Royalty settlement source package.

This package contains the settlement core:
- config: Configuration loading and management
- settlement: Artifact registry, settlement engine and royalty ledger
"""

from __future__ import annotations

__all__: list[str] = []
