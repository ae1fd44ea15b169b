"""Host compatibility and permission review for validated manifests."""
from __future__ import annotations

from typing import List, Optional

from ..config.defaults import HOST_VERSION
from .rules import parse_version
from .schema import PluginManifest


def is_compatible(manifest: PluginManifest, host_version: Optional[str] = None) -> bool:
    """Return True when ``host_version`` lies within the manifest's bounds.

    Bounds are inclusive; pre-release suffixes are ignored. An unparseable
    host version is treated as incompatible.
    """
    try:
        current = parse_version(host_version or HOST_VERSION)
        minimum = parse_version(manifest.compatibility.quilltap_version)
    except ValueError:
        return False
    if current < minimum:
        return False
    upper = manifest.compatibility.quilltap_max_version
    if upper is not None and current > parse_version(upper):
        return False
    return True


def security_warnings(manifest: PluginManifest) -> List[str]:
    """Return human-readable warnings for risky permission requests."""
    warnings: List[str] = []
    perms = manifest.permissions
    if not manifest.sandboxed:
        warnings.append("Plugin runs without sandboxing - security risk")
    if perms.user_data:
        warnings.append("Plugin requests access to user data")
    if perms.database:
        warnings.append("Plugin requests database access")
    if perms.network:
        warnings.append(f"Plugin requests network access to: {', '.join(perms.network)}")
    if perms.file_system:
        warnings.append(f"Plugin requests file system access to: {', '.join(perms.file_system)}")
    return warnings


__all__ = ["is_compatible", "security_warnings"]
