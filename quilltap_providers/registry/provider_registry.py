"""
ProviderRegistry: the catalog mapping provider names to plugin factories.

Purpose
-------
The only state shared across concurrent callers. It is read on every
request and written almost exclusively at startup, so reads are lock-free:
the registry holds an immutable snapshot (a plain ``dict`` that is never
mutated after publication) and writers build a modified copy under a lock
and swap the reference in one assignment. A reader therefore sees either the
whole old catalog or the whole new one, never a half-updated entry.

Validation gate
---------------
Nothing enters the catalog without passing :func:`validate_manifest`, and
the manifest's ``providerConfig.providerName`` must equal the registry key,
so ``get(name)()`` always produces a plugin whose metadata names ``name``.

Bulk load
---------
:meth:`ProviderRegistry.initialize` registers a list of
:class:`PluginSource` objects. Per-source failures are recorded (see
:meth:`get_errors`), never raised. Calling it again upserts the same names,
so repeated initialization neither duplicates nor corrupts entries.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..base.errors import ManifestValidationError, ProviderDisabledError, ProviderNotFoundError
from ..base.logging import get_logger, log_event
from ..base.models import AttachmentSupport, ProviderMetadata
from ..manifest import (
    FieldError,
    PluginManifest,
    attachment_support_from_manifest,
    capabilities_from_manifest,
    metadata_from_manifest,
    validate_manifest,
)
from .entry import (
    ConfigRequirements,
    ManifestInput,
    PluginSource,
    ProviderFactory,
    RegistrationFailure,
    RegistryEntry,
    RegistryStats,
)

_CAPABILITY_FIELDS = ("chat", "image_generation", "embeddings", "web_search", "tool_calling")


class ProviderRegistry:
    """Explicitly constructed provider catalog.

    Create one per process (or per test) and pass it to the code that needs
    providers; there is no module-level instance.
    """

    def __init__(self) -> None:
        self._entries: Mapping[str, RegistryEntry] = {}
        self._errors: Tuple[RegistrationFailure, ...] = ()
        self._initialized = False
        self._last_init_time: Optional[datetime] = None
        self._write_lock = threading.RLock()
        self.logger = get_logger("registry")

    # -- writes ------------------------------------------------------------
    def register(
        self,
        name: str,
        factory: ProviderFactory,
        manifest: ManifestInput,
        *,
        enabled: Optional[bool] = None,
    ) -> RegistryEntry:
        """Validate ``manifest`` and upsert the entry for ``name``.

        Re-registering a name replaces its factory and manifest and keeps the
        previous ``enabled`` flag unless ``enabled`` is given.

        Raises:
            ManifestValidationError: when the manifest is invalid, declares no
                ``providerConfig``, or names a different provider.
        """
        try:
            entry = self._build_entry(name, factory, manifest, enabled)
        except ManifestValidationError as exc:
            with self._write_lock:
                self._errors = tuple(e for e in self._errors if e.name != name) + (
                    RegistrationFailure(name=name, error=str(exc)),
                )
            log_event(
                self.logger,
                "registry.rejected",
                provider=name,
                errors=[str(e) for e in exc.errors[:10]],
                level=logging.WARNING,
            )
            raise
        with self._write_lock:
            previous = self._entries.get(name)
            if enabled is None and previous is not None:
                entry = replace(entry, enabled=previous.enabled)
            snapshot = dict(self._entries)
            snapshot[name] = entry
            self._entries = snapshot
            self._errors = tuple(e for e in self._errors if e.name != name)
        log_event(
            self.logger,
            "registry.register",
            provider=name,
            version=entry.manifest.version,
            replaced=previous is not None,
            enabled=entry.enabled,
        )
        return entry

    def _build_entry(
        self,
        name: str,
        factory: ProviderFactory,
        manifest: ManifestInput,
        enabled: Optional[bool],
    ) -> RegistryEntry:
        if not callable(factory):
            raise ManifestValidationError(name, (FieldError(path="factory", message="must be callable"),))
        result = validate_manifest(manifest)
        validated = result.raise_for_errors(name)
        cfg = validated.provider_config
        if cfg is None:
            raise ManifestValidationError(
                name, (FieldError(path="providerConfig", message="provider plugins must declare providerConfig"),)
            )
        if cfg.provider_name != name:
            raise ManifestValidationError(
                name,
                (
                    FieldError(
                        path="providerConfig.providerName",
                        message=f"'{cfg.provider_name}' does not match registry name '{name}'",
                    ),
                ),
            )
        return RegistryEntry(
            name=name,
            factory=factory,
            manifest=validated,
            enabled=True if enabled is None else enabled,
            metadata=metadata_from_manifest(validated),
            capabilities=capabilities_from_manifest(validated),
            attachment_support=attachment_support_from_manifest(validated),
        )

    def set_enabled(self, name: str, enabled: bool) -> None:
        """Toggle availability without unregistering.

        Raises:
            ProviderNotFoundError: when ``name`` is not registered.
        """
        with self._write_lock:
            current = self._entries.get(name)
            if current is None:
                raise ProviderNotFoundError(name)
            snapshot = dict(self._entries)
            snapshot[name] = replace(current, enabled=bool(enabled))
            self._entries = snapshot
        log_event(self.logger, "registry.toggle", provider=name, enabled=bool(enabled))

    def unregister(self, name: str) -> bool:
        """Remove ``name``; returns False when it was not registered."""
        with self._write_lock:
            if name not in self._entries:
                return False
            snapshot = dict(self._entries)
            del snapshot[name]
            self._entries = snapshot
        log_event(self.logger, "registry.unregister", provider=name)
        return True

    def initialize(self, sources: Iterable[PluginSource]) -> RegistryStats:
        """Register every source, recording failures instead of raising.

        ``get_errors()`` afterwards reflects this run only.
        """
        failures: List[RegistrationFailure] = []
        with self._write_lock:
            for source in sources:
                try:
                    self.register(source.name, source.factory, source.manifest)
                except ManifestValidationError as exc:
                    failures.append(RegistrationFailure(name=source.name, error=str(exc)))
            self._errors = tuple(failures)
            self._initialized = True
            self._last_init_time = datetime.now()
        stats = self.get_stats()
        log_event(
            self.logger,
            "registry.bootstrap",
            registered=stats.total,
            errors=stats.errors,
            failed=[f.name for f in failures],
        )
        return stats

    def reset(self) -> None:
        """Drop every entry and error and mark the registry uninitialized."""
        with self._write_lock:
            self._entries = {}
            self._errors = ()
            self._initialized = False
            self._last_init_time = None

    # -- reads (lock-free) ---------------------------------------------------
    def _entry(self, name: str) -> RegistryEntry:
        entry = self._entries.get(name)
        if entry is None:
            raise ProviderNotFoundError(name)
        return entry

    def get(self, name: str) -> ProviderFactory:
        """Return the factory for an enabled provider.

        Raises:
            ProviderNotFoundError: ``name`` was never registered.
            ProviderDisabledError: ``name`` is registered but disabled.
        """
        entry = self._entry(name)
        if not entry.enabled:
            raise ProviderDisabledError(name)
        return entry.factory

    def create_provider(self, name: str, base_url: Optional[str] = None):
        """Instantiate a plugin for ``name`` (``get(name)(base_url=base_url)``)."""
        return self.get(name)(base_url=base_url)

    def get_entry(self, name: str) -> Optional[RegistryEntry]:
        return self._entries.get(name)

    def has_provider(self, name: str) -> bool:
        return name in self._entries

    def is_enabled(self, name: str) -> bool:
        entry = self._entries.get(name)
        return bool(entry and entry.enabled)

    def get_provider_names(self) -> List[str]:
        return sorted(self._entries)

    def get_all_entries(self) -> List[RegistryEntry]:
        entries = self._entries
        return [entries[k] for k in sorted(entries)]

    def get_metadata(self, name: str) -> Optional[ProviderMetadata]:
        entry = self._entries.get(name)
        return entry.metadata if entry else None

    def get_all_metadata(self) -> List[ProviderMetadata]:
        return [e.metadata for e in self.get_all_entries()]

    def get_attachment_support(self, name: str) -> Optional[AttachmentSupport]:
        entry = self._entries.get(name)
        return entry.attachment_support if entry else None

    def get_config_requirements(self, name: str) -> Optional[ConfigRequirements]:
        entry = self._entries.get(name)
        if entry is None:
            return None
        meta = entry.metadata
        return ConfigRequirements(
            requires_api_key=meta.requires_api_key,
            requires_base_url=meta.requires_base_url,
            api_key_label=meta.api_key_label,
            base_url_label=meta.base_url_label,
            base_url_default=meta.base_url_default,
        )

    def supports_capability(self, name: str, capability: str) -> bool:
        """Whether ``name`` declares ``capability`` (snake_case or camelCase)."""
        entry = self._entries.get(name)
        field = _normalize_capability(capability)
        if entry is None or field not in _CAPABILITY_FIELDS:
            return False
        return bool(getattr(entry.capabilities, field))

    def get_providers_by_capability(self, capability: str, *, enabled_only: bool = True) -> List[str]:
        return [
            e.name
            for e in self.get_all_entries()
            if (e.enabled or not enabled_only) and self.supports_capability(e.name, capability)
        ]

    def get_providers_with_attachment_support(self, *, enabled_only: bool = True) -> List[str]:
        return [
            e.name for e in self.get_all_entries() if (e.enabled or not enabled_only) and e.attachment_support.supported
        ]

    def is_initialized(self) -> bool:
        return self._initialized

    def get_stats(self) -> RegistryStats:
        entries = self._entries
        enabled = sum(1 for e in entries.values() if e.enabled)
        return RegistryStats(
            total=len(entries),
            enabled=enabled,
            disabled=len(entries) - enabled,
            errors=len(self._errors),
            initialized=self._initialized,
            last_init_time=self._last_init_time,
            providers=tuple(sorted(entries)),
        )

    def get_errors(self) -> List[RegistrationFailure]:
        return list(self._errors)


def _normalize_capability(capability: str) -> str:
    """``imageGeneration`` -> ``image_generation``; snake_case passes through."""
    out = []
    for ch in capability.strip():
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")


__all__ = ["ProviderRegistry", "PluginSource", "RegistryEntry", "RegistryStats"]
