"""
Manifest validation entry points.

``validate_manifest`` is pure and total: any input (mapping, parsed model,
or garbage) yields a :class:`ManifestValidationResult`, and the same input
always yields the same verdict and the same error list. ``parse_manifest``
is the raising variant used where an invalid manifest is a programming error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..base.errors import ManifestValidationError
from .rules import apply_rules, check_values
from .schema import PluginManifest


@dataclass(frozen=True)
class FieldError:
    """One validation failure: dotted ``path`` into the manifest plus ``message``."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}


@dataclass(frozen=True)
class ManifestValidationResult:
    valid: bool
    manifest: Optional[PluginManifest] = None
    errors: Tuple[FieldError, ...] = ()

    def raise_for_errors(self, plugin: str) -> PluginManifest:
        """Return the manifest, or raise :class:`ManifestValidationError`."""
        if not self.valid or self.manifest is None:
            raise ManifestValidationError(plugin, self.errors)
        return self.manifest


def _errors_from_pydantic(exc: ValidationError) -> Tuple[FieldError, ...]:
    out = []
    for err in exc.errors(include_url=False):
        path = ".".join(str(p) for p in err.get("loc", ()))
        out.append(FieldError(path=path, message=err.get("msg", "invalid value")))
    return tuple(out)


def validate_manifest(raw: Any) -> ManifestValidationResult:
    """Validate ``raw`` structurally and against the dependent-field rules.

    Parameters:
        raw: A mapping as loaded from manifest JSON (camelCase or snake_case
            keys) or an existing :class:`PluginManifest`.

    Returns:
        ``ManifestValidationResult(valid=True, manifest=...)`` or
        ``valid=False`` with every field-level error found.
    """
    if isinstance(raw, PluginManifest):
        # re-validate: instances built with model_construct skip validation
        raw = raw.model_dump(by_alias=True, exclude_none=True)
    if not isinstance(raw, Mapping):
        return ManifestValidationResult(
            valid=False, errors=(FieldError(path="", message=f"manifest must be an object, got {type(raw).__name__}"),)
        )
    try:
        manifest = PluginManifest.model_validate(dict(raw))
    except ValidationError as exc:
        return ManifestValidationResult(valid=False, errors=_errors_from_pydantic(exc))
    violations = apply_rules(manifest)
    if violations:
        return ManifestValidationResult(
            valid=False, errors=tuple(FieldError(path=p, message=m) for p, m in violations)
        )
    return ManifestValidationResult(valid=True, manifest=manifest)


def parse_manifest(raw: Any, *, plugin: Optional[str] = None) -> PluginManifest:
    """Validate and return the manifest, raising :class:`ManifestValidationError`."""
    label = plugin or (raw.get("name") if isinstance(raw, Mapping) else None) or "<unknown>"
    return validate_manifest(raw).raise_for_errors(str(label))


def validate_plugin_config(manifest: PluginManifest, values: Mapping[str, Any]) -> Tuple[FieldError, ...]:
    """Check a user's plugin configuration against the manifest's ``configSchema``."""
    return tuple(FieldError(path=p, message=m) for p, m in check_values(manifest.config_schema, values))


__all__ = [
    "FieldError",
    "ManifestValidationResult",
    "validate_manifest",
    "parse_manifest",
    "validate_plugin_config",
]
