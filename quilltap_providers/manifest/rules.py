"""
Dependent-field rules for plugin manifests.

Each rule inspects a structurally valid :class:`PluginManifest` and yields
``(path, message)`` pairs; an empty result means the rule holds. Rules are
pure and independent so the validator can report every violation at once.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Tuple

from .capability import PROVIDER_CAPABILITIES, PluginCapability
from .schema import ConfigField, PluginManifest

Violation = Tuple[str, str]
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL_RE = re.compile(r"^https?://[^\s/?#]+[^\s]*$")
_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


def parse_version(value: str) -> Tuple[int, int, int]:
    """Extract ``(major, minor, patch)`` from a version or bound string.

    Raises:
        ValueError: when no ``x.y.z`` triple is present.
    """
    match = _VERSION_RE.search(value or "")
    if not match:
        raise ValueError(f"unparseable version: {value!r}")
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def check_config_value(field: ConfigField, value: Any) -> Optional[str]:
    """Return an error message when ``value`` does not fit ``field``, else ``None``."""
    kind = field.type
    if kind == "boolean":
        return None if isinstance(value, bool) else "must be a boolean"
    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return "must be a number"
        if field.min is not None and value < field.min:
            return f"must be >= {field.min:g}"
        if field.max is not None and value > field.max:
            return f"must be <= {field.max:g}"
        return None
    if kind == "select":
        allowed = [o.value for o in field.options or ()]
        return None if value in allowed else f"must be one of {allowed!r}"
    if not isinstance(value, str):
        return "must be a string"
    if kind == "url" and value and not _URL_RE.match(value):
        return "must be an http(s) URL"
    if kind == "email" and value and not _EMAIL_RE.match(value):
        return "must be an email address"
    if field.pattern and not re.search(field.pattern, value):
        return f"must match pattern {field.pattern}"
    return None


def _provider_config_rule(manifest: PluginManifest) -> Iterator[Violation]:
    provider_caps = sorted(c.value for c in manifest.capabilities if c in PROVIDER_CAPABILITIES)
    if provider_caps and manifest.provider_config is None:
        yield "providerConfig", f"required when capabilities include {', '.join(provider_caps)}"
    if manifest.provider_config is not None and not provider_caps:
        yield "capabilities", "providerConfig requires one of EMBEDDING_PROVIDER, IMAGE_PROVIDER, LLM_PROVIDER"


def _auth_config_rule(manifest: PluginManifest) -> Iterator[Violation]:
    declares_auth = PluginCapability.AUTH_METHODS in manifest.capabilities
    if declares_auth and manifest.auth_provider_config is None:
        yield "authProviderConfig", "required when capabilities include AUTH_METHODS"
    if manifest.auth_provider_config is not None and not declares_auth:
        yield "capabilities", "authProviderConfig requires AUTH_METHODS"


def _attachment_support_rule(manifest: PluginManifest) -> Iterator[Violation]:
    if manifest.provider_config is None:
        return
    support = manifest.provider_config.attachment_support
    base = "providerConfig.attachmentSupport"
    if support.supported and not support.mime_types:
        yield f"{base}.mimeTypes", "must list at least one MIME type when supported is true"
    if not support.supported and support.mime_types:
        yield f"{base}.supported", "must be true when mimeTypes are listed"
    lowered = [m.lower() for m in support.mime_types]
    if len(set(lowered)) != len(lowered):
        yield f"{base}.mimeTypes", "must not contain duplicates"


def _compatibility_rule(manifest: PluginManifest) -> Iterator[Violation]:
    compat = manifest.compatibility
    if compat.quilltap_max_version is None:
        return
    try:
        low = parse_version(compat.quilltap_version)
        high = parse_version(compat.quilltap_max_version)
    except ValueError as exc:
        yield "compatibility", str(exc)
        return
    if low > high:
        yield "compatibility.quilltapMaxVersion", (
            f"maximum version {compat.quilltap_max_version} is below minimum {compat.quilltap_version}"
        )


def _default_config_rule(manifest: PluginManifest) -> Iterator[Violation]:
    fields = {f.key: f for f in manifest.config_schema}
    for index, field in enumerate(manifest.config_schema):
        if field.default is not None:
            problem = check_config_value(field, field.default)
            if problem:
                yield f"configSchema.{index}.default", problem
    for key in sorted(manifest.default_config):
        field = fields.get(key)
        if field is None:
            yield f"defaultConfig.{key}", "is not declared in configSchema"
            continue
        problem = check_config_value(field, manifest.default_config[key])
        if problem:
            yield f"defaultConfig.{key}", problem


RULES: Tuple[Callable[[PluginManifest], Iterable[Violation]], ...] = (
    _provider_config_rule,
    _auth_config_rule,
    _attachment_support_rule,
    _compatibility_rule,
    _default_config_rule,
)


def apply_rules(manifest: PluginManifest) -> List[Violation]:
    """Run every dependent rule and collect the violations in rule order."""
    out: List[Violation] = []
    for rule in RULES:
        out.extend(rule(manifest))
    return out


def check_values(schema: Iterable[ConfigField], values: Mapping[str, Any]) -> List[Violation]:
    """Validate a user configuration against ``schema``.

    Unlike ``defaultConfig`` checks this enforces ``required`` fields; empty
    strings count as missing.
    """
    fields = {f.key: f for f in schema}
    out: List[Violation] = []
    for key, field in fields.items():
        value = values.get(key)
        if value is None or value == "":
            if field.required:
                out.append((key, f"{field.label} is required"))
            continue
        problem = check_config_value(field, value)
        if problem:
            out.append((key, f"{field.label} {problem}"))
    for key in sorted(set(values) - set(fields)):
        out.append((key, "is not a known configuration key"))
    return out


__all__ = ["apply_rules", "check_config_value", "check_values", "parse_version", "RULES"]
