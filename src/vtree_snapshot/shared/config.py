"""Configuration classes for virtual tree traversal.

This module provides configuration objects for the unwrapper and the tree
walker, plus the combined ``SnapshotConfig`` used by the API layer.
"""

import inspect
import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Set

# Attribute that lets a host element opt into being unwrapped
DEFAULT_DATA_ATTRIBUTE = "data-unwrap"
DEFAULT_MAX_DEPTH = 1000

# Keys accepted by from_dict for configs written against the camelCase API
_CAMEL_CASE_ALIASES = {
    "elementsToIgnore": "elements_to_ignore",
    "elementsToUnwrap": "elements_to_unwrap",
    "unwrapCustomizer": "unwrap_customizer",
}

# Fields holding live callables are never serialized
_NON_SERIALIZABLE_FIELDS = {"unwrap_customizer"}

_COMPONENT_FIELDS = ["unwrap", "walker"]


def _accepts_registry(customizer: Optional[Callable[..., Any]]) -> bool:
    if customizer is None:
        return True
    try:
        params = list(inspect.signature(customizer).parameters.values())
    except (TypeError, ValueError):
        # No introspectable signature, assume the two-argument form
        return True
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return True
    positional = [
        p for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    return len(positional) >= 2


class ListAttributeMode(Enum):
    """How the walker treats list-valued attributes."""

    OWN_ENTRIES = auto()     # Normalize the entries of the list itself
    NODE_CHILDREN = auto()   # Replace the list with the node's walked children


@dataclass
class UnwrapConfig:
    """Configuration for single-path unwrapping.

    ``unwrap_customizer`` is called as ``customizer(node, registry)``; a
    customizer taking a single argument is called as ``customizer(node)``.
    """

    elements_to_ignore: Set[str] = field(default_factory=set)
    elements_to_unwrap: List[str] = field(default_factory=list)
    unwrap_customizer: Optional[Callable[..., Any]] = None
    data_attribute: str = DEFAULT_DATA_ATTRIBUTE
    descend_into_invalid: bool = False
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate unwrap configuration."""
        if not isinstance(self.elements_to_ignore, set):
            self.elements_to_ignore = set(self.elements_to_ignore)
        if not isinstance(self.elements_to_unwrap, list):
            self.elements_to_unwrap = list(self.elements_to_unwrap)
        if self.unwrap_customizer is not None and not callable(self.unwrap_customizer):
            raise ValueError("unwrap_customizer must be callable or None")
        if not self.data_attribute:
            raise ValueError("data_attribute cannot be empty")
        if self.max_depth is not None and self.max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")
        self._customizer_takes_registry = _accepts_registry(self.unwrap_customizer)

    def should_unwrap(self, name: str) -> bool:
        """Check whether a component with this display name is unwrapped."""
        return name in self.elements_to_unwrap

    def customize(self, node: Any, registry: Any) -> Any:
        """Resolve the content after ``node`` with the configured customizer."""
        if self._customizer_takes_registry:
            return self.unwrap_customizer(node, registry)
        return self.unwrap_customizer(node)


@dataclass
class WalkerConfig:
    """Configuration for full-tree walking."""

    list_attribute_mode: ListAttributeMode = ListAttributeMode.OWN_ENTRIES
    probe_callbacks: bool = True
    render_prop_label: str = "RenderProp"
    portal_label: str = "Portal"

    def __post_init__(self) -> None:
        """Validate walker configuration."""
        if not self.render_prop_label:
            raise ValueError("render_prop_label cannot be empty")
        if not self.portal_label:
            raise ValueError("portal_label cannot be empty")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class SnapshotConfig:
    """Complete configuration for unwrapping and walking virtual trees.

    Immutable; use ``override`` to derive variations. Errors from the nested
    component configs are re-raised as ``ConfigValidationError``. A name may
    be both ignored and unwrapped: ignoring only filters lists of candidates,
    so a lone node with that name is still unwrapped.
    """

    unwrap: UnwrapConfig = field(default_factory=UnwrapConfig)
    walker: WalkerConfig = field(default_factory=WalkerConfig)

    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    logging_level: str = "WARNING"

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete snapshot configuration."""
        try:
            self.unwrap.__post_init__()
            self.walker.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ConfigValidationError(
                f"logging_level must be one of {valid_levels}",
                field_name="logging_level"
            )

    def override(self, **kwargs: Any) -> "SnapshotConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New SnapshotConfig instance with overrides applied

        Example:
            >>> config = SnapshotConfig()
            >>> strict = config.override(
            ...     unwrap__elements_to_unwrap=["Button"],
            ...     walker__probe_callbacks=False
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENT_FIELDS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENT_FIELDS and isinstance(value, dict):
                new_fields[key] = replace(getattr(self, key), **value)
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format.

        Live callables such as the unwrap customizer are left out.
        """
        def _convert(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    f.name: _convert(getattr(obj, f.name))
                    for f in fields(obj)
                    if f.name not in _NON_SERIALIZABLE_FIELDS
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, set):
                return sorted(obj)
            if isinstance(obj, (list, tuple)):
                return [_convert(item) for item in obj]
            if isinstance(obj, dict):
                return {key: _convert(value) for key, value in obj.items()}
            return obj

        return _convert(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapshotConfig":
        """Create configuration from dictionary.

        Unwrap settings may also be given flat at the top level using the
        camelCase names (``elementsToIgnore``, ``elementsToUnwrap``,
        ``unwrapCustomizer``).

        Args:
            data: Dictionary containing configuration data

        Returns:
            SnapshotConfig instance created from dictionary
        """
        data = dict(data)
        unwrap_data = dict(data.pop("unwrap", None) or {})
        walker_data = dict(data.pop("walker", None) or {})

        for alias, field_name in _CAMEL_CASE_ALIASES.items():
            if alias in data:
                unwrap_data[field_name] = data.pop(alias)

        mode = walker_data.get("list_attribute_mode")
        if isinstance(mode, str):
            try:
                walker_data["list_attribute_mode"] = ListAttributeMode[mode]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Unknown list_attribute_mode: {mode}",
                    field_name="walker.list_attribute_mode",
                    suggestions=[m.name for m in ListAttributeMode],
                ) from e

        try:
            unwrap = UnwrapConfig(**unwrap_data)
            walker = WalkerConfig(**walker_data)
            return cls(unwrap=unwrap, walker=walker, **data)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "SnapshotConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def strict(cls) -> "SnapshotConfig":
        """Create preset that stops early and keeps callbacks untouched."""
        return cls(
            unwrap=UnwrapConfig(descend_into_invalid=False, max_depth=100),
            walker=WalkerConfig(probe_callbacks=False),
            logging_level="DEBUG",
            name="strict",
            description="Terminal on invalid nodes, shallow depth guard, no probing",
        )

    @classmethod
    def legacy(cls) -> "SnapshotConfig":
        """Create preset reproducing the original traversal behaviour."""
        return cls(
            unwrap=UnwrapConfig(descend_into_invalid=True),
            walker=WalkerConfig(list_attribute_mode=ListAttributeMode.NODE_CHILDREN),
            name="legacy",
            description=(
                "Descends into invalid nodes and replaces list attributes "
                "with the node's children"
            ),
        )
