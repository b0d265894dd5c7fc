"""Tests for traversal configuration."""

import json

import pytest

from vtree_snapshot.shared.config import (
    DEFAULT_DATA_ATTRIBUTE,
    DEFAULT_MAX_DEPTH,
    ConfigError,
    ConfigValidationError,
    ListAttributeMode,
    SnapshotConfig,
    UnwrapConfig,
    WalkerConfig,
)


def customizer(node, registry):
    return None


class TestUnwrapConfig:
    """Test unwrap configuration defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = UnwrapConfig()

        assert config.elements_to_ignore == set()
        assert config.elements_to_unwrap == []
        assert config.unwrap_customizer is None
        assert config.data_attribute == DEFAULT_DATA_ATTRIBUTE == "data-unwrap"
        assert config.descend_into_invalid is False
        assert config.max_depth == DEFAULT_MAX_DEPTH

    def test_collections_are_coerced(self) -> None:
        """Test list and tuple inputs become the expected collection types."""
        config = UnwrapConfig(elements_to_ignore=["A", "A"], elements_to_unwrap=("B",))

        assert config.elements_to_ignore == {"A"}
        assert config.elements_to_unwrap == ["B"]

    def test_should_unwrap(self) -> None:
        """Test unwrap list membership."""
        config = UnwrapConfig(elements_to_unwrap=["Button"])

        assert config.should_unwrap("Button")
        assert not config.should_unwrap("Card")

    @pytest.mark.parametrize("kwargs,message", [
        ({"unwrap_customizer": "not callable"}, "callable"),
        ({"data_attribute": ""}, "data_attribute"),
        ({"max_depth": 0}, "max_depth"),
    ])
    def test_invalid_values(self, kwargs, message) -> None:
        """Test invalid values are rejected."""
        with pytest.raises(ValueError, match=message):
            UnwrapConfig(**kwargs)

    def test_unbounded_depth(self) -> None:
        """Test depth guard can be switched off."""
        assert UnwrapConfig(max_depth=None).max_depth is None


class TestWalkerConfig:
    """Test walker configuration."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = WalkerConfig()

        assert config.list_attribute_mode is ListAttributeMode.OWN_ENTRIES
        assert config.probe_callbacks is True
        assert config.render_prop_label == "RenderProp"
        assert config.portal_label == "Portal"

    def test_empty_labels_rejected(self) -> None:
        """Test synthetic node labels must be non-empty."""
        with pytest.raises(ValueError):
            WalkerConfig(render_prop_label="")
        with pytest.raises(ValueError):
            WalkerConfig(portal_label="")


class TestSnapshotConfig:
    """Test the combined configuration."""

    def test_default_creation(self) -> None:
        """Test default configuration."""
        config = SnapshotConfig()

        assert isinstance(config.unwrap, UnwrapConfig)
        assert isinstance(config.walker, WalkerConfig)
        assert config.enable_diagnostics is True
        assert config.logging_level == "WARNING"

    def test_is_frozen(self) -> None:
        """Test top-level fields cannot be reassigned."""
        config = SnapshotConfig()

        with pytest.raises(AttributeError):
            config.logging_level = "DEBUG"

    def test_invalid_logging_level(self) -> None:
        """Test unknown logging level."""
        with pytest.raises(ConfigValidationError) as exc_info:
            SnapshotConfig(logging_level="LOUD")

        assert exc_info.value.field_name == "logging_level"

    def test_ignored_and_unwrapped_overlap_allowed(self) -> None:
        """Test a name may be both ignored and unwrapped."""
        config = SnapshotConfig(unwrap=UnwrapConfig(elements_to_ignore={"A"}, elements_to_unwrap=["A"]))

        assert config.unwrap.elements_to_ignore == {"A"}
        assert config.unwrap.should_unwrap("A")

    def test_validation_error_is_config_error(self) -> None:
        """Test exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)

    def test_override_nested(self) -> None:
        """Test overriding nested fields."""
        config = SnapshotConfig()

        derived = config.override(
            unwrap__elements_to_unwrap=["Button"],
            walker__probe_callbacks=False,
            logging_level="DEBUG",
        )

        assert derived.unwrap.elements_to_unwrap == ["Button"]
        assert derived.walker.probe_callbacks is False
        assert derived.logging_level == "DEBUG"
        assert config.unwrap.elements_to_unwrap == []
        assert config.walker.probe_callbacks is True

    def test_override_unknown_component(self) -> None:
        """Test unknown nested component."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component"):
            SnapshotConfig().override(render__depth=3)

    def test_to_dict(self) -> None:
        """Test dictionary form is plain data without callables."""
        config = SnapshotConfig(
            unwrap=UnwrapConfig(
                elements_to_ignore={"B", "A"},
                unwrap_customizer=customizer,
            )
        )

        data = config.to_dict()

        assert data["unwrap"]["elements_to_ignore"] == ["A", "B"]
        assert "unwrap_customizer" not in data["unwrap"]
        assert data["walker"]["list_attribute_mode"] == "OWN_ENTRIES"
        json.dumps(data)

    def test_dict_round_trip(self) -> None:
        """Test from_dict accepts to_dict output."""
        config = SnapshotConfig.legacy()

        restored = SnapshotConfig.from_dict(config.to_dict())

        assert restored == config

    def test_from_dict_camel_case_aliases(self) -> None:
        """Test flat camelCase keys configure the unwrapper."""
        config = SnapshotConfig.from_dict({
            "elementsToIgnore": ["Spacer"],
            "elementsToUnwrap": ["Button"],
            "unwrapCustomizer": customizer,
        })

        assert config.unwrap.elements_to_ignore == {"Spacer"}
        assert config.unwrap.elements_to_unwrap == ["Button"]
        assert config.unwrap.unwrap_customizer is customizer

    def test_from_dict_unknown_mode(self) -> None:
        """Test unknown list attribute mode names."""
        with pytest.raises(ConfigValidationError) as exc_info:
            SnapshotConfig.from_dict({"walker": {"list_attribute_mode": "SIDEWAYS"}})

        assert "OWN_ENTRIES" in exc_info.value.suggestions

    def test_from_dict_unknown_field(self) -> None:
        """Test unknown fields are reported as validation errors."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration"):
            SnapshotConfig.from_dict({"unwrap": {"depth_limit": 3}})

    def test_from_json(self) -> None:
        """Test JSON loading."""
        config = SnapshotConfig.from_json('{"unwrap": {"max_depth": 5}, "logging_level": "INFO"}')

        assert config.unwrap.max_depth == 5
        assert config.logging_level == "INFO"

    def test_json_round_trip(self) -> None:
        """Test JSON serialization round trip."""
        config = SnapshotConfig.strict()

        assert SnapshotConfig.from_json(config.to_json()) == config


class TestPresets:
    """Test preset configurations."""

    def test_strict(self) -> None:
        """Test strict preset."""
        config = SnapshotConfig.strict()

        assert config.name == "strict"
        assert config.unwrap.max_depth == 100
        assert config.walker.probe_callbacks is False
        assert config.logging_level == "DEBUG"

    def test_legacy(self) -> None:
        """Test legacy preset reproduces the original traversal choices."""
        config = SnapshotConfig.legacy()

        assert config.name == "legacy"
        assert config.unwrap.descend_into_invalid is True
        assert config.walker.list_attribute_mode is ListAttributeMode.NODE_CHILDREN
