"""Tests for SchemaConfig validation and the option enums."""

from __future__ import annotations

import dataclasses

import pytest

from xmlshape.config import DEFAULT_TIME_FORMAT, FieldOrder, NamespaceMode, SchemaConfig
from xmlshape.schema.names import QName, ignore_namespace, keep_namespace


class TestSchemaConfigDefaults:
    def test_defaults(self) -> None:
        config = SchemaConfig()
        assert not config.named_types
        assert not config.compact_types
        assert config.order is FieldOrder.LEXICAL
        assert config.namespaces is NamespaceMode.IGNORE
        assert config.time_format == DEFAULT_TIME_FORMAT
        assert not config.top_level_attributes
        assert not config.named_root
        assert config.empty_elements
        assert config.char_data_field_name == "CharData"
        assert config.attr_name_suffix == ""
        assert config.elem_name_suffix == ""

    def test_frozen(self) -> None:
        config = SchemaConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.named_types = True  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(SchemaConfig(), compact_types=True)
        assert config.compact_types


class TestSchemaConfigValidation:
    def test_empty_char_data_field_name(self) -> None:
        with pytest.raises(ValueError, match="char_data_field_name"):
            SchemaConfig(char_data_field_name="")

    def test_empty_time_format(self) -> None:
        with pytest.raises(ValueError, match="time_format"):
            SchemaConfig(time_format="")

    def test_time_format_none_disables(self) -> None:
        assert SchemaConfig(time_format=None).time_format is None

    @pytest.mark.parametrize("field", ["attr_name_suffix", "elem_name_suffix"])
    def test_suffix_must_be_identifier_chars(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            SchemaConfig(**{field: "-x"})

    def test_valid_suffixes(self) -> None:
        config = SchemaConfig(attr_name_suffix="Attr", elem_name_suffix="_1")
        assert config.attr_name_suffix == "Attr"


class TestEnums:
    def test_field_order_values(self) -> None:
        assert FieldOrder("discovery") is FieldOrder.DISCOVERY
        assert FieldOrder("lexical") is FieldOrder.LEXICAL

    def test_namespace_mode_normalizers(self) -> None:
        assert NamespaceMode.IGNORE.normalizer() is ignore_namespace
        assert NamespaceMode.KEEP.normalizer() is keep_namespace
        name = QName("a", "urn:x")
        assert NamespaceMode.KEEP.normalizer()(name) == name
        assert NamespaceMode.IGNORE.normalizer()(name) == QName("a")
