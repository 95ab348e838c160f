"""Tests for formatter factories and property bag handling."""

from __future__ import annotations

import pytest

from msgrender.constants import MAX_DECIMAL_PLACES
from msgrender.diagnostics import DiagnosticCode, PropertyValidationError
from msgrender.runtime import (
    CurrencyFormatter,
    CurrencyFormatterFactory,
    DateFormatterFactory,
    DecimalFormatter,
    DecimalFormatterFactory,
    IntegerFormatterFactory,
    PercentageFormatter,
    PercentageFormatterFactory,
    StringFormatterFactory,
    TimeFormatterFactory,
)


def _code(exc_info: pytest.ExceptionInfo[PropertyValidationError]) -> DiagnosticCode:
    assert exc_info.value.diagnostic is not None
    return exc_info.value.diagnostic.code


# ============================================================================
# PROPERTY-LESS FACTORIES
# ============================================================================


class TestSharedFormatterFactories:
    """Test factories whose formatters take no properties."""

    @pytest.mark.parametrize(
        "factory",
        [
            StringFormatterFactory(),
            IntegerFormatterFactory(),
            DateFormatterFactory(),
            TimeFormatterFactory(),
        ],
    )
    def test_same_instance_every_time(self, factory: StringFormatterFactory) -> None:
        """Property-less formatters are shared."""
        assert factory.create() is factory.create()
        assert factory.create({}) is factory.create(None)

    @pytest.mark.parametrize(
        "factory",
        [StringFormatterFactory(), IntegerFormatterFactory(), DateFormatterFactory()],
    )
    def test_any_property_rejected(self, factory: StringFormatterFactory) -> None:
        """These families accept no properties at all."""
        with pytest.raises(PropertyValidationError) as exc_info:
            factory.create({"decimalPlaces": "2"})

        assert _code(exc_info) == DiagnosticCode.UNKNOWN_PROPERTY

    def test_repr(self) -> None:
        """repr names the factory class."""
        assert repr(TimeFormatterFactory()) == "TimeFormatterFactory()"


# ============================================================================
# DECIMAL FAMILY FACTORIES
# ============================================================================


class TestDecimalFamilyFactory:
    """Test property parsing and defaults for decimal-family factories."""

    def test_defaults(self) -> None:
        """No properties gives places=2, padding=0, rounding=false."""
        formatter = DecimalFormatterFactory().create()

        assert isinstance(formatter, DecimalFormatter)
        assert (formatter.decimal_places, formatter.decimal_padding, formatter.rounding) == (
            2,
            0,
            False,
        )

    def test_all_properties(self) -> None:
        """Every property is parsed and applied."""
        formatter = DecimalFormatterFactory().create(
            {"decimalPlaces": "3", "decimalPadding": "1", "rounding": "true"}
        )

        assert isinstance(formatter, DecimalFormatter)
        assert (formatter.decimal_places, formatter.decimal_padding, formatter.rounding) == (
            3,
            1,
            True,
        )

    def test_keys_are_case_insensitive(self) -> None:
        """Property keys match regardless of case and surrounding space."""
        formatter = DecimalFormatterFactory().create({" DECIMALPLACES ": "4"})

        assert isinstance(formatter, DecimalFormatter)
        assert formatter.decimal_places == 4

    def test_padding_does_not_change_places(self) -> None:
        """decimalPadding sets the minimum only."""
        formatter = DecimalFormatterFactory().create({"decimalPadding": "1"})

        assert isinstance(formatter, DecimalFormatter)
        assert formatter.decimal_places == 2
        assert formatter.decimal_padding == 1

    def test_padding_clamped_to_places(self) -> None:
        """Padding above places is clamped."""
        formatter = DecimalFormatterFactory().create({"decimalPlaces": "1", "decimalPadding": "4"})

        assert isinstance(formatter, DecimalFormatter)
        assert formatter.decimal_padding == 1

    def test_equal_configurations_share_formatter(self) -> None:
        """Formatters are immutable, so equal configurations share an instance."""
        factory = DecimalFormatterFactory()

        first = factory.create({"decimalPlaces": "3"})
        second = factory.create({"decimalplaces": "3", "rounding": "false"})

        assert first is second

    def test_families_do_not_share(self) -> None:
        """Each factory builds its own formatter class."""
        properties = {"decimalPlaces": "1"}

        assert isinstance(PercentageFormatterFactory().create(properties), PercentageFormatter)
        assert isinstance(CurrencyFormatterFactory().create(properties), CurrencyFormatter)

    @pytest.mark.parametrize(
        ("properties", "code", "property_name"),
        [
            ({"decimalPlaces": "two"}, DiagnosticCode.INVALID_PROPERTY_VALUE, "decimalPlaces"),
            ({"decimalPadding": "1.5"}, DiagnosticCode.INVALID_PROPERTY_VALUE, "decimalPadding"),
            ({"rounding": "yes"}, DiagnosticCode.INVALID_PROPERTY_VALUE, "rounding"),
            ({"decimalPlaces": "-1"}, DiagnosticCode.PROPERTY_CONSTRAINT, "decimalPlaces"),
            ({"decimalPadding": "-3"}, DiagnosticCode.PROPERTY_CONSTRAINT, "decimalPadding"),
            ({"decimalPlaces": "341"}, DiagnosticCode.PROPERTY_CONSTRAINT, "decimalPlaces"),
            ({"decimalPadding": "341"}, DiagnosticCode.PROPERTY_CONSTRAINT, "decimalPadding"),
            ({"decimalPlaces": "9" * 5000}, DiagnosticCode.INVALID_PROPERTY_VALUE, "decimalPlaces"),
            ({"decimalPlaces": " "}, DiagnosticCode.EMPTY_PROPERTY, "decimalPlaces"),
            ({"scale": "2"}, DiagnosticCode.UNKNOWN_PROPERTY, "scale"),
        ],
    )
    def test_invalid_properties(
        self, properties: dict[str, str], code: DiagnosticCode, property_name: str
    ) -> None:
        """Invalid bags raise PropertyValidationError naming the property."""
        with pytest.raises(PropertyValidationError) as exc_info:
            DecimalFormatterFactory().create(properties)

        assert _code(exc_info) == code
        assert exc_info.value.property_name == property_name

    def test_upper_bound_is_inclusive(self) -> None:
        """MAX_DECIMAL_PLACES itself is accepted for places and padding."""
        formatter = DecimalFormatterFactory().create(
            {"decimalPlaces": str(MAX_DECIMAL_PLACES), "decimalPadding": str(MAX_DECIMAL_PLACES)}
        )

        assert isinstance(formatter, DecimalFormatter)
        assert formatter.decimal_places == MAX_DECIMAL_PLACES
        assert formatter.decimal_padding == MAX_DECIMAL_PLACES

    def test_oversized_places_name_the_bound(self) -> None:
        """The constraint message states the maximum."""
        with pytest.raises(PropertyValidationError) as exc_info:
            PercentageFormatterFactory().create({"decimalPlaces": "50000000"})

        assert _code(exc_info) == DiagnosticCode.PROPERTY_CONSTRAINT
        assert f"at most {MAX_DECIMAL_PLACES}" in str(exc_info.value)

    def test_formatter_rejects_oversized_places(self) -> None:
        """Direct construction enforces the same bound."""
        with pytest.raises(ValueError, match="cannot exceed"):
            DecimalFormatter(MAX_DECIMAL_PLACES + 1)

    def test_allowed_properties(self) -> None:
        """The decimal family declares its three properties."""
        assert CurrencyFormatterFactory.allowed_properties == (
            "decimalPlaces",
            "decimalPadding",
            "rounding",
        )
