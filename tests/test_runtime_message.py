"""Tests for Message rendering and the shared RenderContext.

Tests cover:
- End-to-end rendering scenarios across locales
- Variable failures and their kinds (undefined, type, no formatter, None)
- Per-call locale/zone overrides and shared-context semantics
- validate(), variable_names, idempotence and concurrent rendering
"""

from __future__ import annotations

from collections import UserString
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from babel.numbers import get_decimal_symbol, get_group_symbol
from hypothesis import given
from hypothesis import strategies as st

from msgrender import (
    FormatError,
    Message,
    MessageFactory,
    RenderContext,
    UnknownFormatterError,
    VariableError,
    VariableErrorKind,
)
from msgrender.diagnostics import DiagnosticCode
from tests.strategies import (
    decimal_configs,
    finite_decimals,
    literal_only_templates,
    plain_text,
    vague_templates,
)

# ============================================================================
# END-TO-END SCENARIOS
# ============================================================================


class TestRenderScenarios:
    """Representative templates rendered end to end."""

    def test_vague_tokens_default_locale(self) -> None:
        """String and integer values render through their default formatters."""
        message = MessageFactory.create_default().compile("Mr. ${lastName} is ${age} years old.")

        assert message.render({"lastName": "Holmes", "age": 60}) == "Mr. Holmes is 60 years old."

    def test_explicit_decimal_with_padding(self, factory: MessageFactory) -> None:
        """Explicit properties fix the fraction digits."""
        message = factory.compile("${price;decimal;decimalPlaces=3;decimalPadding=3}")

        assert message.render({"price": 1.44}) == "1.440"

    def test_large_float_grouped_and_truncated(self, factory: MessageFactory) -> None:
        """Vague floats are grouped and cut to two fraction digits."""
        message = factory.compile("${distance}KM")

        assert message.render({"distance": 1500000000.12}) == "1,500,000,000.12KM"

    def test_large_float_in_comma_decimal_locale(self, factory: MessageFactory) -> None:
        """Another locale yields a different but value-equivalent string."""
        message = factory.compile("${distance}KM")
        group = get_group_symbol("fr_FR")
        decimal = get_decimal_symbol("fr_FR")

        result = message.render({"distance": 1500000000.12}, locale="fr_FR")

        assert result == f"1{group}500{group}000{group}000{decimal}12KM"

    def test_unknown_formatter_fails_at_compile(self, factory: MessageFactory) -> None:
        """Unregistered explicit formatters never reach render."""
        with pytest.raises(UnknownFormatterError):
            factory.compile("${price;money}")

    def test_no_default_formatter_for_type(self, factory: MessageFactory) -> None:
        """A vague value of an unregistered type is a NO_FORMATTER error."""
        message = factory.compile("${items}")

        with pytest.raises(VariableError, match="does not have an associated") as exc_info:
            message.render({"items": [1, 2]})

        assert exc_info.value.kind == VariableErrorKind.NO_FORMATTER
        assert exc_info.value.variable_name == "items"

    def test_all_default_types(self, factory: MessageFactory) -> None:
        """Every default binding renders through its formatter family."""
        message = factory.compile("${s}|${u}|${i}|${f}|${d}|${day}|${moment}")

        result = message.render(
            {
                "s": "text",
                "u": UserString("user"),
                "i": 1234,
                "f": 0.5,
                "d": Decimal("2.999"),
                "day": date(2024, 3, 9),
                "moment": datetime(2024, 3, 9, 12, 0, tzinfo=UTC),
            }
        )

        assert result == "text|user|1,234|0.5|2.99|3/9/24|3/9/24"

    def test_explicit_families(self, factory: MessageFactory) -> None:
        """Percentage, currency and time render through explicit tokens."""
        message = factory.compile(
            "${rate;percentage;decimalPlaces=1} of ${total;currency;decimalPadding=2}"
        )

        assert message.render({"rate": 0.256, "total": 1234.5}) == "25.6% of $1,234.50"

    def test_explicit_time(self, factory: MessageFactory) -> None:
        """Datetimes render as times through the time formatter."""
        message = factory.compile("${at;time}")

        result = message.render({"at": datetime(2024, 3, 9, 15, 30)})

        assert "3:30" in result

    def test_escaped_prefix_renders_verbatim(self, factory: MessageFactory) -> None:
        """Escaped delimiters, escape included, are literal output."""
        message = factory.compile("Cost: \\${price}")

        assert message.render({}) == "Cost: \\${price}"

    def test_empty_template(self, factory: MessageFactory) -> None:
        """An empty template compiles to nothing and renders empty."""
        message = factory.compile("")

        assert message.constructs == ()
        assert message.render({}) == ""

    def test_same_variable_twice(self, factory: MessageFactory) -> None:
        """A variable may appear in several tokens with different formatters."""
        message = factory.compile("${x} / ${x;decimal;decimalPlaces=0}")

        assert message.render({"x": 2.75}) == "2.75 / 2"

    def test_extra_context_entries_ignored(self, factory: MessageFactory) -> None:
        """Unreferenced context entries are ignored."""
        message = factory.compile("Hi ${name}")

        assert message.render({"name": "Ada", "unused": object()}) == "Hi Ada"


# ============================================================================
# VARIABLE FAILURES
# ============================================================================


class TestRenderFailures:
    """Test render-time variable failures."""

    def test_undefined_variable(self, factory: MessageFactory) -> None:
        """Missing variables are UNDEFINED, distinct from type errors."""
        message = factory.compile("Hi ${name}")

        with pytest.raises(VariableError, match="does not exist in context") as exc_info:
            message.render({})

        assert exc_info.value.kind == VariableErrorKind.UNDEFINED
        assert exc_info.value.variable_name == "name"

    def test_explicit_formatter_type_unsupported(self, factory: MessageFactory) -> None:
        """Values the explicit formatter cannot handle are TYPE_UNSUPPORTED."""
        message = factory.compile("${price;decimal}")

        with pytest.raises(VariableError) as exc_info:
            message.render({"price": "12.5"})

        assert exc_info.value.kind == VariableErrorKind.TYPE_UNSUPPORTED
        assert "Supported types are: Decimal, float, int" in str(exc_info.value)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.VARIABLE_TYPE_UNSUPPORTED

    def test_bool_has_no_default_formatter(self, factory: MessageFactory) -> None:
        """bool does not fall back to the int binding."""
        message = factory.compile("${flag}")

        with pytest.raises(VariableError) as exc_info:
            message.render({"flag": True})

        assert exc_info.value.kind == VariableErrorKind.NO_FORMATTER

    def test_bool_rejected_by_explicit_integer(self, factory: MessageFactory) -> None:
        """Exact type dispatch applies to explicit formatters too."""
        message = factory.compile("${flag;integer}")

        with pytest.raises(VariableError) as exc_info:
            message.render({"flag": False})

        assert exc_info.value.kind == VariableErrorKind.TYPE_UNSUPPORTED

    def test_none_with_explicit_string_renders_default(self, factory: MessageFactory) -> None:
        """The string formatter's default value is used for None."""
        message = factory.compile("[${name;string}]")

        assert message.render({"name": None}) == "[]"

    def test_none_with_explicit_formatter_without_default(self, factory: MessageFactory) -> None:
        """None is VALUE_MISSING when the formatter has no default."""
        message = factory.compile("${price;decimal}")

        with pytest.raises(VariableError, match="is None and has no default value") as exc_info:
            message.render({"price": None})

        assert exc_info.value.kind == VariableErrorKind.VALUE_MISSING
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.formatter_name == "DecimalFormatter"

    def test_none_with_vague_token(self, factory: MessageFactory) -> None:
        """A vague token cannot pick a formatter for None."""
        message = factory.compile("${name}")

        with pytest.raises(VariableError) as exc_info:
            message.render({"name": None})

        assert exc_info.value.kind == VariableErrorKind.VALUE_MISSING

    def test_variable_error_is_format_error(self, factory: MessageFactory) -> None:
        """VariableError can be caught as FormatError."""
        with pytest.raises(FormatError):
            factory.compile("${x}").render({})

    def test_failure_is_atomic(self, factory: MessageFactory) -> None:
        """A failing later token aborts the whole render."""
        message = factory.compile("${a} and ${b}")

        with pytest.raises(VariableError) as exc_info:
            message.render({"a": "fine"})

        assert exc_info.value.variable_name == "b"

    def test_none_context_raises_type_error(self, factory: MessageFactory) -> None:
        """The value context is required."""
        with pytest.raises(TypeError):
            factory.compile("x").render(None)  # type: ignore[arg-type]

    def test_message_requires_render_context(self) -> None:
        """Message cannot be built without a RenderContext."""
        with pytest.raises(TypeError):
            Message(None, "", ())  # type: ignore[arg-type]


# ============================================================================
# LOCALE AND ZONE
# ============================================================================


class TestLocaleAndZone:
    """Test default, overridden and shared locale/zone."""

    def test_per_call_locale_override(self, factory: MessageFactory) -> None:
        """An explicit locale wins over the shared default for one call."""
        message = factory.compile("${n}")

        assert message.render({"n": 1234567}, locale="de-DE") == "1.234.567"
        assert message.render({"n": 1234567}) == "1,234,567"

    def test_per_call_zone_override(self, factory: MessageFactory) -> None:
        """An explicit zone wins over the shared default for one call."""
        message = factory.compile("${when}")
        instant = datetime(2024, 3, 9, 23, 30, tzinfo=UTC)

        assert message.render({"when": instant}) == "3/9/24"
        assert message.render({"when": instant}, zone="Asia/Tokyo") == "3/10/24"

    def test_shared_context_mutation_affects_all_messages(
        self, factory: MessageFactory
    ) -> None:
        """Changing the shared context changes every message's defaults."""
        first = factory.compile("${n}")
        second = factory.compile("${n;decimal;decimalPadding=2}")

        factory.render_context.locale = "de_DE"

        assert first.render({"n": 1234}) == "1.234"
        assert second.render({"n": 1234}) == "1.234,00"

    def test_shared_zone_mutation(self, factory: MessageFactory) -> None:
        """Zone changes are seen by already-compiled messages."""
        message = factory.compile("${when}")
        instant = datetime(2024, 3, 9, 23, 30, tzinfo=UTC)

        factory.render_context.zone = "Asia/Tokyo"

        assert message.render({"when": instant}) == "3/10/24"

    def test_unknown_locale_override(self, factory: MessageFactory) -> None:
        """Unknown locale identifiers are rejected."""
        with pytest.raises(ValueError, match="locale"):
            factory.compile("x").render({}, locale="zz_ZZ")


class TestRenderContext:
    """Test the shared locale/zone holder."""

    def test_defaults(self) -> None:
        """Defaults are en / UTC."""
        context = RenderContext()

        assert str(context.locale) == "en"
        assert str(context.zone) == "UTC"

    def test_bcp47_identifiers_normalized(self) -> None:
        """Hyphenated identifiers are accepted."""
        assert str(RenderContext("pt-BR").locale) == "pt_BR"

    def test_update_is_atomic_pair(self) -> None:
        """update() replaces both values; None keeps the current one."""
        context = RenderContext("en_US", "UTC")
        context.update(locale="fr_FR", zone="Europe/Paris")
        context.update(zone=None)

        locale, zone = context.snapshot()
        assert str(locale) == "fr_FR"
        assert str(zone) == "Europe/Paris"

    def test_failed_update_changes_nothing(self) -> None:
        """An invalid zone leaves the locale untouched too."""
        context = RenderContext("en_US", "UTC")

        with pytest.raises(ValueError, match="time zone"):
            context.update(locale="de_DE", zone="Mars/Olympus")

        assert str(context.locale) == "en_US"

    def test_none_rejected(self) -> None:
        """Locale and zone are required."""
        with pytest.raises(TypeError):
            RenderContext(None, "UTC")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            RenderContext().zone = None  # type: ignore[assignment]

    def test_repr(self) -> None:
        """repr shows locale and zone."""
        assert repr(RenderContext("en_US", "UTC")) == "RenderContext(locale='en_US', zone='UTC')"


# ============================================================================
# MESSAGE API
# ============================================================================


class TestMessageApi:
    """Test validate, variable_names and other accessors."""

    def test_variable_names_ordered_and_unique(self, factory: MessageFactory) -> None:
        """Names appear in first-use order without duplicates."""
        message = factory.compile("${b} ${a} ${b;string} done")

        assert message.variable_names == ("b", "a")

    def test_template_is_kept(self, factory: MessageFactory) -> None:
        """The source template is available for diagnostics."""
        assert factory.compile("Hi ${name}").template == "Hi ${name}"

    def test_validate_passes(self, factory: MessageFactory) -> None:
        """A renderable context validates."""
        message = factory.compile("${name} ${n;decimal} ${s;string}")

        message.validate({"name": "x", "n": 1.5, "s": None})

    @pytest.mark.parametrize(
        ("context", "kind"),
        [
            ({"n": 1.5}, VariableErrorKind.UNDEFINED),
            ({"name": [], "n": 1.5}, VariableErrorKind.NO_FORMATTER),
            ({"name": "x", "n": "1.5"}, VariableErrorKind.TYPE_UNSUPPORTED),
            ({"name": "x", "n": None}, VariableErrorKind.VALUE_MISSING),
            ({"name": None, "n": 1.5}, VariableErrorKind.VALUE_MISSING),
        ],
    )
    def test_validate_reports_first_failure(
        self, factory: MessageFactory, context: dict[str, object], kind: VariableErrorKind
    ) -> None:
        """validate() raises the same VariableError kinds as render()."""
        message = factory.compile("${name} ${n;decimal}")

        with pytest.raises(VariableError) as exc_info:
            message.validate(context)

        assert exc_info.value.kind == kind

    def test_repr(self, factory: MessageFactory) -> None:
        """repr shows template and construct count."""
        assert repr(factory.compile("a ${b}")) == "Message(template='a ${b}', constructs=2)"


# ============================================================================
# PROPERTIES AND CONCURRENCY
# ============================================================================


class TestRenderProperties:
    """Property tests for rendering."""

    @given(template=literal_only_templates())
    def test_literal_only_renders_itself(self, template: str) -> None:
        """PROPERTY: templates without tokens render unchanged."""
        message = MessageFactory.create_default().compile(template)

        assert message.render({}) == template

    @given(case=vague_templates())
    def test_string_substitution(self, case: tuple[str, list[str]]) -> None:
        """PROPERTY: vague tokens bound to strings are substituted in place."""
        template, names = case
        context = {name: f"[{name}]" for name in names}
        expected = template
        for name in set(names):
            expected = expected.replace("${" + name + "}", context[name])

        message = MessageFactory.create_default().compile(template)

        assert message.render(context) == expected
        assert message.render(context) == message.render(context)

    @given(case=vague_templates(), data=st.data())
    def test_compiling_twice_renders_identically(
        self, case: tuple[str, list[str]], data: st.DataObject
    ) -> None:
        """PROPERTY: two compilations of one template render the same text."""
        template, names = case
        values = st.one_of(plain_text(max_size=10), st.integers(), finite_decimals())
        context = {name: data.draw(values) for name in names}
        factory = MessageFactory.create_default(locale="de-DE", zone="Europe/Berlin")

        first = factory.compile(template)
        second = factory.compile(template)

        assert first is not second
        assert first.render(context, "fr-FR", "UTC") == second.render(context, "fr-FR", "UTC")

    @given(config=decimal_configs(), amount=finite_decimals(), count=st.integers())
    def test_compiling_explicit_template_twice(
        self, config: tuple[int, int, bool], amount: Decimal, count: int
    ) -> None:
        """PROPERTY: explicit decimal-family tokens compile deterministically."""
        places, padding, rounding = config
        template = (
            f"${{count}} items: ${{amount;decimal;decimalPlaces={places};"
            f"decimalPadding={padding};rounding={str(rounding).lower()}}}, "
            f"${{amount;currency;decimalPlaces={places}}}"
        )
        factory = MessageFactory.create_default(locale="en-US", zone="UTC")
        context = {"count": count, "amount": amount}

        first = factory.compile(template)
        second = factory.compile(template)

        assert first.render(context) == second.render(context)
        assert first.render(context, "ja-JP") == second.render(context, "ja-JP")


class TestConcurrentRendering:
    """Test that one Message renders correctly from many threads."""

    def test_parallel_renders_with_distinct_locales(self, factory: MessageFactory) -> None:
        """Per-call locales never leak between threads."""
        message = factory.compile("${n;decimal;decimalPadding=2}")
        locales = ["en_US", "de_DE"] * 50

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda loc: message.render({"n": 1234.5}, locale=loc), locales))

        expected = {"en_US": "1,234.50", "de_DE": "1.234,50"}
        assert results == [expected[loc] for loc in locales]
