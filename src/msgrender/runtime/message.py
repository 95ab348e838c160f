"""Compiled messages and their shared render context.

Message is the immutable, reusable result of MessageFactory.compile(). It
renders itself against a value context, a locale and a time zone by joining
each construct's contribution in template order.

RenderContext holds the default locale and zone of every Message compiled
from the same factory. It is shared by reference: changing it changes the
defaults of all those Messages at once ("last writer wins"). Pass locale
and zone to render() explicitly to isolate a call from such changes.

Thread Safety:
    Message is immutable and may be rendered concurrently from any number of
    threads. RenderContext reads and writes are guarded by an RLock; each
    render() reads the (locale, zone) pair once, atomically.

Python 3.13+.
"""

from collections.abc import Iterable, Mapping
from datetime import tzinfo
from threading import RLock

from babel import Locale

from msgrender.constants import DEFAULT_LOCALE, DEFAULT_ZONE
from msgrender.locale_utils import resolve_locale, resolve_zone

from .constructs import (
    DynamicFormatConstruct,
    RenderConstruct,
    StaticFormatConstruct,
    check_construct,
    render_construct,
)

__all__ = ["Message", "RenderContext"]


class RenderContext:
    """Mutable (locale, zone) defaults shared by compiled messages.

    Example:
        >>> ctx = RenderContext("en-US", "America/New_York")
        >>> str(ctx.locale)
        'en_US'
        >>> ctx.locale = "fr-FR"  # affects every Message sharing ctx
    """

    __slots__ = ("_lock", "_locale", "_zone")

    def __init__(
        self,
        locale: Locale | str = DEFAULT_LOCALE,
        zone: tzinfo | str = DEFAULT_ZONE,
    ) -> None:
        """Create a render context.

        Args:
            locale: Babel Locale or locale identifier (default: "en")
            zone: tzinfo or IANA zone identifier (default: "UTC")

        Raises:
            TypeError: If locale or zone is None
            ValueError: If an identifier is unknown
        """
        self._lock = RLock()
        self._locale = resolve_locale(locale)
        self._zone = resolve_zone(zone)

    @property
    def locale(self) -> Locale:
        """Default render locale."""
        with self._lock:
            return self._locale

    @locale.setter
    def locale(self, value: Locale | str) -> None:
        resolved = resolve_locale(value)
        with self._lock:
            self._locale = resolved

    @property
    def zone(self) -> tzinfo:
        """Default render time zone."""
        with self._lock:
            return self._zone

    @zone.setter
    def zone(self, value: tzinfo | str) -> None:
        resolved = resolve_zone(value)
        with self._lock:
            self._zone = resolved

    def update(self, locale: Locale | str | None = None, zone: tzinfo | str | None = None) -> None:
        """Replace locale and/or zone in one atomic step.

        Arguments left as None keep their current value.
        """
        resolved_locale = None if locale is None else resolve_locale(locale)
        resolved_zone = None if zone is None else resolve_zone(zone)
        with self._lock:
            if resolved_locale is not None:
                self._locale = resolved_locale
            if resolved_zone is not None:
                self._zone = resolved_zone

    def snapshot(self) -> tuple[Locale, tzinfo]:
        """Read (locale, zone) atomically."""
        with self._lock:
            return self._locale, self._zone

    def __repr__(self) -> str:
        """Return debug representation."""
        locale, zone = self.snapshot()
        return f"RenderContext(locale={str(locale)!r}, zone={str(zone)!r})"


class Message:
    """Compiled, immutable message template.

    Created by MessageFactory.compile(); reusable across unlimited render
    calls and threads.

    Example:
        >>> message = MessageFactory.create_default().compile("Hi ${name}!")
        >>> message.render({"name": "Ada"})
        'Hi Ada!'
        >>> message.variable_names
        ('name',)
    """

    __slots__ = ("_constructs", "_render_context", "_template", "_variable_names")

    def __init__(
        self,
        render_context: RenderContext,
        template: str,
        constructs: Iterable[RenderConstruct],
    ) -> None:
        """Initialize Message.

        Args:
            render_context: Shared default locale and zone
            template: Source template (kept for diagnostics)
            constructs: Render steps in template order

        Raises:
            TypeError: If render_context is None
        """
        if render_context is None:
            msg = "Message requires a RenderContext"
            raise TypeError(msg)
        self._render_context = render_context
        self._template = template
        self._constructs: tuple[RenderConstruct, ...] = tuple(constructs)

        names = (
            c.variable_name
            for c in self._constructs
            if isinstance(c, StaticFormatConstruct | DynamicFormatConstruct)
        )
        self._variable_names = tuple(dict.fromkeys(names))

    @property
    def render_context(self) -> RenderContext:
        """Shared context supplying the default locale and zone."""
        return self._render_context

    @property
    def template(self) -> str:
        """Source template."""
        return self._template

    @property
    def constructs(self) -> tuple[RenderConstruct, ...]:
        """Render steps in template order."""
        return self._constructs

    @property
    def variable_names(self) -> tuple[str, ...]:
        """Variables read by this message, in first-use order, without duplicates."""
        return self._variable_names

    def render(
        self,
        context: Mapping[str, object],
        locale: Locale | str | None = None,
        zone: tzinfo | str | None = None,
    ) -> str:
        """Render the message.

        Failure is atomic: either every construct renders and the full
        string is returned, or an exception propagates and nothing is.

        Args:
            context: Variable name -> value
            locale: Render locale (default: render_context.locale)
            zone: Render time zone (default: render_context.zone)

        Returns:
            Rendered text

        Raises:
            TypeError: If context is None
            VariableError: If a variable is undefined, None without a
                default, of an unsupported type, or has no default formatter
            FormatError: If a formatter rejects a value
        """
        if context is None:
            msg = "Render context mapping is required"
            raise TypeError(msg)

        default_locale, default_zone = self._render_context.snapshot()
        babel_locale = default_locale if locale is None else resolve_locale(locale)
        tz = default_zone if zone is None else resolve_zone(zone)

        parts = [render_construct(c, context, babel_locale, tz) for c in self._constructs]
        return "".join(parts)

    def validate(self, context: Mapping[str, object]) -> None:
        """Check that context can be rendered, without formatting anything.

        Runs the variable checks of render(): presence, None handling, and
        type support or default-formatter availability. Locale-dependent
        formatting failures are not detected.

        Raises:
            TypeError: If context is None
            VariableError: On the first construct that would fail
        """
        if context is None:
            msg = "Render context mapping is required"
            raise TypeError(msg)
        for construct in self._constructs:
            check_construct(construct, context)

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"Message(template={self._template!r}, constructs={len(self._constructs)})"
