"""
Switchboard utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the declaration, parsing and help layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support switches/registry/parser/printer.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr); mutable
    containers are handed out as immutable copies.

- ordinal(number)
  • 1-based position label used by fault messages ("first", "second", ..., "11th").

- compare(left, right) / collate(left, right)
  • Three-way string comparators used to order switches by name. compare() is
    case-insensitive ordinal; collate() follows the current locale.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> ordinal(3), ordinal(12), ordinal(22)
    ('third', '12th', '22nd')
    >>> compare("alpha", "Beta")
    -1
"""
import builtins
import functools
import locale
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used where None is a legitimate user value but the API needs to tell
    “not provided” apart from “provided as None”. A single instance, Unset,
    is exposed for use as the default of optional parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case the default is
    returned. Falsey values like None, 0, "" or [] are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name)           -> decorator

    Raises
    - TypeError: on a non-callable target, a non-string name, a callable whose
      names cannot be updated, or a wrong number of arguments.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)
            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively freeze mutable containers into immutable copies.

    Behavior
    - str/bytes and tuples are already immutable and are returned as-is
      (NamedTuple values such as arities keep their type).
    - Other sequences become tuples, mappings become read-only proxies over a
      fresh dict, sets become frozensets; items are processed recursively.
    - Anything else is returned unchanged.
    """
    if isinstance(object, str | bytes | tuple | frozenset):
        return object
    elif isinstance(object, Sequence):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(zip(object.keys(), map(_immortalize, object.values()))))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance and returns an immutable
    copy for container types, so callers cannot mutate internal state through
    the public API.

    Example
    - Given self._values (a list), declare values = mirror("values") to expose
      it as a tuple.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with English suffixes ("11th", "22nd").
    """
    if not isinstance(number, int):
        raise TypeError("ordinal() argument must be an integer")
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def compare(left, right, /):
    """
    Case-insensitive ordinal three-way comparison of two strings.

    Returns a negative number, zero, or a positive number. Strings equal
    ignoring case fall back to an ordinal comparison so the order is total.
    """
    if not isinstance(left, str) or not isinstance(right, str):
        raise TypeError("compare() arguments must be strings")
    folded = (left.casefold() > right.casefold()) - (left.casefold() < right.casefold())
    return folded or (left > right) - (left < right)


def collate(left, right, /):
    """
    Locale-aware three-way comparison (current LC_COLLATE), case-insensitive.
    """
    if not isinstance(left, str) or not isinstance(right, str):
        raise TypeError("collate() arguments must be strings")
    return locale.strcoll(left.casefold(), right.casefold()) or compare(left, right)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "compare",
    "collate",
)
