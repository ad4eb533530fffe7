r"""
Switchboard switch declarations.

Overview
- Token grammar
  • PREFIX ("-") and LONGPREFIX ("--"); a switch token is a prefix followed by a
    non-blank name that does not itself start with a prefix ("-v", "--verbose").
    "---v", "-" and "--" are value tokens, not switch tokens.

- Arity
  • ArityKind: NONE, FIXED, AT_LEAST_ONE.
  • Arity(kind, count): count is the minimum number of values (0, n, 1).
    Arity.fixed(0) normalizes to NONE.

- Switch
  • A declared command-line option: name, optional long name and description,
    required flag, arity, value labels (metavars) and captured values.
  • SwitchType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields named in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: str, non-blank, no prefix (TypeError / InvalidDeclarationError).
- longname: Unset | str, same rules; equal to name or blank → None.
- descr: Unset | str | Text; blank → None.
- nargs: Unset | int (>= 0) | "+" | Arity; Unset derives FIXED(len(metavars)).
- metavars: Iterable[str]; blank labels dropped, capped to the fixed count.

Quick example:
    >>> from switchboard.switches import Switch
    >>> output = Switch("o", "output", "Where to write.", metavars=["file"])
    >>> output.arity
    Arity(kind=<ArityKind.FIXED: 1>, count=1)
    >>> output.append("out.txt"), output.append("extra")
    (True, False)
    >>> output.values
    ('out.txt',)
"""
import functools
import operator
import re
from collections.abc import Iterable
from enum import IntEnum
from typing import NamedTuple

from rich.text import Text

from .faults import InvalidDeclarationError
from .utils import *

PREFIX = "-"
LONGPREFIX = "--"

# Longest first: "--x" must lose "--", not "-".
_PREFIXES = (LONGPREFIX, PREFIX)


class ArityKind(IntEnum):
    NONE = 0
    FIXED = 1
    AT_LEAST_ONE = 2


class Arity(NamedTuple):
    """
    How many values follow a switch token.

    count is the minimum number of values the switch needs: 0 for NONE, n for
    FIXED(n) and 1 for AT_LEAST_ONE. AT_LEAST_ONE alone never saturates.
    """
    kind: ArityKind
    count: int = 0

    @classmethod
    def none(cls):
        return cls(ArityKind.NONE, 0)

    @classmethod
    def fixed(cls, count, /):
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError("arity count must be an integer")
        if count < 0:
            raise ValueError("arity count cannot be negative")
        return cls(ArityKind.FIXED, count) if count else cls.none()

    @classmethod
    def atleastone(cls):
        return cls(ArityKind.AT_LEAST_ONE, 1)

    def saturated(self, count, /):
        """
        True when `count` captured values leave no room for another one.
        """
        return self.kind is not ArityKind.AT_LEAST_ONE and count >= self.count

    def satisfied(self, count, /):
        return count >= self.count

    def __str__(self):
        match self.kind:
            case ArityKind.NONE:
                return "no value"
            case ArityKind.FIXED:
                return "exactly one value" if self.count == 1 else f"exactly {self.count} values"
            case _:
                return "at least one value"


class SwitchType(type):
    """
    Metaclass wiring introspection for switch declarations.

    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - Every name in __introspectable__ becomes a read-only property mirroring "_{name}".
    - __repr__/__rich_repr__ list the introspectable fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, field, name, /):
    """
    Internal: validate one switch identifier and return it trimmed.

    Raises
    - TypeError: when the name is not a string.
    - InvalidDeclarationError: when the name is blank or carries a prefix, since
      no switch token could ever resolve to it.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif not (name := name.strip()):
        raise InvalidDeclarationError(
            f"{cls.__typename__} {field!r} cannot be empty",
            hint="declare the switch with a name such as 'v' or 'verbose'",
        )
    elif name.startswith(PREFIX):
        raise InvalidDeclarationError(
            f"{cls.__typename__} {field!r} cannot start with {PREFIX!r} (got {name!r})",
            hint="declare %r without its prefix, the prefix belongs to the token" % name.lstrip(PREFIX),
            name=name,
        )
    return name


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the naming metadata.

    - name: required identifier.
    - longname: optional identifier; dropped (None) when blank or equal to name.
    - descr: optional description; None when Unset or blank.
    """
    metadata["name"] = _sanitize_name(cls, "name", metadata["name"])

    if not isinstance(longname := metadata["longname"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'longname' must be a string")
    if isinstance(longname, str) and longname.strip():
        longname = _sanitize_name(cls, "longname", longname)
    else:
        longname = None
    metadata["longname"] = longname if longname != metadata["name"] else None

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str):
        descr = descr.strip() or None
    elif isinstance(descr, Text) and not descr.plain.strip():
        descr = None
    metadata["descr"] = coalesce(descr)


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate and normalize value-related metadata.

    - metavars: iterable of strings (a bare string is rejected); labels are
      trimmed and blank ones are dropped.
    - nargs: resolved into an Arity. When Unset, the number of metavars gives a
      fixed arity; a given Arity is rebuilt through its factories, so
      FIXED(0) becomes NONE and a negative count is refused. Metavars beyond a
      fixed count are discarded, and a switch without values keeps none.
    """
    if isinstance(metavars := metadata["metavars"], str) or not isinstance(metavars, Iterable):
        raise TypeError(f"{cls.__typename__} 'metavars' must be an iterable of strings")
    sanitized = []
    for metavar in metavars:
        if not isinstance(metavar, str):
            raise TypeError(f"{cls.__typename__} 'metavars' must be an iterable of strings")
        if metavar := metavar.strip():
            sanitized.append(metavar)

    match (nargs := metadata["nargs"]):
        case Arity(kind=ArityKind.NONE):
            arity = Arity.none()
        case Arity(kind=ArityKind.FIXED, count=int() as count) if not isinstance(count, bool) and count >= 0:
            arity = Arity.fixed(count)
        case Arity(kind=ArityKind.FIXED):
            raise ValueError(f"{cls.__typename__} 'nargs' count must be a non-negative integer")
        case Arity(kind=ArityKind.AT_LEAST_ONE):
            arity = Arity.atleastone()
        case Arity():
            raise TypeError(f"{cls.__typename__} 'nargs' has an unknown arity kind")
        case UnsetType():
            arity = Arity.fixed(len(sanitized))
        case bool():
            raise TypeError(f"{cls.__typename__} 'nargs' must be an integer or '+'")
        case int() if nargs < 0:
            raise ValueError(f"{cls.__typename__} 'nargs' cannot be negative")
        case int():
            arity = Arity.fixed(nargs)
        case "+":
            arity = Arity.atleastone()
        case str():
            raise ValueError(f"{cls.__typename__} 'nargs' must be a non-negative integer or '+'")
        case _:
            raise TypeError(f"{cls.__typename__} 'nargs' must be an integer or '+'")

    match arity.kind:
        case ArityKind.NONE:
            sanitized.clear()
        case ArityKind.FIXED:
            del sanitized[arity.count:]

    del metadata["nargs"]
    metadata["arity"] = arity
    metadata["metavars"] = tuple(sanitized)


class Switch(metaclass=SwitchType):
    """
    Named command-line switch declaration.

    A Switch is declared once in a registry (the contract) and cloned by the
    parser for every occurrence it resolves, so captured values live on the
    clone and never on the declaration.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes;
      container fields come back as tuples.
    """

    __introspectable__ = (
        "name",
        "longname",
        "descr",
        "required",
        "arity",
        "metavars",
        "values",
    )

    def __new__(
            cls,
            name,
            longname=Unset,
            descr=Unset,
            *,
            required=False,
            nargs=Unset,
            metavars=(),
    ):
        """
        Construct a Switch with the provided metadata.

        Parameters
        - name: str
          Primary (short) identifier, matched by "-name" and "--name" tokens.
        - longname: Unset | str
          Secondary identifier, shown as "--longname" in help.
        - descr: Unset | str | Text
          Short description for help.
        - required: bool
          The parser fails when a required switch is absent.
        - nargs: Unset | int | "+" | Arity
          0 → no value, n → exactly n values, "+" → one value or more.
        - metavars: Iterable[str]
          Value labels used by the help printer.
        """
        metadata = {
            "name": name,
            "longname": longname,
            "descr": descr,
            "required": bool(required),
            "nargs": nargs,
            "metavars": metavars,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._values = []
        return self

    @property
    def hasarguments(self):
        return self._arity.kind is not ArityKind.NONE

    @property
    def haslongname(self):
        return self._longname is not None

    @property
    def hasdescr(self):
        return self._descr is not None

    @property
    def optional(self):
        return not self._required

    @property
    def printable(self):
        """
        Whether the help printer lists this switch in the description block.
        """
        return self.haslongname or self.hasdescr

    @property
    def saturated(self):
        return self._arity.saturated(len(self._values))

    @property
    def satisfied(self):
        return self._arity.satisfied(len(self._values))

    @property
    def placeholders(self):
        """
        Value labels for usage text: the metavars, padded with "value" up to
        the number of values the switch needs.
        """
        return self._metavars + ("value",) * max(self._arity.count - len(self._metavars), 0)

    @property
    def names(self):
        return (self._name,) if self._longname is None else (self._name, self._longname)

    def append(self, value, /):
        """
        Capture one value; return whether it was kept.

        Blank values and values beyond a saturated arity are dropped, and a
        switch without arguments never captures anything.
        """
        if not isinstance(value, str):
            raise TypeError(f"{type(self).__typename__} values must be strings")
        if self.saturated or not value.strip():
            return False
        self._values.append(value)
        return True

    def clone(self):
        """
        Return a fresh switch with the same declaration and no captured values.
        """
        return type(self)(
            self._name,
            self._longname or Unset,
            self._descr or Unset,
            required=self._required,
            nargs=self._arity,
            metavars=self._metavars,
        )

    @staticmethod
    def getname(token, /):
        """
        Strip one switch prefix from a token ("--name" → "name", "-n" → "n").
        Tokens without a prefix come back unchanged.
        """
        if not isinstance(token, str):
            raise TypeError("getname() argument must be a string")
        for prefix in _PREFIXES:
            if token.startswith(prefix):
                return token[len(prefix):]
        return token

    @staticmethod
    def isvalid(token, /):
        """
        True when the token is a switch token rather than a value.
        """
        if (name := Switch.getname(token)) == token or not name.strip():
            return False
        return not name.startswith(PREFIX)

    @staticmethod
    def prefixed(name, prefix=PREFIX, /):
        if not isinstance(name, str) or not isinstance(prefix, str):
            raise TypeError("prefixed() arguments must be strings")
        if not name.strip() or name.startswith(_PREFIXES):
            return name
        return prefix + name


__all__ = (
    "PREFIX",
    "LONGPREFIX",
    "ArityKind",
    "Arity",
    "Switch",
)

# The metaclass is an implementation detail of Switch.
del SwitchType
