"""
Switchboard registry: the ordered set of declared switches.

Scope
- SwitchRegistry keeps switches in declaration order plus two side indices,
  name → position and longname → position, kept consistent incrementally
  (every mutation shifts the positions after it by one).
- Names are unique across both indices: a switch whose name or long name is
  already taken, as a name or as a long name, is silently refused.

Conventions
- Declaration mutations never raise for None or colliding switches; they
  report whether something happened (True/False).
- Position errors follow list semantics (IndexError), lookups by name return
  None (get) or raise KeyError (registry["name"]).
"""
import functools

from .switches import Switch
from .utils import *


class SwitchRegistry:
    """
    Ordered, name-indexed collection of Switch declarations.

    Used twice: as the contract handed to ArgumentParser, and as the parser's
    result set of switches found in the input.
    """

    def __init__(self, switches=(), /):
        self._switches = []
        self._names = {}
        self._longnames = {}
        for switch in switches:
            self.add(switch)

    def _collides(self, switch):
        for name in switch.names:
            if name in self._names or name in self._longnames:
                return True
        return False

    def _reindex(self, position):
        # Entries from `position` on moved by one; earlier ones are untouched.
        for current, switch in enumerate(self._switches[position:], position):
            self._names[switch.name] = current
            if switch.haslongname:
                self._longnames[switch.longname] = current

    def _position(self, name):
        if not isinstance(name, str) or not name.strip():
            return None
        if name in self._names:
            return self._names[name]
        return self._longnames.get(name)

    def add(self, switch, /):
        """
        Append a switch; no-op (False) for None or a name collision.
        """
        return self.insert(len(self._switches), switch)

    def declare(self, name, longname=Unset, descr=Unset, *, required=False, nargs=Unset, metavars=()):
        """
        Build a Switch from the given metadata and add it.

        Returns the registry entry answering to that name: the new switch, or
        the existing one that blocked it.
        """
        switch = Switch(name, longname, descr, required=required, nargs=nargs, metavars=metavars)
        if self.add(switch):
            return switch
        return self.get(switch.name) or self.get(switch.longname)

    def extend(self, names, /):
        """
        Declare a bare switch (no long name, no description, no value) per name.
        """
        if isinstance(names, str):
            raise TypeError("extend() argument must be an iterable of names, not a string")
        for name in names:
            self.declare(name)

    def insert(self, position, switch, /):
        """
        Insert a switch before `position` (list-style, negative counts from the
        end, out-of-range clamps); no-op (False) for None or a collision.
        """
        if not isinstance(position, int):
            raise TypeError("insert() position must be an integer")
        if switch is None:
            return False
        if not isinstance(switch, Switch):
            raise TypeError("insert() argument must be a switch")
        if self._collides(switch):
            return False

        if position < 0:
            position = max(len(self._switches) + position, 0)
        position = min(position, len(self._switches))

        self._switches.insert(position, switch)
        self._reindex(position)
        return True

    def removeat(self, position, /):
        """
        Remove and return the switch at `position`.

        Raises
        - IndexError: when the position is out of range.
        """
        if not isinstance(position, int):
            raise TypeError("removeat() position must be an integer")
        if position < 0:
            position += len(self._switches)
        if not 0 <= position < len(self._switches):
            raise IndexError("registry index out of range")

        switch = self._switches.pop(position)
        del self._names[switch.name]
        if switch.haslongname:
            del self._longnames[switch.longname]
        self._reindex(position)
        return switch

    def remove(self, switch, /):
        """
        Remove a switch (by identity, or by name when given a string);
        return whether anything was removed.
        """
        try:
            self.removeat(self.index(switch))
        except ValueError:
            return False
        return True

    def clear(self):
        self._switches.clear()
        self._names.clear()
        self._longnames.clear()

    def get(self, name, /):
        """
        Look a switch up by name, then by long name; None when absent.
        """
        if (position := self._position(name)) is None:
            return None
        return self._switches[position]

    def contains(self, name, /):
        return name in self

    def index(self, switch, /):
        """
        Position of a switch (identity) or of a name.

        Raises
        - ValueError: when absent, like list.index().
        """
        if isinstance(switch, Switch):
            position = self._names.get(switch.name)
            if position is not None and self._switches[position] is switch:
                return position
            raise ValueError(f"{switch!r} is not in registry")
        if isinstance(switch, str):
            if (position := self._position(switch)) is not None:
                return position
            raise ValueError(f"{switch!r} is not in registry")
        raise TypeError("index() argument must be a switch or a name")

    def sortedbyname(self, comparator=Unset, /):
        """
        Return a new list of the switches ordered by name.

        comparator is a three-way function over names; it defaults to
        case-insensitive ordinal (utils.compare). The registry order is
        left untouched.
        """
        comparator = coalesce(comparator, compare)
        if not callable(comparator):
            raise TypeError("sortedbyname() argument must be callable")
        return sorted(self._switches, key=functools.cmp_to_key(lambda left, right: comparator(left.name, right.name)))

    def __contains__(self, item):
        if isinstance(item, Switch):
            try:
                self.index(item)
            except ValueError:
                return False
            return True
        return self._position(item) is not None

    def __getitem__(self, key):
        if isinstance(key, str):
            if (switch := self.get(key)) is None:
                raise KeyError(key)
            return switch
        if isinstance(key, int | slice):
            return self._switches[key]
        raise TypeError("registry indices must be integers, slices or names")

    def __iter__(self):
        return iter(tuple(self._switches))

    def __len__(self):
        return len(self._switches)

    def __repr__(self):
        return f"switch-registry({", ".join(switch.name for switch in self._switches)})"

    def __rich_repr__(self):
        for switch in self._switches:
            yield switch


__all__ = (
    "SwitchRegistry",
)
