"""
Switchboard argument parser.

Scope
- ArgumentParser resolves an argv-like token list against a contract
  SwitchRegistry and records what it found in a separate result registry.

Phases of parse()
- reset: the result registry is cleared, so parse() can be called again.
- scan: every switch token is resolved to its declaration (by name, then by
  long name); a clone is registered and the value tokens that follow it are
  captured until the next switch token or the end of input. Value tokens that
  do not follow a value-taking switch are ignored.
- presence: required declarations missing from the result fail the run.

Faults (all ParsingError, raised on the first violation)
- UndefinedSwitchError: the token names no declared switch.
- SwitchAlreadyParsedError: the switch was already given (under either name).
- SwitchMissingArgumentError: not enough values followed the switch.
- RequiredSwitchMissingError: a required switch never showed up.

The result registry keeps whatever was registered before a failure, so
queries reflect the partial state of a failed run.
"""
import difflib
import sys
from collections.abc import Iterable

from .faults import *
from .registry import SwitchRegistry
from .switches import LONGPREFIX, Switch
from .utils import *


class ArgumentParser:
    """
    Parse tokens against declared switches and answer presence/value queries.

    Parameters
    - tokens: Unset | Iterable[str]
      • Unset: read sys.argv[1:].
      • Iterable[str]: pre-tokenized input; never shell-split.
    - switches: Unset | SwitchRegistry
      The contract. Unset means nothing is declared.
    """
    tokens = mirror("tokens")

    def __init__(self, tokens=Unset, switches=Unset):
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError(f"{type(self).__name__}() tokens must be an iterable of strings")

        def _sanitized(iterable):
            for item in iterable:
                if not isinstance(item, str):
                    raise TypeError(f"{type(self).__name__}() tokens must be an iterable of strings")
                yield item

        if switches is Unset:
            switches = SwitchRegistry()
        elif not isinstance(switches, SwitchRegistry):
            raise TypeError(f"{type(self).__name__}() switches must be a switch registry")

        self._tokens = tuple(_sanitized(tokens))
        self._switches = switches
        self._parsed = SwitchRegistry()

    @property
    def switches(self):
        """
        The contract registry (declared switches).
        """
        return self._switches

    @property
    def parsed(self):
        """
        The result registry (switches found by the last parse).
        """
        return self._parsed

    @property
    def parsedcount(self):
        return len(self._parsed)

    def parse(self):
        """
        Run the parser over the tokens; return self.

        Raises
        - ParsingError: see the module documentation for the concrete faults.
        """
        self._parsed.clear()

        index = 0
        while index < len(self._tokens):
            token = self._tokens[index]
            index += 1  # 1-based position of `token` from here on

            if not Switch.isvalid(token):
                continue

            name = Switch.getname(token)
            if (declared := self._switches.get(name)) is None:
                suggestions = difflib.get_close_matches(name, [
                    candidate for switch in self._switches for candidate in switch.names
                ], 1)
                try:
                    # Keep the prefix the user typed.
                    hint = "did you mean %r?" % (token[:len(token) - len(name)] + suggestions[0])
                except IndexError:
                    hint = "check the spelling against the declared switches"
                raise UndefinedSwitchError(
                    "unknown switch %r at %s position" % (token, ordinal(index)),
                    code=FaultCode.UNDEFINED_SWITCH,
                    hint=hint,
                    name=name,
                    token=token,
                    index=index,
                    docs=getdoc(FaultCode.UNDEFINED_SWITCH),
                )

            if declared.name in self._parsed:
                raise SwitchAlreadyParsedError(
                    "switch %r repeated at %s position" % (token, ordinal(index)),
                    code=FaultCode.SWITCH_ALREADY_PARSED,
                    hint="give %r only once" % Switch.prefixed(declared.name),
                    name=declared.name,
                    token=token,
                    index=index,
                    docs=getdoc(FaultCode.SWITCH_ALREADY_PARSED),
                )

            self._parsed.add(switch := declared.clone())
            position = index

            if switch.hasarguments:
                # Consume the whole value run; the switch keeps what its arity allows.
                while index < len(self._tokens) and not Switch.isvalid(self._tokens[index]):
                    switch.append(self._tokens[index])
                    index += 1

            if switch.hasarguments and not switch.satisfied:
                raise SwitchMissingArgumentError(
                    "switch %r at %s position expects %s but got %d" % (
                        token, ordinal(position), switch.arity, len(switch.values)
                    ),
                    code=FaultCode.SWITCH_MISSING_ARGUMENT,
                    hint="try %r" % " ".join((Switch.prefixed(switch.name), *(
                        f"<{placeholder}>" for placeholder in switch.placeholders
                    ))),
                    name=switch.name,
                    token=token,
                    index=position,
                    docs=getdoc(FaultCode.SWITCH_MISSING_ARGUMENT),
                )

        for declared in self._switches:
            if declared.required and declared.name not in self._parsed:
                spelling = Switch.prefixed(declared.longname, LONGPREFIX) if declared.haslongname else None
                raise RequiredSwitchMissingError(
                    "required switch %r is missing" % Switch.prefixed(declared.name),
                    code=FaultCode.REQUIRED_SWITCH_MISSING,
                    hint="add %r%s to the command line" % (
                        Switch.prefixed(declared.name), " (or %r)" % spelling if spelling else ""
                    ),
                    name=declared.name,
                    docs=getdoc(FaultCode.REQUIRED_SWITCH_MISSING),
                )

        return self

    def isparsed(self, name, /):
        return name in self._parsed

    def allparsed(self, *names):
        """
        True when every name was parsed; False for no names.
        """
        return bool(names) and all(map(self.isparsed, names))

    def anyparsed(self, *names):
        return any(map(self.isparsed, names))

    def noneparsed(self, *names):
        """
        True when none of the names was parsed; False for no names.
        """
        return bool(names) and not any(map(self.isparsed, names))

    def getvalue(self, name, number=1, /):
        """
        The `number`-th (1-based) value captured for a switch, or None when the
        switch was not parsed or has fewer values.
        """
        if not isinstance(number, int) or isinstance(number, bool):
            raise TypeError("getvalue() number must be an integer")
        if (values := self.getvalues(name)) is None or not 1 <= number <= len(values):
            return None
        return values[number - 1]

    def getvalues(self, name, /):
        """
        All values captured for a switch (a tuple), or None when not parsed.
        """
        if (switch := self._parsed.get(name)) is None:
            return None
        return switch.values

    def __repr__(self):
        return f"argument-parser(tokens={self._tokens!r}, switches={self._switches!r})"


__all__ = (
    "ArgumentParser",
)
