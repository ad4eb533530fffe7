"""
Switchboard help printer.

Layout (sections separated by one blank line, empty sections skipped)

    <header>

    Usage: prog [-a] -b <file> [-c <value> ...]

    -a, --all          Description wrapped under
                       a hanging indent.
    -b <file>          Another description.

    <footer>

- Usage lists every declared switch by its short name, sorted by name;
  optional switches are bracketed, values show as <metavar> (a trailing
  "..." marks a repeatable value). Wrapped lines are indented under the
  first switch.
- The description block lists printable switches (those with a long name or
  a description). The names column is as wide as the longest entry plus three
  spaces.

Palette keys
- usage-label, program-name, switch-name, long-name, metavar, descr,
  header-section, footer-section, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Styling only applies when colorful=True.
"""
from collections import defaultdict, deque

from rich.console import Console
from rich.containers import Lines
from rich.panel import Panel
from rich.text import Text

from .registry import SwitchRegistry
from .switches import LONGPREFIX, ArityKind, Switch
from .utils import *

_USAGE = "Usage: "
_SPACING = 3


def _palette():
    return defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "switch-name": "bold #22C55E",  # GREEN for short names
        "long-name": "bold #00E6FF",  # CYAN for long names
        "metavar": "bold #FFD600",  # AMBER for values
        "descr": "#9CA3AF",  # Muted gray
        "header-section": "italic #A3A3A3",
        "footer-section": "#737373",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))


class HelpPrinter:
    """
    Render a registry of declared switches as help text.

    Parameters
    - prog: str, the executable name shown in the usage line.
    - switches: SwitchRegistry, read once (sorted by name) at construction.
    - header/footer: Unset | str | Text, free text around the usage block.
    - width: int, the output width (80 by default).
    - colorful/fancy: styling and panel framing for print().
    - comparator: Unset | callable, three-way name comparator for the order.
    """

    def __init__(
            self,
            prog,
            switches,
            /,
            header=Unset,
            footer=Unset,
            *,
            width=80,
            colorful=False,
            fancy=False,
            comparator=Unset,
    ):
        if not isinstance(prog, str):
            raise TypeError(f"{type(self).__name__}() 'prog' must be a string")
        elif not (prog := prog.strip()):
            raise ValueError(f"{type(self).__name__}() 'prog' cannot be empty")
        if not isinstance(switches, SwitchRegistry):
            raise TypeError(f"{type(self).__name__}() 'switches' must be a switch registry")
        for field, object in (("header", header), ("footer", footer)):
            if not isinstance(object, str | Text | Unset):
                raise TypeError(f"{type(self).__name__}() {field!r} must be a string")
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError(f"{type(self).__name__}() 'width' must be an integer")
        elif width < len(_USAGE) + 1:
            raise ValueError(f"{type(self).__name__}() 'width' must be at least {len(_USAGE) + 1}")

        self.prog = prog
        self.header = coalesce(header) or None
        self.footer = coalesce(footer) or None
        self.width = width
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self._switches = tuple(switches.sortedbyname(comparator))

    @property
    def switches(self):
        return self._switches

    def format(self, console=Unset, /):
        """
        Build the help text as a single rich Text (no trailing newline).
        """
        console = coalesce(console, Console(width=self.width))
        styles = _palette()

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.colorful:
                return Text(str(fragment) if not isinstance(fragment, Text) else fragment.plain)
            if isinstance(fragment, Text):
                return fragment.copy()
            return Text(str(fragment), style)

        def paragraph(fragment, style):
            return Text("\n").join(text(fragment, styler(style)).wrap(console, self.width))

        def metavars(switch):
            segments = [Text.assemble("<", text(placeholder, styler("metavar")), ">") for placeholder in switch.placeholders]
            if switch.arity.kind is ArityKind.AT_LEAST_ONE:
                segments.append(Text("..."))
            return Text(" ").join(segments)

        renders = []

        if self.header:
            renders.append(paragraph(self.header, "header-section"))

        if self._switches:
            usage = Text()
            usage.append("Usage", styler("usage-label")).append(": ")
            offset = len(_USAGE)

            inputs = deque()
            for switch in self._switches:
                input = text(Switch.prefixed(switch.name), styler("switch-name"))
                if switch.hasarguments:
                    input.append(" ").append(metavars(switch))
                if switch.optional:
                    input = Text.assemble("[", input, "]")
                inputs.append(input)

            lines = Lines([text(self.prog, styler("program-name"))])
            while inputs:
                if len(lines[-1]) + 1 + len(input := inputs.popleft()) > self.width - offset:
                    lines.append(input)
                else:
                    lines[-1].append(Text(" ") + input)

            usage.append(lines.pop(0))
            for line in lines:
                usage.append("\n").append(" " * offset).append(line)
            renders.append(usage)

            entries = []
            for switch in filter(lambda x: x.printable, self._switches):
                column = text(Switch.prefixed(switch.name), styler("switch-name"))
                if switch.haslongname:
                    column.append(", ").append(text(Switch.prefixed(switch.longname, LONGPREFIX), styler("long-name")))
                if switch.hasarguments:
                    column.append(" ").append(metavars(switch))
                entries.append((switch, column))

            if entries:
                indent = max(len(column) for _, column in entries) + _SPACING
                section = Text()
                for index, (switch, column) in enumerate(entries):
                    section.append("\n" * (index > 0)).append(column)
                    if not switch.hasdescr:
                        continue
                    section.append(" " * (indent - len(column)))
                    wrapped = text(switch.descr, styler("descr")).wrap(console, max(self.width - indent, 1))
                    try:
                        section.append(wrapped.pop(0))
                    except IndexError:
                        pass
                    for line in wrapped:
                        section.append("\n").append(" " * indent).append(line)
                renders.append(section)

        if self.footer:
            renders.append(paragraph(self.footer, "footer-section"))

        return Text("\n\n").join(renders)

    def print(self, console=Unset, /):
        """
        Print the help text on the given console (stdout by default).
        """
        console = coalesce(console, Console())
        renderable = self.format(console)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self.prog} HELP".upper(), " ", "]", style=_palette()["panel-title"] if self.colorful else ""),
                title_align="left",
            )
        console.print(renderable)


__all__ = (
    "HelpPrinter",
)
