"""
Help printer behavioral tests (layout, wrapping, validation).

Scope
- Section layout: header, usage, descriptions and footer separated by one blank line.
- Usage line: sorted short names, [optional] markers, <metavar> values, hanging indent.
- Description block: printable switches only, aligned column, wrapped descriptions.
- Rendering through a console (plain, colorful, fancy).

Conventions
- Test method names follow CamelCase per project convention.
- Output is compared line by line with trailing spaces removed.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from switchboard import *


def _lines(text):
    return [line.rstrip() for line in text.splitlines()]


class HelpLayoutTest(TestCase):

    def setUp(self):
        self.switches = SwitchRegistry()
        self.switches.declare("s3", "switch3", "Third switch. This switch is required and has an argument.", required=True, metavars=["arg"])
        self.switches.declare("s1", "switch1", "First switch.")
        self.switches.declare("s2", "switch2", "Second switch. This switch is required.", required=True)

    def testFullLayout(self):
        printer = HelpPrinter("testExecutable", self.switches, "This is the header.", "This is the footer.")
        self.assertEqual(_lines(printer.format().plain), [
            "This is the header.",
            "",
            "Usage: testExecutable [-s1] -s2 -s3 <arg>",
            "",
            "-s1, --switch1         First switch.",
            "-s2, --switch2         Second switch. This switch is required.",
            "-s3, --switch3 <arg>   Third switch. This switch is required and has an",
            "                       argument.",
            "",
            "This is the footer.",
        ])

    def testWithoutHeaderAndFooter(self):
        printer = HelpPrinter("testExecutable", self.switches)
        self.assertEqual(_lines(printer.format().plain)[:2], [
            "Usage: testExecutable [-s1] -s2 -s3 <arg>",
            "",
        ])

    def testNoTrailingNewline(self):
        printer = HelpPrinter("testExecutable", self.switches, "Header.", "Footer.")
        self.assertFalse(printer.format().plain.endswith("\n"))

    def testNoDescriptions(self):
        switches = SwitchRegistry()
        switches.declare("s1", "switch1")
        switches.declare("s2", "switch2", required=True)
        printer = HelpPrinter("testExecutable", switches)
        self.assertEqual(_lines(printer.format().plain), [
            "Usage: testExecutable [-s1] -s2",
            "",
            "-s1, --switch1",
            "-s2, --switch2",
        ])

    def testNoLongNames(self):
        switches = SwitchRegistry()
        switches.declare("s1", descr="First switch.")
        printer = HelpPrinter("testExecutable", switches)
        self.assertEqual(_lines(printer.format().plain), [
            "Usage: testExecutable [-s1]",
            "",
            "-s1   First switch.",
        ])

    def testNonPrintableSwitchesOnlyInUsage(self):
        switches = SwitchRegistry()
        switches.declare("a", descr="Described.")
        switches.declare("b")
        printer = HelpPrinter("tool", switches)
        self.assertEqual(_lines(printer.format().plain), [
            "Usage: tool [-a] [-b]",
            "",
            "-a   Described.",
        ])

    def testNothingPrintable(self):
        switches = SwitchRegistry()
        switches.extend(["b", "a"])
        printer = HelpPrinter("tool", switches, footer="Bye.")
        self.assertEqual(_lines(printer.format().plain), [
            "Usage: tool [-a] [-b]",
            "",
            "Bye.",
        ])

    def testMetavarRendering(self):
        switches = SwitchRegistry()
        switches.declare("f", "files", "Inputs.", nargs="+", metavars=["file"])
        switches.declare("p", "pair", "Two things.", required=True, nargs=2, metavars=["key"])
        printer = HelpPrinter("tool", switches)
        self.assertEqual(_lines(printer.format().plain), [
            "Usage: tool [-f <file> ...] -p <key> <value>",
            "",
            "-f, --files <file> ...     Inputs.",
            "-p, --pair <key> <value>   Two things.",
        ])


class HelpHeaderFooterTest(TestCase):

    def testNoSwitchesHeaderAndFooter(self):
        printer = HelpPrinter("tool", SwitchRegistry(), "Header.", "Footer.")
        self.assertEqual(_lines(printer.format().plain), ["Header.", "", "Footer."])

    def testNoSwitchesHeaderOnly(self):
        printer = HelpPrinter("tool", SwitchRegistry(), "Header.")
        self.assertEqual(printer.format().plain, "Header.")

    def testNoSwitchesFooterOnly(self):
        printer = HelpPrinter("tool", SwitchRegistry(), footer="Footer.")
        self.assertEqual(printer.format().plain, "Footer.")

    def testEmptyHeaderAndFooterAreSkipped(self):
        printer = HelpPrinter("tool", SwitchRegistry(), "", "")
        self.assertEqual(printer.format().plain, "")

    def testLongFooterIsWrapped(self):
        footer = "It is long to show how text is wrapped when it extends beyond the width."
        printer = HelpPrinter("tool", SwitchRegistry(), footer=footer, width=40)
        self.assertEqual(_lines(printer.format().plain), [
            "It is long to show how text is wrapped",
            "when it extends beyond the width.",
        ])

    def testMultilineHeaderKeepsItsLines(self):
        printer = HelpPrinter("tool", SwitchRegistry(), "----\nHeader.\n----")
        self.assertEqual(_lines(printer.format().plain), ["----", "Header.", "----"])


class HelpWrappingTest(TestCase):

    def testUsageWrapsUnderHangingIndent(self):
        switches = SwitchRegistry()
        switches.extend(["delta", "charlie", "bravo", "alpha"])
        printer = HelpPrinter("tool", switches, width=30)
        self.assertEqual(_lines(printer.format().plain), [
            "Usage: tool [-alpha] [-bravo]",
            "       [-charlie] [-delta]",
        ])

    def testUsageSortIsCaseInsensitive(self):
        switches = SwitchRegistry()
        switches.extend(["b", "A", "c"])
        printer = HelpPrinter("tool", switches)
        self.assertEqual(printer.format().plain, "Usage: tool [-A] [-b] [-c]")

    def testInjectedComparator(self):
        switches = SwitchRegistry()
        switches.extend(["a", "b", "c"])
        printer = HelpPrinter("tool", switches, comparator=lambda left, right: (left < right) - (left > right))
        self.assertEqual(printer.format().plain, "Usage: tool [-c] [-b] [-a]")

    def testSwitchesAreReadOnceAtConstruction(self):
        switches = SwitchRegistry()
        switches.declare("a")
        printer = HelpPrinter("tool", switches)
        switches.declare("b")
        self.assertEqual(printer.format().plain, "Usage: tool [-a]")


class HelpValidationTest(TestCase):

    def testProgMustBeNonEmptyString(self):
        with self.assertRaises(ValueError):
            HelpPrinter("  ", SwitchRegistry())
        with self.assertRaises(TypeError):
            HelpPrinter(None, SwitchRegistry())

    def testSwitchesMustBeARegistry(self):
        with self.assertRaises(TypeError):
            HelpPrinter("tool", None)

    def testHeaderMustBeText(self):
        with self.assertRaises(TypeError):
            HelpPrinter("tool", SwitchRegistry(), 3)

    def testWidthValidation(self):
        with self.assertRaises(TypeError):
            HelpPrinter("tool", SwitchRegistry(), width="80")
        with self.assertRaises(ValueError):
            HelpPrinter("tool", SwitchRegistry(), width=4)


class HelpRenderingTest(TestCase):

    def setUp(self):
        self.switches = SwitchRegistry()
        self.switches.declare("v", "verbose", "Be loud.")
        self.console = Console(color_system=None, force_terminal=False, width=80)

    def testPrintToConsole(self):
        printer = HelpPrinter("tool", self.switches, "Header.")
        with self.console.capture() as capture:
            printer.print(self.console)
        self.assertEqual(_lines(capture.get()), [
            "Header.",
            "",
            "Usage: tool [-v]",
            "",
            "-v, --verbose   Be loud.",
        ])

    def testColorfulKeepsPlainText(self):
        plain = HelpPrinter("tool", self.switches).format()
        colorful = HelpPrinter("tool", self.switches, colorful=True).format()
        self.assertEqual(colorful.plain, plain.plain)
        self.assertFalse(plain.spans)
        self.assertTrue(colorful.spans)

    def testFancyPrintsInAPanel(self):
        printer = HelpPrinter("tool", self.switches, fancy=True)
        with self.console.capture() as capture:
            printer.print(self.console)
        output = capture.get()
        self.assertIn("TOOL HELP", output)
        self.assertIn("-v, --verbose   Be loud.", output)


if __name__ == "__main__":
    unittest.main()
