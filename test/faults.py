"""
Faults module behavioral tests (codes, structure, rendering, reporting).

Scope
- Validate fault codes and host-facing helpers (normalize, getdoc).
- Validate structured fault data and immutability of options.
- Validate rich rendering of single faults and of the ParseExit group.
- Validate report() output and counts.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering goes to an in-memory rich Console (no terminal colors).
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from argosy import (
    FaultCode,
    MissingOptionError,
    Option,
    ParseExit,
    ParseFault,
    UnrecognisedOptionError,
    getdoc,
    parse,
    report,
)


def console():
    return Console(file=io.StringIO(), width=100, color_system=None)


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode helpers."""

    def testCodesAreGroupedByDomain(self):
        self.assertEqual(FaultCode.UNRECOGNISED_OPTION // 100, 211)
        self.assertEqual(FaultCode.MISSING_OPTION // 100, 211)
        self.assertEqual(FaultCode.NOT_ENOUGH_ARGUMENTS // 100, 212)
        self.assertEqual(FaultCode.TOO_MANY_ARGUMENTS // 100, 212)
        self.assertEqual(FaultCode.CONVERSION_ERROR // 100, 213)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_OPTION.normalize(), "21102")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_OPTION))
        with self.assertRaises(TypeError):
            getdoc(21102)


class TestParseFault(TestCase):
    """Behavioral tests for fault records."""

    def setUp(self):
        self.option = Option("--arg1", required=True)
        self.outcome = parse([self.option], ["--arg2"])

    def testFaultsAreExceptions(self):
        for fault in self.outcome.errors:
            self.assertIsInstance(fault, ParseFault)
            self.assertIsInstance(fault, Exception)

    def testMissingFaultData(self):
        fault = self.outcome.errors[1]
        self.assertIsInstance(fault, MissingOptionError)
        self.assertIs(fault.option, self.option)
        self.assertEqual(fault.code, FaultCode.MISSING_OPTION)
        self.assertEqual(fault.title, "missing option")
        self.assertIn("--arg1", fault.hint)
        self.assertEqual(str(fault), "required option '--arg1' was not provided")

    def testOptionsAreImmutable(self):
        fault = self.outcome.errors[0]
        with self.assertRaises(TypeError):
            fault.options["token"] = "--other"

    def testReplaceKeepsIdentityData(self):
        fault = self.outcome.errors[0]
        replaced = fault.__replace__(colorful=False)
        self.assertIsInstance(replaced, UnrecognisedOptionError)
        self.assertEqual(replaced, fault)
        self.assertFalse(replaced.options["colorful"])

    def testRenderPlain(self):
        target = console()
        target.print(self.outcome.errors[0].__replace__(colorful=False))
        output = target.file.getvalue()
        self.assertIn("21101", output)
        self.assertIn("Unknown Option", output)
        self.assertIn("unknown option '--arg2' at first position", output)


class TestParseExit(TestCase):
    """Behavioral tests for the ParseExit group."""

    def setUp(self):
        self.outcome = parse([Option("--arg1", required=True)], ["--arg2"])

    def testGroupsAllFaults(self):
        group = ParseExit(self.outcome.errors)
        self.assertEqual(group.message, "bad parse")
        self.assertEqual(len(group.exceptions), 2)

    def testSubgroupKeepsType(self):
        group = ParseExit(self.outcome.errors, fancy=True)
        subgroup = group.subgroup(MissingOptionError)
        self.assertIsInstance(subgroup, ParseExit)
        self.assertEqual(len(subgroup.exceptions), 1)
        self.assertTrue(subgroup.options["fancy"])

    def testRenderFancy(self):
        target = console()
        target.print(ParseExit(self.outcome.errors, fancy=True, colorful=False))
        output = target.file.getvalue()
        self.assertIn("Bad Parse", output)
        self.assertIn("required option '--arg1' was not provided", output)


class TestReport(TestCase):
    """Behavioral tests for report()."""

    def testReportCountsFaults(self):
        outcome = parse([Option("--arg1", required=True)], ["--arg2"])
        target = console()
        self.assertEqual(report(outcome, console=target, colorful=False), 2)
        output = target.file.getvalue()
        self.assertIn("unknown option", output)
        self.assertIn("did you mean '--arg1'?", output)

    def testReportAcceptsIterables(self):
        outcome = parse([Option("--arg1", required=True)], [])
        target = console()
        self.assertEqual(report(list(outcome.errors), console=target), 1)

    def testReportNothing(self):
        target = console()
        self.assertEqual(report(parse([], []), console=target), 0)
        self.assertEqual(target.file.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
