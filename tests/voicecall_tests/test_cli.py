"""Tests for the voicecall CLI entry point."""
from __future__ import annotations

import json
import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from core.cli_errors import ExitCode
from tests.fakes.voicecall import FakeURLOpener, make_probe
from tests.fixtures import capture_output, repo_root, run
from voicecall.__main__ import _configure_logging, build_parser, main


class TestParser(unittest.TestCase):
    def test_flags(self):
        args = build_parser().parse_args(["-v", "-d", "-b", "safari", "-c", "Pizza", "8558701311"])
        self.assertTrue(args.verbose)
        self.assertTrue(args.dry_run)
        self.assertEqual(args.browser, "safari")
        self.assertEqual(args.contact_name, "Pizza")
        self.assertEqual(args.target, "8558701311")

    def test_plus_number_is_positional(self):
        args = build_parser().parse_args(["+44-20-7946-0958"])
        self.assertEqual(args.target, "+44-20-7946-0958")

    def test_rejects_unknown_browser(self):
        with capture_output():
            with self.assertRaises(SystemExit) as ctx:
                build_parser().parse_args(["-b", "opera", "8558701311"])
        self.assertEqual(ctx.exception.code, 2)


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        tmp = Path(self._tmp.name)
        self.contacts = tmp / "contacts.txt"
        self.history = tmp / "history.txt"
        env = {
            "VOICECALL_CONFIG": str(tmp / "config.yaml"),
            "VOICECALL_CONTACTS_FILE": str(self.contacts),
            "VOICECALL_HISTORY_FILE": str(self.history),
        }
        self._env = patch.dict(os.environ, env)
        self._env.start()
        self.probe = make_probe("Google Chrome")
        self.opener = FakeURLOpener()
        self._probe_patch = patch("voicecall.__main__.MacAppProbe", return_value=self.probe)
        self._opener_patch = patch("voicecall.__main__.MacURLOpener", return_value=self.opener)
        self._probe_patch.start()
        self._opener_patch.start()

    def tearDown(self):
        self._opener_patch.stop()
        self._probe_patch.stop()
        self._env.stop()
        self._tmp.cleanup()

    def _main(self, *argv: str):
        with capture_output() as (out, err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_call_number(self):
        code, out, _ = self._main("8558701311")
        self.assertEqual(code, ExitCode.SUCCESS)
        self.assertIn("Opening Google Voice call to +18558701311 in Google Chrome", out)
        url, binding = self.opener.opened[0]
        self.assertIn("%2B18558701311", url)
        self.assertEqual(binding.selected, "chrome")
        self.assertIn(":+18558701311", self.history.read_text(encoding="utf-8"))

    def test_add_contact_then_call_by_name(self):
        code, _, _ = self._main("--add-contact", "Pizza Place", "855.870.1311")
        self.assertEqual(code, 0)
        self.assertEqual(self.contacts.read_text(encoding="utf-8"), "Pizza Place:+18558701311\n")
        code, out, _ = self._main("pizza place")
        self.assertEqual(code, 0)
        self.assertIn("+18558701311", out)
        self.assertEqual(len(self.opener.opened), 2)

    def test_unknown_contact_exits_2(self):
        code, out, err = self._main("Pizza Place")
        self.assertEqual(code, 2)
        self.assertIn("Error: Contact 'Pizza Place' not found", err)
        self.assertIn("Hint: Use --list-contacts", err)
        self.assertEqual(self.opener.opened, [])

    def test_bad_format_exits_2(self):
        code, _, err = self._main("12345")
        self.assertEqual(code, 2)
        self.assertIn("Invalid US phone number length", err)

    def test_missing_target_exits_2(self):
        code, _, err = self._main()
        self.assertEqual(code, 2)
        self.assertIn("Phone number or contact name required", err)

    def test_no_browser_exits_3(self):
        self.probe.installed.clear()
        self.probe.opener = False
        code, _, err = self._main("8558701311")
        self.assertEqual(code, 3)
        self.assertIn("No suitable browser found", err)

    def test_open_failure_exits_4(self):
        self.opener.error = "open: LSOpenURLsWithRole() failed"
        code, _, err = self._main("8558701311")
        self.assertEqual(code, 4)
        self.assertIn("LSOpenURLsWithRole", err)

    def test_dry_run(self):
        code, out, _ = self._main("--dry-run", "-c", "Pizza", "8558701311")
        self.assertEqual(code, 0)
        self.assertIn("[DRY RUN] Would open URL in Google Chrome", out)
        self.assertEqual(self.opener.opened, [])
        self.assertFalse(self.contacts.exists())
        self.assertFalse(self.history.exists())

    def test_history_and_contacts_listing(self):
        self._main("-c", "Pizza", "8558701311")
        code, out, _ = self._main("--history", "--json")
        self.assertEqual(code, 0)
        self.assertEqual([e["number"] for e in json.loads(out)], ["+18558701311"])
        code, out, _ = self._main("--list-contacts")
        self.assertEqual(code, 0)
        self.assertIn("Pizza", out)

    def test_bad_config_exits_1(self):
        code, _, err = self._main("--config", str(Path(self._tmp.name) / "missing.yaml"), "8558701311")
        self.assertEqual(code, 1)
        self.assertIn("Config file not found", err)


class TestLoggingSetup(unittest.TestCase):
    def test_handler_attached_once(self):
        logger = logging.getLogger("voicecall")
        _configure_logging(verbose=True)
        count = len(logger.handlers)
        _configure_logging(verbose=False)
        self.assertEqual(len(logger.handlers), count)
        self.assertEqual(count, 1)
        self.assertEqual(logger.level, logging.WARNING)


class TestModuleInvocation(unittest.TestCase):
    def test_help_via_module_invocation(self):
        proc = run([sys.executable, "-m", "voicecall", "--help"], cwd=str(repo_root()))
        self.assertEqual(proc.returncode, 0, msg=proc.stderr)
        self.assertIn("Google Voice call launcher", proc.stdout)
        self.assertIn("exit codes:", proc.stdout)


if __name__ == "__main__":
    unittest.main()
