#!/usr/bin/env python3
"""
Tests for the process supervisor.

A local ``/bin/bash -c`` stands in for the ``wsl -e /bin/bash -c`` bridge.
"""
import os
import sys
import time
import unittest
from pathlib import Path

# Add the src directory to the Python path
src_dir = str(Path(__file__).parent.parent / "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from midi_bridge.conversion.supervisor import ProcessSupervisor
from midi_bridge.utils.exceptions import LaunchError

LOCAL_BRIDGE = ["/bin/bash", "-c"]


@unittest.skipUnless(os.name == "posix" and os.path.exists("/bin/bash"), "requires /bin/bash")
class TestProcessSupervisor(unittest.TestCase):
    """Running commands through a bridge."""

    def setUp(self):
        self.supervisor = ProcessSupervisor(LOCAL_BRIDGE)

    def test_streams_are_captured_separately(self):
        outcome = self.supervisor.run("echo one; echo two >&2; echo; echo three; exit 3", timeout=10)

        self.assertTrue(outcome.exit_completed)
        self.assertFalse(outcome.timed_out)
        self.assertEqual(outcome.exit_code, 3)
        self.assertEqual(outcome.stdout, "one\nthree")
        self.assertEqual(outcome.stderr, "two")

    def test_zero_exit(self):
        outcome = self.supervisor.run("echo 'SUCCESS: written'", timeout=10)
        self.assertEqual(outcome.exit_code, 0)
        self.assertEqual(outcome.stdout, "SUCCESS: written")
        self.assertEqual(outcome.stderr, "")

    def test_command_is_passed_as_single_shell_argument(self):
        outcome = self.supervisor.run("printf '%s\\n' \"a b\" 'c'", timeout=10)
        self.assertEqual(outcome.stdout, "a b\nc")

    def test_timeout_kills_process_and_keeps_partial_output(self):
        start = time.monotonic()
        outcome = self.supervisor.run("echo started; sleep 30; echo finished", timeout=0.5)
        elapsed = time.monotonic() - start

        self.assertTrue(outcome.timed_out)
        self.assertFalse(outcome.exit_completed)
        self.assertIsNone(outcome.exit_code)
        self.assertEqual(outcome.stdout, "started")
        self.assertLess(elapsed, 10)

        # The process has been killed and reaped
        with self.assertRaises(ProcessLookupError):
            os.kill(outcome.pid, 0)

    def test_repeated_timeouts_leave_no_process_behind(self):
        pids = [self.supervisor.run("sleep 30", timeout=0.2).pid for _ in range(3)]
        self.assertEqual(len(set(pids)), 3)
        for pid in pids:
            with self.assertRaises(ProcessLookupError):
                os.kill(pid, 0)

    def test_missing_bridge_raises_launch_error(self):
        supervisor = ProcessSupervisor(["/nonexistent/bridge-binary", "-c"])
        with self.assertRaises(LaunchError) as context:
            supervisor.run("echo hi", timeout=5)
        self.assertIn("Failed to start", str(context.exception))


if __name__ == "__main__":
    unittest.main()
