#!/usr/bin/env python3
"""
Test error handling scenarios for the MIDI Bridge command line.

This script tests various error conditions to ensure they are properly handled
and reported to the user.
"""
import os
import sys
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch, MagicMock

# Add the project root and the src directory to the Python path
project_root = str(Path(__file__).parent.parent)
src_dir = str(Path(project_root) / "src")
for path in (src_dir, project_root):
    if path not in sys.path:
        sys.path.insert(0, path)

# Local imports
from midi_bridge.utils.exceptions import (
    ConfigurationError,
    InvalidPathError,
    MIDIBridgeError
)
from midi_bridge.cli import (
    command_convert,
    command_wsl_path,
    parse_args
)
import main as entry_point


class TestErrorHandling(unittest.TestCase):
    """Test error handling scenarios."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.audio_file = Path(self.test_dir) / "song.wav"
        self.audio_file.write_bytes(b"RIFF....WAVE")

        self.invalid_yaml = Path(self.test_dir) / "invalid.yaml"
        self.invalid_yaml.write_text("web_root: [unclosed\n")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir)

    def make_convert_args(self, **overrides):
        args = MagicMock()
        args.audio_file = str(self.audio_file)
        args.output = None
        args.config = None
        args.debug = False
        for key, value in overrides.items():
            setattr(args, key, value)
        return args

    def test_nonexistent_audio_file(self):
        """Test handling of a missing audio file in command_convert."""
        args = self.make_convert_args(audio_file="/nonexistent/file.wav")

        with self.assertRaises(ConfigurationError) as context:
            command_convert(args)
        self.assertIn("Audio file not found", str(context.exception))

    def test_invalid_config_file(self):
        """Test handling of invalid YAML in command_convert."""
        args = self.make_convert_args(config=str(self.invalid_yaml))

        with self.assertRaises(ConfigurationError) as context:
            command_convert(args)
        self.assertIn("Failed to parse YAML file", str(context.exception))

    @unittest.skipUnless(os.name == "posix", "staging paths have no drive letter on POSIX")
    def test_conversion_failure_returns_exit_code(self):
        """A failed conversion is reported, not raised."""
        config_file = Path(self.test_dir) / "bridge.yaml"
        config_file.write_text(
            f"web_root: '{self.test_dir}/www'\n"
            "bridge_command: [/bin/bash, -c]\n"
        )
        args = self.make_convert_args(config=str(config_file))

        with patch("midi_bridge.cli.print_section_header") as header:
            self.assertEqual(command_convert(args), 1)
        header.assert_called_once()
        self.assertEqual(list((Path(self.test_dir) / "www" / "uploads").iterdir()), [])

    def test_wsl_path_rejects_foreign_path(self):
        args = MagicMock()
        args.host_path = "/mnt/c/data.wav"
        args.mount_root = "/mnt"

        with self.assertRaises(InvalidPathError):
            command_wsl_path(args)

    def test_invalid_path_is_a_bridge_error(self):
        self.assertTrue(issubclass(InvalidPathError, MIDIBridgeError))

    def test_entry_point_exit_codes(self):
        """Test mapping of exceptions to exit codes."""
        self.assertEqual(entry_point.main(["wsl-path", "/mnt/c/data.wav"]), 3)
        self.assertEqual(entry_point.main(["wsl-path", r"C:\data\a.wav"]), 0)
        self.assertEqual(entry_point.main(["convert", "/nonexistent/file.wav"]), 2)

    def test_config_with_wrong_types_exit_code(self):
        config_file = Path(self.test_dir) / "typed.yaml"
        config_file.write_text("timeout_seconds: soon\n")
        self.assertEqual(
            entry_point.main(["convert", str(self.audio_file), "--config", str(config_file)]), 2
        )

    def test_invalid_arguments(self):
        """Test handling of invalid command line arguments."""
        with self.assertRaises(SystemExit):
            with patch('sys.argv', ['script.py', 'invalid-command']):
                parse_args()

    def test_missing_required_args(self):
        """Test handling of missing required arguments."""
        with self.assertRaises(SystemExit):
            with patch('sys.argv', ['script.py', 'convert']):  # Missing audio file argument
                parse_args()


if __name__ == "__main__":
    unittest.main()
