#!/usr/bin/env python3
"""
MIDI Bridge - Main Entry Point

This module serves as the main entry point for the MIDI Bridge application.
It sets up the environment, runs the CLI and maps errors to exit codes.
"""
import os
import sys
from pathlib import Path
from typing import Optional

# Add the src directory to the Python path
src_dir = str(Path(__file__).parent.absolute() / "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Local imports
from midi_bridge import __version__
from midi_bridge.cli import main as cli_main
from midi_bridge.utils.logging import get_logger, print_startup_banner
from midi_bridge.utils.exceptions import (
    MIDIBridgeError,
    ConfigurationError,
    InvalidPathError,
    LaunchError,
)

# Configure logger
logger = get_logger(__name__)


def main(args: Optional[list] = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments. If None, uses sys.argv[1:]

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    try:
        print_startup_banner("MIDI Bridge", __version__)
        logger.debug(f"Python version: {sys.version}")
        logger.debug(f"Working directory: {os.getcwd()}")

        return cli_main(args)

    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        return 130  # Standard exit code for SIGINT

    except ConfigurationError as e:
        logger.error(f"Configuration error: {str(e)}")
        return 2

    except InvalidPathError as e:
        logger.error(f"Path error: {str(e)}")
        return 3

    except LaunchError as e:
        logger.error(f"Launch error: {str(e)}")
        return 4

    except MIDIBridgeError as e:
        logger.error(f"Application error: {str(e)}")
        return 1

    except Exception as e:
        logger.critical(f"Unexpected error: {str(e)}")
        logger.debug("Unexpected error details:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
