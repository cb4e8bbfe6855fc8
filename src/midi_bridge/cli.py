"""
Command Line Interface for MIDI Bridge.

This module provides a command-line interface for converting audio files
through the WSL-hosted transcription program, starting the API server and
inspecting path translation.
"""
import argparse
import asyncio
import shutil
from pathlib import Path
from typing import Optional

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import load_config
from .conversion import AudioConversionOrchestrator, ConversionRequest, to_wsl_path
from .utils.logging import get_logger, console, print_section_header, set_debug_mode
from .utils.exceptions import MIDIBridgeError, ConfigurationError

# Configure logger
logger = get_logger(__name__)


def print_usage(error: Optional[str] = None) -> None:
    """Print usage information and available commands with optional error message."""
    if error:
        console.print(f"[bold red]Error:[/bold red] {error}")
        console.print()

    title = Text("🎵 MIDI Bridge", style="bold magenta")
    subtitle = Text("Audio to MIDI through a WSL transcription program", style="italic cyan")
    console.print(Panel.fit(f"{title}\n{subtitle}", border_style="magenta"))
    console.print()

    table = Table(title="Available Commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="bold green", width=12)
    table.add_column("Description", style="white")

    table.add_row("convert", "🎼 Convert an audio file to MIDI")
    table.add_row("api", "🌐 Start REST API server for audio-to-MIDI transcription")
    table.add_row("wsl-path", "📁 Show the WSL path for a Windows path")

    console.print(table)
    console.print()

    tip_text = "💡 [bold cyan]Tip:[/bold cyan] Use [bold]python main.py <command> -h[/bold] for detailed help on any command"
    console.print(Panel(tip_text, border_style="blue", title="Help"))


class SilentArgumentParser(argparse.ArgumentParser):
    """Custom ArgumentParser that suppresses default error output."""

    def error(self, message):
        """Raise SystemExit without argparse's plain-text error output."""
        print_usage(message)
        raise SystemExit(2)


def parse_args(argv=None):
    """Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = SilentArgumentParser(
        description="MIDI Bridge - Convert audio to MIDI through WSL",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    convert_parser = subparsers.add_parser(
        'convert',
        help='Convert an audio file to MIDI',
        description='Run the transcription program on one audio file.'
    )
    convert_parser.add_argument('audio_file', type=str, help='Path to the audio file')
    convert_parser.add_argument(
        '--output', '-o',
        type=str,
        help='Copy the generated MIDI file to this path',
        default=None
    )
    convert_parser.add_argument('--config', type=str, help='YAML configuration file', default=None)
    convert_parser.add_argument('--debug', action='store_true', help='Enable debug output for detailed logging')

    api_parser = subparsers.add_parser(
        'api',
        help='Start the API server',
        description='Start the REST API server for audio-to-MIDI transcription.'
    )
    api_parser.add_argument('--host', type=str, default='0.0.0.0', help='Host to bind to')
    api_parser.add_argument('--port', type=int, default=8000, help='Port to bind to')
    api_parser.add_argument('--config', type=str, help='YAML configuration file', default=None)
    api_parser.add_argument('--debug', action='store_true', help='Enable debug output for detailed logging')

    path_parser = subparsers.add_parser(
        'wsl-path',
        help='Translate a Windows path',
        description='Print the path under which WSL sees a Windows path.'
    )
    path_parser.add_argument('host_path', type=str, help='Absolute Windows path, e.g. C:\\data\\a.wav')
    path_parser.add_argument('--mount-root', type=str, default='/mnt', help='WSL mount point of the host drives')

    return parser.parse_args(argv)


def command_convert(args) -> int:
    """Handle the convert command."""
    audio_path = Path(args.audio_file)
    if not audio_path.is_file():
        raise ConfigurationError(f"Audio file not found: {audio_path}")

    config = load_config(args.config)

    console.print()
    print_section_header("🎵 MIDI Bridge - 🎼 Audio Conversion", f"Converting {escape(audio_path.name)} through the WSL bridge")

    config_table = Table(title="Conversion Configuration", show_header=False, box=box.ROUNDED)
    config_table.add_column("Setting", style="bold blue", width=20)
    config_table.add_column("Value", style="green")
    config_table.add_row("Audio file", str(audio_path))
    config_table.add_row("Bridge", " ".join(config.bridge_command))
    config_table.add_row("Staging root", str(config.web_root))
    config_table.add_row("Timeout", f"{config.timeout_seconds:.0f}s")
    console.print(config_table)
    console.print()

    orchestrator = AudioConversionOrchestrator(config, logger=logger)
    with open(audio_path, "rb") as stream:
        with console.status("[bold green]Waiting for the transcription program..."):
            result = asyncio.run(orchestrator.process(ConversionRequest(stream, audio_path.name)))

    if not result.success:
        console.print(f"[bold red]❌ Conversion failed:[/bold red] {result.message}")
        return 1

    output_path = result.output_path
    if args.output:
        output_path = Path(shutil.copyfile(result.output_path, args.output))

    console.print(f"[bold green]✅ {result.message}:[/bold green] {output_path}")
    return 0


def command_api(args) -> int:
    """Handle the API server command."""
    from .api.api_server import run_server

    console.print()
    print_section_header("🚀 MIDI Bridge - 🌐 API Server", "Audio-to-MIDI transcription over HTTP")

    # Fail early on a broken configuration file
    load_config(args.config)

    config_table = Table(title="API Server Configuration")
    config_table.add_column("Setting", style="bold blue", width=20)
    config_table.add_column("Value", style="green")
    config_table.add_row("Host", args.host)
    config_table.add_row("Port", str(args.port))
    config_table.add_row("Config", args.config or "Environment / defaults")
    console.print(config_table)
    console.print()
    console.print(f"[bold green]🌐 Starting API server at http://{args.host}:{args.port}[/bold green]")
    console.print(f"[dim]📖 API documentation: http://{args.host}:{args.port}/docs[/dim]")
    console.print()

    try:
        run_server(args.host, args.port, args.config)
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]⚠️  API server stopped by user[/yellow]")
    return 0


def command_wsl_path(args) -> int:
    """Handle the wsl-path command."""
    console.print(to_wsl_path(args.host_path, mount_root=args.mount_root))
    return 0


def main(argv=None) -> int:
    """Main entry point for the command-line interface.

    Exceptions from the MIDIBridgeError hierarchy propagate to the caller,
    which maps them to exit codes.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    args = parse_args(argv)

    debug_mode = getattr(args, 'debug', False)
    set_debug_mode(debug_mode)
    if debug_mode:
        logger.set_level('DEBUG')
        logger.debug("Debug mode enabled - verbose logging active")

    command_handlers = {
        'convert': command_convert,
        'api': command_api,
        'wsl-path': command_wsl_path,
    }

    if args.command not in command_handlers:
        raise MIDIBridgeError(f"Unknown command: {args.command}")
    return command_handlers[args.command](args)
