"""Main CLI application class and entry point."""

import argparse
import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional, Dict, Any, List

from .. import __version__
from ..config.config_manager import ConfigManager
from ..utils.logging_config import LogLevel, get_logger, setup_application_logging
from .commands import ServeCommand, VideosCommand, SitemapCommand


class RwandaCinemaCLI:
    """Command Line Interface for the Rwanda Cinema content service."""

    def __init__(self):
        """Initialize the CLI application."""
        self.logger = get_logger(__name__)
        self.commands = self._register_commands()

    def _register_commands(self) -> Dict[str, Any]:
        """Register all available CLI commands."""
        return {
            'serve': ServeCommand(),
            'videos': VideosCommand(),
            'sitemap': SitemapCommand(),
        }

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser with all commands and options."""
        parser = argparse.ArgumentParser(
            prog='rwanda-cinema',
            description='Rwanda Cinema - Agasobanuye listing and sitemap service',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  rwanda-cinema serve --port 8788
  rwanda-cinema videos --search spider --format json
  rwanda-cinema sitemap --base-url https://rwandacinema.com --output sitemap.xml
            """
        )

        # Global options
        parser.add_argument(
            '--config', '-c',
            type=Path,
            help='Path to configuration file (default: config/config.yaml)'
        )

        parser.add_argument(
            '--log-level', '-l',
            choices=[level.value for level in LogLevel],
            help='Set logging level (default: logging.level from config)'
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Print tracebacks on failure'
        )

        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the command result as JSON'
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'Rwanda Cinema {__version__}'
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='COMMAND'
        )

        for command_obj in self.commands.values():
            command_obj.add_parser(subparsers)

        return parser

    async def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI application.

        Args:
            args: Command line arguments (defaults to sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        if not parsed_args.command:
            parser.print_help()
            return 0

        try:
            config_manager = ConfigManager(parsed_args.config)
            self._configure_logging(parsed_args, config_manager)

            command = self.commands[parsed_args.command]
            result = await command.execute(parsed_args, config_manager)

            if isinstance(result, dict):
                if parsed_args.json:
                    print(json.dumps(result, indent=2, default=str))
                else:
                    self.logger.info(result.get('message', ''))
                return 0 if result.get('success', True) else 1

            return 0

        except KeyboardInterrupt:
            self.logger.info("Operation cancelled by user")
            return 130

        except Exception as e:
            self.logger.error(f"CLI error: {e}")
            if parsed_args.verbose:
                traceback.print_exc()
            return 1

    def _configure_logging(self, args: argparse.Namespace, config_manager: ConfigManager) -> None:
        """Configure logging from the config file, then the command line."""
        level_name = args.log_level or str(config_manager.get('logging.level', 'INFO')).upper()
        try:
            level = LogLevel(level_name)
        except ValueError:
            level = LogLevel.INFO

        setup_application_logging(
            log_level=level,
            file_logging=bool(config_manager.get('logging.file', False)),
            json_format=bool(config_manager.get('logging.json', False))
        )
        logging.getLogger().setLevel(getattr(logging, level.value))


def main() -> int:
    """Main entry point for the CLI application."""
    cli = RwandaCinemaCLI()

    try:
        return asyncio.run(cli.run())
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
