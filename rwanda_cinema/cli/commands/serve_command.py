"""Serve command implementation."""

import argparse
from typing import Any, Dict

from .base_command import BaseCommand
from ...config.config_manager import ConfigManager


class ServeCommand(BaseCommand):
    """Command to run the web server."""

    @property
    def name(self) -> str:
        return 'serve'

    @property
    def description(self) -> str:
        return 'Run the Agasobanuye and sitemap web server'

    def add_parser(self, subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
        """Add serve command parser."""
        parser = self._create_parser(
            subparsers,
            epilog="""
Examples:
  rwanda-cinema serve                      # Host and port from config
  rwanda-cinema serve --port 8080
            """
        )

        parser.add_argument('--host', help='Interface to bind (default: server.host)')
        parser.add_argument('--port', '-p', type=int, help='Port to listen on (default: server.port)')

        return parser

    async def execute(self, args: argparse.Namespace, config_manager: ConfigManager) -> Dict[str, Any]:
        """Execute the serve command."""
        from ...api_server import run_api_server

        config = config_manager.get_config()
        host = args.host or config.server_host
        port = args.port or config.server_port

        # Blocks until the server is stopped
        run_api_server(host=host, port=port, config_manager=config_manager)

        return self._format_result(success=True, message='Server stopped')
