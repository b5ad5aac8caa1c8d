"""Base command class for CLI commands."""

import argparse
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict

from ...config.config_manager import ConfigManager


class BaseCommand(ABC):
    """
    Base class for all CLI commands.

    Provides common functionality and interface for command implementations.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Command description."""
        pass

    @abstractmethod
    def add_parser(self, subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
        """
        Add command parser to subparsers.

        Args:
            subparsers: Subparsers action from main parser

        Returns:
            Command-specific argument parser
        """
        pass

    @abstractmethod
    async def execute(self, args: argparse.Namespace, config_manager: ConfigManager) -> Any:
        """
        Execute the command.

        Args:
            args: Parsed command line arguments
            config_manager: Loaded configuration

        Returns:
            Command result; a dict carrying ``success`` decides the exit code
        """
        pass

    def _create_parser(self, subparsers: argparse._SubParsersAction, **kwargs) -> argparse.ArgumentParser:
        """Create a parser for this command with common options."""
        return subparsers.add_parser(
            self.name,
            description=self.description,
            help=self.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            **kwargs
        )

    def _format_result(self, success: bool, message: str, **kwargs) -> Dict[str, Any]:
        """
        Format command result in standard format.

        Args:
            success: Whether the command succeeded
            message: Result message
            **kwargs: Additional result data

        Returns:
            Formatted result dictionary
        """
        result = {
            'success': success,
            'message': message,
            'timestamp': datetime.now().isoformat()
        }

        result.update(kwargs)
        return result
