"""
CLI package for dedupifyr.

Provides the command-line interface: a one-shot request mode and the
interactive console.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .interactive import print_help, prompt_for_options, read_request


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    'main',
    'CLIOrchestrator',
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_help',
    'prompt_for_options',
    'read_request',
]
