"""
CLI workflow orchestration for dedupifyr.

Provides the CLIOrchestrator class that sets up options and the session,
then either runs a single request or drives the interactive console loop.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import BIAS_FACTOR_FLAG, HELP_COMMANDS, OPTIONS_COMMANDS, SEARCH_DEPTH_FLAG
from ..errors import DedupifyrError, ErrorKind
from ..options import ComparisonOptionsBuilder
from ..scanner import create_calculator
from ..session import Session, is_command
from ..status import ExecutionStatus, Faulted, NoOp, OptionsUpdated, Success, Terminated
from ..user_config import get_user_config
from .arg_parser import parse_arguments
from .interactive import (
    print_banner,
    print_blank_input_hint,
    print_help,
    prompt_for_options,
    read_request,
)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Builds the initial options from the user config and command-line flags,
    then hands every line of input to the Session and reacts to the
    ExecutionStatus it returns.
    """

    def __init__(self, argv=None, input_fn: Callable[[str], str] = input):
        """Initialize the orchestrator."""
        self.argv = argv
        self.input_fn = input_fn
        self.logger: Optional[logging.Logger] = None
        self.args = None
        self.session: Optional[Session] = None

    def run(self) -> int:
        """
        Execute the CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)
        """
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

        exit_code = self._configure_phase()
        if exit_code != 0:
            return exit_code

        if self.args.request is not None:
            status = self.session.execute(self.args.request)
            self.handle_status(status)
            return 1 if isinstance(status, Faulted) else 0

        return self._console_loop()

    def _configure_phase(self) -> int:
        """
        Build the initial options and the session.

        Returns:
            0 for success, 1 for a configuration error
        """
        user_config = get_user_config()

        flags = user_config.as_flags()
        if self.args.depth is not None:
            flags[SEARCH_DEPTH_FLAG] = self.args.depth
        if self.args.bias is not None:
            flags[BIAS_FACTOR_FLAG] = self.args.bias

        try:
            options = ComparisonOptionsBuilder().build_from_flags(flags)
            calculator = create_calculator(self.args.calculator or user_config.calculator)
        except (DedupifyrError, ValueError) as e:
            self.logger.error(str(e))
            return 1

        workers = self.args.workers if self.args.workers is not None else user_config.workers
        self.session = Session(
            options=options,
            calculator=calculator,
            max_workers=max(1, workers),
            show_progress=not self.args.no_progress,
        )
        self.logger.debug(f"Starting with {options} and {type(calculator).__name__}")
        return 0

    def _console_loop(self) -> int:
        """Read and run requests until a termination command or end of input."""
        print_banner()

        while True:
            raw = read_request(self.input_fn)
            if raw is None:
                print()
                return 0

            if is_command(raw, HELP_COMMANDS):
                print_help(self.session.options)
                continue

            if is_command(raw, OPTIONS_COMMANDS):
                try:
                    flags = prompt_for_options(self.input_fn)
                except KeyboardInterrupt:
                    print()
                    continue
                status = self.session.change_options(flags)
            else:
                status = self.session.execute(raw)

            if not self.handle_status(status):
                return 0

    def handle_status(self, status: ExecutionStatus) -> bool:
        """
        React to one ExecutionStatus.

        Returns:
            False when the loop should stop, True otherwise
        """
        if isinstance(status, Terminated):
            return False

        if isinstance(status, NoOp):
            print_blank_input_hint()
        elif isinstance(status, Faulted):
            if status.kind is ErrorKind.CANCELLED:
                self.logger.warning(status.message)
            else:
                self.logger.error(f"{status.kind.value}: {status.message}")
        elif isinstance(status, OptionsUpdated):
            self.logger.info(
                f"Options updated: directory level = {status.options.search_depth.value}, "
                f"bias factor = {status.options.bias_factor:g}"
            )
        elif isinstance(status, Success):
            status.present()
        return True


__all__ = ['CLIOrchestrator', 'setup_logging']
