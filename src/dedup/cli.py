#!/usr/bin/env python3
"""
dedup CLI — find byte-identical files and act on the copies.
Default is a dry run that prints every duplicate path to stdout; nothing is touched
unless -x is given.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import signal
import sys
import threading
import time
from typing import List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from dedup.aliases import ACTION_HELP_TEXT, EPILOG_TEXT, VERBOSITY_LEVELS, action_for
from dedup.commands import DeduplicationCommand
from dedup.core.models import DEFAULT_MIN_SIZE, Action, DeduplicationParams, DeduplicationStats

logger = logging.getLogger(__name__)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbosity: int = 0
        self.quiet: bool = False
        self.stop_event = threading.Event()
        self._interrupts = 0

    @staticmethod
    def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dedup",
            description="dedup — find byte-identical files and keep the likely original",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "dirs",
            nargs="*",
            default=["."],
            metavar="DIR",
            help="Directories to scan (default: current directory)"
        )

        parser.add_argument(
            "--min-size", "-m",
            default=str(DEFAULT_MIN_SIZE),
            type=str,
            metavar='SIZE',
            help=f"Ignore files smaller than this (e.g., 2K, 1MB). Default: {DEFAULT_MIN_SIZE}"
        )

        parser.add_argument(
            "--execute", "-x",
            action="store_true",
            help=ACTION_HELP_TEXT
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="With -x, move duplicates to the system trash instead of removing them"
        )

        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar='N',
            help="Size groups compared concurrently. Default: 1"
        )

        parser.add_argument(
            "--verbose", "-v",
            action="count",
            default=0,
            help="-v logs every comparison, -vv adds debug output"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress the summary and warnings"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.trash and not args.execute:
            self.error_exit("--trash can only be used with --execute/-x")
        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

        try:
            DeduplicationCommand.validate_roots(args.dirs)
        except ValueError as e:
            self.error_exit(str(e))

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                root_dirs=args.dirs,
                min_size_str=args.min_size,
                action=action_for(args.execute, args.trash),
                workers=args.workers,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        level = VERBOSITY_LEVELS[min(self.verbosity, max(VERBOSITY_LEVELS))]
        logging.getLogger().setLevel(level)

    def install_signal_handler(self):
        """First Ctrl+C requests a graceful stop, the second exits immediately. Returns the previous handler."""
        return signal.signal(signal.SIGINT, self.handle_interrupt)

    def handle_interrupt(self, signum, frame) -> None:  # noqa: ARG002
        self._interrupts += 1
        if self._interrupts == 1:
            logger.info("Received interrupt")
            self.stop_event.set()
            return
        logger.error("Received second interrupt; forcing exit")
        os._exit(1)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress on stderr when verbose."""
        if not self.verbosity or self.quiet:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_deduplication(self, params: DeduplicationParams) -> DeduplicationStats:
        """Execute the deduplication workflow."""
        command = DeduplicationCommand()
        if self.verbosity and not self.quiet:
            print(f"Action: {params.action.display_name}", file=sys.stderr)

        try:
            return command.execute(
                params,
                stopped_flag=self.stop_event.is_set,
                progress_callback=self.progress_callback
            )
        except (RuntimeError, OSError) as e:
            self.error_exit(f"Deduplication failed: {e}")

    def output_summary(self, stats: DeduplicationStats, params: DeduplicationParams) -> None:
        if self.quiet:
            return
        if self.verbosity:
            sys.stderr.write("\n")
            print(stats.print_summary(), file=sys.stderr)
        if stats.handler_failures:
            self.warning(f"Failed to handle {stats.handler_failures} duplicate file(s)")
        if params.action is not Action.DRY_RUN and self.verbosity:
            print(f"Handled {stats.handled} duplicate file(s)", file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(argv)
        self.verbosity = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        self.validate_args(args)
        params = self.create_params(args)

        previous_handler = self.install_signal_handler()
        try:
            stats = self.run_deduplication(params)
        finally:
            signal.signal(signal.SIGINT, previous_handler)
        self.output_summary(stats, params)

        if self.verbosity and not self.quiet:
            elapsed = time.time() - self.start_time
            print(f"✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)

        return 130 if self.stop_event.is_set() else 0


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
