"""
Entry point for schema_diagram CLI
"""

import logging
import sys

from .cli import setup_argument_parser, run_init_command, run_render_command


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure console logging

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(formatter)

    logger = logging.getLogger('schema_diagram')
    logger.setLevel(logging.DEBUG)
    # Replace the handler from an earlier call instead of stacking another
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(console_handler)


def main(argv=None) -> int:
    """Main entry point for schema_diagram CLI"""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    if args.command == 'init':
        return run_init_command(force=args.force, path=args.path)

    setup_logging(args.log_level)
    return run_render_command(args)


if __name__ == '__main__':
    sys.exit(main())
