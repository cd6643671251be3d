"""
Command-line argument parser configuration with subcommands
"""

import argparse


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser with subcommands (init, render)

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='schema_diagram',
        description='Draw database structure diagrams with obstacle-avoiding relationship lines',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Initialize options file
  schema_diagram init                             # Create ./diagram_config.yaml
  schema_diagram init --force                     # Overwrite existing file
  schema_diagram init --path ./my_options.yaml    # Create in custom location

  # Render diagrams
  schema_diagram render schema.yaml                       # Write database_diagram.svg
  schema_diagram render schema.yaml -o shop.svg           # Custom output file
  schema_diagram render schema.yaml --format json         # Draw instructions as JSON
  schema_diagram render schema.yaml --config opts.yaml    # Use an options file
  schema_diagram render schema.yaml --debug-paths         # Show buffers and routing bands
        """
    )

    # Create subcommands
    subparsers = parser.add_subparsers(
        dest='command',
        required=True,
        help='Command to execute'
    )

    # ========================================================================
    # INIT SUBCOMMAND
    # ========================================================================
    init_parser = subparsers.add_parser(
        'init',
        help='Create a new options file',
        description='Create a diagram options file with every setting at its default'
    )

    init_parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing options file'
    )

    init_parser.add_argument(
        '--path', '-p',
        type=str,
        help='Custom path for options file (default: ./diagram_config.yaml)'
    )

    # ========================================================================
    # RENDER SUBCOMMAND
    # ========================================================================
    render_parser = subparsers.add_parser(
        'render',
        help='Render a schema file to a diagram',
        description='Lay out tables, route relationships and export the result'
    )

    render_parser.add_argument(
        'schema_file',
        help='Path to YAML or JSON schema file'
    )

    render_parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file (default: from options file, or database_diagram.svg)'
    )

    render_parser.add_argument(
        '--format',
        choices=['svg', 'json'],
        help='Output format (default: inferred from output file extension, or svg)'
    )

    render_parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to YAML options file'
    )

    render_parser.add_argument(
        '--debug-paths',
        action='store_true',
        help='Draw buffer zones, routing bands and waypoints'
    )

    render_parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Set logging level (default: INFO). Use DEBUG to see the strategy picked per relationship.'
    )

    return parser


def determine_output_format(args: argparse.Namespace, configured_format: str = None) -> str:
    """
    Determine output format from parsed arguments

    Args:
        args: Parsed command-line arguments
        configured_format: Format from the options file, if one was given

    Returns:
        Output format string ('svg' or 'json')
    """
    if args.format:
        return args.format
    elif args.output and args.output.lower().endswith('.json'):
        return 'json'
    elif configured_format:
        return configured_format
    else:
        return 'svg'
