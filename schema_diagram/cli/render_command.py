"""
CLI command to render a schema file
"""

import argparse
import logging
from pathlib import Path

from ..core.config import DiagramConfig, build_options
from ..core.exceptions import DiagramError
from ..core.schema_file import load_schema
from ..exporters import export_to_json, export_to_svg
from ..exporters.utils import DEFAULT_JSON_FILENAME, DEFAULT_SVG_FILENAME
from ..render.assembler import DEFAULT_TITLE, generate_diagram
from .argument_parser import determine_output_format

logger = logging.getLogger(__name__)


def _output_path(args: argparse.Namespace, config: DiagramConfig, output_format: str) -> str:
    if args.output:
        return args.output
    if config is not None and args.format is None:
        return str(config.output_file)
    return DEFAULT_JSON_FILENAME if output_format == 'json' else DEFAULT_SVG_FILENAME


def run_render_command(args: argparse.Namespace) -> int:
    """
    Load a schema, generate the diagram and export it

    Options are merged in this order, later wins: the schema file's
    `options:` section, the --config file, then command-line flags.

    Args:
        args: Parsed arguments of the render subcommand

    Returns:
        Exit code (0 = success, 1 = error)
    """
    if not Path(args.schema_file).exists():
        print(f"❌ Schema file not found: {args.schema_file}")
        return 1

    try:
        print(f"📋 Loading schema from: {args.schema_file}")
        tables, relationships, schema_options = load_schema(args.schema_file)

        config = None
        values = schema_options.model_dump(exclude_unset=True)
        if args.config:
            print(f"⚙️  Loading options from: {args.config}")
            config = DiagramConfig.from_yaml(args.config)
            values.update(config.options.model_dump(exclude_unset=True))

        overrides = {'debug_paths': True} if args.debug_paths else {}
        options = build_options(values, **overrides)

        output_format = determine_output_format(args, config.output_format if config else None)
        output_file = _output_path(args, config, output_format)
        title = config.title if config else DEFAULT_TITLE

        logger.info(f"Rendering {len(tables)} tables and {len(relationships)} relationships")
        diagram = generate_diagram(tables, relationships, options, title=title)

        if output_format == 'json':
            export_to_json(diagram, output_file)
            saved = Path(output_file).resolve()
        else:
            saved = export_to_svg(diagram, output_file, options)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1
    except DiagramError as e:
        logger.error(f"Rendering failed: {e}")
        print(f"❌ {e}")
        return 1

    for skipped in diagram.skipped:
        print(f"⚠️  {skipped.annotation}")

    print(f"📄 Diagram saved to: {saved}")
    return 0
