"""
Tests for the command-line interface
"""

import json
import logging

import pytest
import yaml

from schema_diagram.__main__ import main, setup_logging
from schema_diagram.cli import determine_output_format, run_init_command, setup_argument_parser
from schema_diagram.cli.config_template import OPTIONS_TEMPLATE
from schema_diagram.core.config import DiagramConfig


SCHEMA = """
tables:
  - name: customers
    columns: [id, name]
    primary_key: id
  - name: orders
    columns: [id, customer_id]
    primary_key: id
    foreign_keys:
      - {column: customer_id, references: customers.id, constraint_name: fk_orders_customer}
"""


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop console handlers installed by main()"""
    yield
    logger = logging.getLogger('schema_diagram')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / 'schema.yaml'
    path.write_text(SCHEMA, encoding='utf-8')
    return path


class TestArgumentParser:

    def test_render_defaults(self):
        args = setup_argument_parser().parse_args(['render', 'schema.yaml'])
        assert args.command == 'render'
        assert args.schema_file == 'schema.yaml'
        assert args.output is None
        assert args.format is None
        assert args.debug_paths is False
        assert args.log_level == 'INFO'

    def test_command_required(self):
        with pytest.raises(SystemExit):
            setup_argument_parser().parse_args([])

    @pytest.mark.parametrize('argv,configured,expected', [
        (['render', 's.yaml'], None, 'svg'),
        (['render', 's.yaml', '--format', 'json'], None, 'json'),
        (['render', 's.yaml', '-o', 'out.JSON'], None, 'json'),
        (['render', 's.yaml'], 'json', 'json'),
        (['render', 's.yaml', '--format', 'svg'], 'json', 'svg'),
    ])
    def test_output_format(self, argv, configured, expected):
        args = setup_argument_parser().parse_args(argv)
        assert determine_output_format(args, configured) == expected


class TestInitCommand:

    def test_template_is_valid_config(self):
        config = DiagramConfig(yaml.safe_load(OPTIONS_TEMPLATE))
        assert config.options.min_table_width == 200
        assert config.output_format == 'svg'

    def test_creates_file(self, tmp_path):
        target = tmp_path / 'conf' / 'diagram.yaml'
        assert run_init_command(path=str(target)) == 0
        assert target.read_text(encoding='utf-8') == OPTIONS_TEMPLATE

    def test_refuses_to_overwrite(self, tmp_path):
        target = tmp_path / 'diagram.yaml'
        target.write_text('keep', encoding='utf-8')
        assert run_init_command(path=str(target)) == 1
        assert target.read_text(encoding='utf-8') == 'keep'

    def test_force_overwrites(self, tmp_path):
        target = tmp_path / 'diagram.yaml'
        target.write_text('old', encoding='utf-8')
        assert run_init_command(force=True, path=str(target)) == 0
        assert target.read_text(encoding='utf-8') == OPTIONS_TEMPLATE


class TestRenderCommand:
    """End-to-end rendering through main()"""

    def test_render_svg(self, schema_file, tmp_path):
        output = tmp_path / 'shop.svg'
        assert main(['render', str(schema_file), '-o', str(output)]) == 0
        content = output.read_text(encoding='utf-8')
        assert '<svg' in content
        assert 'fk_orders...' in content

    def test_render_json(self, schema_file, tmp_path):
        output = tmp_path / 'shop.json'
        assert main(['render', str(schema_file), '-o', str(output)]) == 0
        data = json.loads(output.read_text(encoding='utf-8'))
        assert len(data['relationships']) == 1

    def test_config_file_options(self, schema_file, tmp_path):
        options_file = tmp_path / 'options.yaml'
        output = tmp_path / 'out.json'
        options_file.write_text(
            f'title: Shop\noptions:\n  debug_paths: true\noutput:\n  file: {output}\n  format: json\n',
            encoding='utf-8'
        )

        assert main(['render', str(schema_file), '--config', str(options_file)]) == 0

        data = json.loads(output.read_text(encoding='utf-8'))
        assert data['title'] == 'Shop'
        assert data['relationships'][0]['debug'] is not None

    def test_debug_paths_flag(self, schema_file, tmp_path):
        output = tmp_path / 'debug.svg'
        assert main(['render', str(schema_file), '-o', str(output), '--debug-paths']) == 0
        assert 'Collision Buffer' in output.read_text(encoding='utf-8')

    def test_missing_schema(self, tmp_path):
        assert main(['render', str(tmp_path / 'missing.yaml')]) == 1

    def test_invalid_schema(self, tmp_path):
        bad = tmp_path / 'bad.yaml'
        bad.write_text('tables:\n  - columns: [id]\n', encoding='utf-8')
        assert main(['render', str(bad), '-o', str(tmp_path / 'x.svg')]) == 1


class TestSetupLogging:

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging('INFO')
        setup_logging('DEBUG')
        handlers = logging.getLogger('schema_diagram').handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

    def test_repeated_renders_keep_one_handler(self, schema_file, tmp_path):
        for name in ('first.svg', 'second.svg'):
            assert main(['render', str(schema_file), '-o', str(tmp_path / name)]) == 0
        assert len(logging.getLogger('schema_diagram').handlers) == 1
