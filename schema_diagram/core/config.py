"""
Configuration management for diagram generation with Pydantic validation
"""

from typing import Dict, Union, Optional, Any, Literal
from pathlib import Path
import yaml
import os
import re
from pydantic import BaseModel, Field, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from .exceptions import ConfigurationError


# ============================================================================
# Pydantic Models for Configuration Validation
# ============================================================================

class DiagramOptions(BaseModel):
    """
    Layout, routing and display options for one diagram.

    Field names are snake_case; the camelCase spelling (``minTableWidth``)
    is accepted as well.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra='ignore'
    )

    # Table layout
    min_table_width: float = Field(200, gt=0, description="Minimum table width in pixels")
    max_table_width: float = Field(400, gt=0, description="Maximum table width in pixels")
    table_header_height: float = Field(35, gt=0, description="Height of the table header band")
    column_row_height: float = Field(22, gt=0, description="Height of one column row")
    table_padding: float = Field(60, ge=0, description="Spacing between tables")
    canvas_margin: float = Field(100, ge=0, description="Margin around the whole canvas, used for safe routing")

    # Connection and routing
    connection_margin: float = Field(25, ge=0, description="Distance from a table edge before a line may turn")
    collision_buffer: float = Field(25, ge=0, description="Minimum clearance around obstacles")
    visual_buffer: float = Field(50, ge=0, description="Additional clearance for readability")
    safe_zone_offset: float = Field(40, ge=0, description="Offset from the canvas margin for detour routing")
    routing_spacing_top: float = Field(60, ge=0, description="Spacing of the top/bottom routing bands")
    routing_spacing_side: float = Field(40, ge=0, description="Spacing of the left/right routing bands")
    grid_cell_size: int = Field(20, gt=0, description="Cell size of the shortest-path routing grid")

    # Text and display
    font_size: float = Field(12, gt=0, description="Column font size")
    header_font_size: float = Field(14, gt=0, description="Header font size")
    text_padding: float = Field(24, ge=0, description="Horizontal padding around text inside a table")
    max_columns: int = Field(15, ge=1, description="Columns shown before truncating a table")
    show_data_types: bool = Field(True, description="Show column data types")
    show_constraints: bool = Field(True, description="Show NOT NULL markers")
    color_scheme: Literal['modern', 'classic', 'minimal'] = Field('modern', description="SVG color scheme")

    # Debug
    debug_paths: bool = Field(False, description="Emit routing buffer zones and waypoint markers")

    @model_validator(mode='after')
    def validate_ranges(self):
        """Ensure related limits are consistent"""
        if self.min_table_width > self.max_table_width:
            raise ValueError(
                f"min_table_width ({self.min_table_width}) cannot be greater than "
                f"max_table_width ({self.max_table_width})"
            )
        if self.safe_zone_offset > self.canvas_margin:
            raise ValueError(
                f"safe_zone_offset ({self.safe_zone_offset}) cannot be greater than "
                f"canvas_margin ({self.canvas_margin})"
            )
        return self

    @property
    def total_buffer(self) -> float:
        """Clearance used when testing routes against obstacles"""
        return self.collision_buffer + self.visual_buffer

    @property
    def safe_zone(self) -> float:
        """Distance of the detour band from the canvas edge"""
        return self.canvas_margin - self.safe_zone_offset


class OutputConfig(BaseModel):
    """Output configuration"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file: str = Field('database_diagram.svg', min_length=1, description="Output file path")
    format: Literal['svg', 'json'] = Field('svg', description="Export format")


class DiagramConfigModel(BaseModel):
    """Pydantic model for the options file"""
    model_config = ConfigDict(extra='ignore')

    version: Optional[Union[int, float, str]] = None
    title: str = Field('Database Structure Diagram', description="Diagram title")
    options: DiagramOptions = Field(default_factory=DiagramOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)


# ============================================================================
# Environment Variable Substitution
# ============================================================================

def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values

    Supports multiple formats:
    - ${VAR_NAME}
    - $VAR_NAME
    - ${VAR_NAME:-default_value}  (with default)

    Args:
        value: Configuration value (can be str, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        def replace_with_default(match):
            var_name = match.group(1)
            default_value = match.group(3)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ConfigurationError(f"Environment variable '{var_name}' is not set and no default value provided")

        value = re.sub(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(:-([^}]*))?\}', replace_with_default, value)

        def replace_simple(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            else:
                raise ConfigurationError(f"Environment variable '{var_name}' is not set")

        value = re.sub(r'\$([A-Za-z_][A-Za-z0-9_]*)', replace_simple, value)

        return value

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    else:
        return value


def _load_yaml(yaml_path: Union[str, Path]) -> Dict:
    """Parse a YAML (or JSON) document into a dictionary"""
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file: {str(e)}") from e
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {yaml_path}, got {type(data).__name__}")
    return data


def build_options(values: Optional[Dict] = None, **overrides) -> DiagramOptions:
    """
    Validate a plain dictionary of options.

    Raises:
        ConfigurationError: If any value is out of range
    """
    merged = dict(values or {})
    merged.update(overrides)
    try:
        return DiagramOptions(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid diagram options: {str(e)}") from e


# ============================================================================
# DiagramConfig Class (wrapper around Pydantic model)
# ============================================================================

class DiagramConfig:
    """Configuration class for diagram generation with validation"""

    def __init__(self, config_dict: Optional[Dict] = None):
        """Initialize from dictionary (parsed from YAML) with Pydantic validation"""
        config_dict = _substitute_env_vars(config_dict or {})

        try:
            self._model = DiagramConfigModel(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {str(e)}") from e

        self.version = self._model.version
        self.title = self._model.title
        self.options = self._model.options
        self.output_file = Path(self._model.output.file)
        self.output_format = self._model.output.format

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'DiagramConfig':
        """Load configuration from YAML file with validation"""
        return cls(_load_yaml(yaml_path))

    def with_options(self, **overrides) -> 'DiagramConfig':
        """Copy of this config with some options replaced"""
        data = self.to_dict()
        data['options'].update(overrides)
        return DiagramConfig(data)

    def to_dict(self) -> Dict:
        """Convert configuration back to dictionary format"""
        return self._model.model_dump()
