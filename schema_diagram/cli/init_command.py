"""
CLI command to create a schema_diagram options file
"""

from pathlib import Path
from .config_template import OPTIONS_TEMPLATE

DEFAULT_OPTIONS_FILE = 'diagram_config.yaml'


def run_init_command(force: bool = False, path: str = None) -> int:
    """
    Generate an options file in current directory or custom path

    Args:
        force: If True, overwrite existing options file
        path: Custom path for options file. If None, creates ./diagram_config.yaml

    Returns:
        Exit code (0 = success, 1 = error)
    """
    config_path = Path(path or DEFAULT_OPTIONS_FILE).resolve()

    if config_path.exists() and not force:
        print(f"❌ Options file already exists: {config_path}")
        print("   Use --force to overwrite")
        return 1

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"❌ Failed to create directory: {config_path.parent}")
        print(f"   Error: {e}")
        return 1

    try:
        config_path.write_text(OPTIONS_TEMPLATE, encoding='utf-8')
    except OSError as e:
        print(f"❌ Failed to write options file: {config_path}")
        print(f"   Error: {e}")
        return 1

    print(f"✅ Options file created: {config_path}")
    print("\nNext steps:")
    print(f"  1. Edit the values you want to change in {config_path}")
    print("\n  2. Render your schema:")
    print(f"     schema_diagram render schema.yaml --config {config_path}")

    return 0
