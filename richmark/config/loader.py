"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RichmarkConfig

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def config_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest precedence first."""
    paths = [Path("./richmark.yaml"), Path.home() / ".richmark" / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> RichmarkConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    Empty files are skipped. Unparseable or invalid files raise ``ValueError``
    naming the file instead of falling through.
    """
    for path in config_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
        try:
            return RichmarkConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return RichmarkConfig()


def _read_yaml(path: Path) -> object:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings; unset variables expand to ""."""
    if isinstance(obj, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


# Default YAML template for `richmark config init`
DEFAULT_CONFIG_TEMPLATE = """\
# richmark.yaml

# Conversion
conversion:
  base_font_size: 16             # body text size; headings are measured against it
  detect_base_font_size: true    # prefer the body size a source declares (docx)

# Sources
sources:
  max_file_size_mb: 20
  docx:
    monospace_fonts: ["Courier", "Courier New", "Consolas", "Menlo", "Monaco",
                      "Lucida Console", "Source Code Pro", "Fira Code", "JetBrains Mono"]
  html:
    heading_scale: {h1: 2.0, h2: 1.5, h3: 1.25, h4: 1.0, h5: 0.83, h6: 0.67}

# Output
output:
  base_dir: "converted"
  default_title: "Converted"     # file name when the markdown has no heading
  overwrite: false

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
