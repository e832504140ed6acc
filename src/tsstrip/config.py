"""
Runtime Configuration Store.

Settings are resolved in two layers: `[tool.tsstrip]` in the nearest
`pyproject.toml`, overridden by explicit arguments (usually CLI flags).
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from tsstrip.core.modules import DEFAULT_EXPORT_MARKER
from tsstrip.enums import SourceKind

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the transform engine.
  """

  typed_extensions: List[str] = Field(
    default_factory=lambda: [".ts", ".tsx"],
    description="File extensions routed through type stripping.",
  )
  module_extensions: List[str] = Field(
    default_factory=lambda: [".js", ".mjs", ".cjs"],
    description="File extensions routed through module conversion only.",
  )
  convert_modules: bool = Field(
    True,
    description="If False, non-typed files pass through untouched instead of being converted.",
  )
  collapse_whitespace: bool = Field(True, description="Collapse runs of spaces left behind by type removal.")
  export_marker: str = Field(DEFAULT_EXPORT_MARKER, description="Comment line introducing the export trailer.")
  strict_mode: bool = Field(False, description="If True, the CLI fails when any statement had to be commented out.")

  @field_validator("typed_extensions", "module_extensions")
  @classmethod
  def validate_extensions(cls, v: List[str]) -> List[str]:
    """
    Normalizes extensions to lowercase with a leading dot.

    Args:
        v (List[str]): Raw extension list (e.g. ['ts', '.TSX']).

    Returns:
        List[str]: Normalized list (e.g. ['.ts', '.tsx']).

    Raises:
        ValueError: If an entry is empty.
    """
    normalized = []
    for ext in v:
      clean = ext.strip().lower()
      if not clean or clean == ".":
        raise ValueError(f"Invalid file extension: '{ext}'")
      normalized.append(clean if clean.startswith(".") else f".{clean}")
    return normalized

  @field_validator("export_marker")
  @classmethod
  def validate_marker(cls, v: str) -> str:
    if not v.lstrip().startswith("//"):
      raise ValueError(f"Export marker must be a '//' comment, got: '{v}'")
    return v

  def classify(self, filename: str) -> SourceKind:
    """
    Decides how a file is transformed from its name.

    Args:
        filename (str): File name or path.

    Returns:
        SourceKind: TYPED for typed extensions; MODULE for everything else
        unless module conversion is disabled, in which case OPAQUE.
    """
    name = filename.lower()
    if name.endswith(tuple(self.typed_extensions)):
      return SourceKind.TYPED
    if self.convert_modules:
      return SourceKind.MODULE
    return SourceKind.OPAQUE

  @classmethod
  def load(
    cls,
    convert_modules: Optional[bool] = None,
    strict_mode: Optional[bool] = None,
    typed_extensions: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        convert_modules (Optional[bool]): Override for module conversion.
        strict_mode (Optional[bool]): Override for strict mode setting.
        typed_extensions (Optional[List[str]]): Override for typed extensions.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    settings: Dict[str, Any] = dict(toml_config)
    if convert_modules is not None:
      settings["convert_modules"] = convert_modules
    if strict_mode is not None:
      settings["strict_mode"] = strict_mode
    if typed_extensions:
      settings["typed_extensions"] = typed_extensions

    return cls(**settings)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("tsstrip", {}), parent

  return {}, None
