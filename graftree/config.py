"""Configuration management for graftree.

Settings are resolved from layers, later layers winning key by key:

    defaults < global file < local file < command-line overrides

The global file lives at ``$XDG_CONFIG_HOME/graftree/config.toml`` and the
local one at ``<source root>/.graftree.toml``. Lists are replaced, not
concatenated: a layer that sets ``include`` discards the include list of the
layers below it. Command-line ``--include``/``--exclude`` follow the same rule.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import tomli
import tomli_w

from .patterns import PatternError, validate_exclude_patterns

logger = logging.getLogger(__name__)

MODES = ("copy", "symlink")
LOCAL_CONFIG_NAME = ".graftree.toml"


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


def _default_include() -> List[str]:
    return [".env"]


@dataclass
class GraftreeConfig:
    """Resolved settings for one graftree run."""

    mode: str = "copy"
    include: List[str] = field(default_factory=_default_include)
    exclude: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate mode and normalize pattern lists."""
        if self.mode not in MODES:
            raise ConfigError(f"Invalid mode {self.mode!r}, expected one of {', '.join(MODES)}")
        self.include = _as_pattern_list("include", self.include)
        self.exclude = _as_pattern_list("exclude", self.exclude)
        try:
            validate_exclude_patterns(self.exclude)
        except PatternError as e:
            raise ConfigError(str(e)) from e

    @property
    def use_symlinks(self) -> bool:
        return self.mode == "symlink"

    def to_dict(self) -> Dict:
        """Convert to dictionary for TOML serialization."""
        return {
            "graftree": {
                "mode": self.mode,
                "include": list(self.include),
                "exclude": list(self.exclude),
            }
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "GraftreeConfig":
        """Create from dictionary."""
        return cls.from_layers([extract_layer(data)])

    @classmethod
    def from_layers(cls, layers: Iterable[Dict[str, Any]]) -> "GraftreeConfig":
        """Reduce partial layers left to right over the defaults."""
        merged: Dict[str, Any] = {}
        for layer in layers:
            merged.update({k: v for k, v in layer.items() if v is not None})
        return cls(**merged)


def _as_pattern_list(name: str, value: Any) -> List[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"{name} must be a list of strings")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{name} must be a list of strings")
    return list(value)


def extract_layer(data: Dict) -> Dict[str, Any]:
    """Pull the known keys of the ``[graftree]`` table out of parsed TOML."""
    table = data.get("graftree", {})
    if not isinstance(table, dict):
        raise ConfigError("[graftree] must be a table")
    return {key: table[key] for key in ("mode", "include", "exclude") if key in table}


def get_global_config_path() -> Path:
    """Get the path to the global config file."""
    config_dir = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_dir / "graftree" / "config.toml"


def get_local_config_path(source_root: Union[Path, str]) -> Path:
    """Get the path to the repository-local config file."""
    return Path(source_root) / LOCAL_CONFIG_NAME


def load_config(config_path: Path) -> Dict:
    """Load configuration from file."""
    if not config_path.exists():
        return {}

    with open(config_path, "rb") as f:
        return tomli.load(f)


def load_layer(config_path: Path) -> Dict[str, Any]:
    """Load one config file as a partial layer.

    A file that fails to parse or validate contributes nothing; the other
    layers still apply.
    """
    try:
        layer = extract_layer(load_config(config_path))
        # Validate the layer on its own so a bad file cannot poison the merge
        GraftreeConfig.from_layers([layer])
    except (OSError, UnicodeDecodeError, tomli.TOMLDecodeError, ConfigError) as e:
        logger.warning(f"Failed to parse config at {config_path}: {e}")
        return {}
    if layer:
        logger.debug(f"Loaded config layer from {config_path}: {layer}")
    return layer


def save_config(config: GraftreeConfig, config_path: Path) -> None:
    """Save configuration to file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config.to_dict(), f)


def cli_overrides(
    symlink: bool = False,
    include: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build the command-line layer. Unset options leave lower layers alone."""
    layer: Dict[str, Any] = {}
    if symlink:
        layer["mode"] = "symlink"
    if include is not None:
        layer["include"] = include
    if exclude is not None:
        layer["exclude"] = exclude
    return layer


def get_graftree_config(
    source_root: Union[Path, str],
    overrides: Optional[Dict[str, Any]] = None,
    global_config_path: Optional[Path] = None,
) -> GraftreeConfig:
    """Resolve configuration for a source checkout."""
    if global_config_path is None:
        global_config_path = get_global_config_path()

    layers = [
        load_layer(global_config_path),
        load_layer(get_local_config_path(source_root)),
        overrides or {},
    ]
    return GraftreeConfig.from_layers(layers)
