"""
Grid Defaults and Container Configuration

Loads package defaults (grid settings, breakpoint and column tables) from
grid_defaults.yaml and exposes the per-container GridConfig. Users can point
get_defaults() at their own YAML file to change defaults without modifying
code.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import logging

import yaml

from .placement.compactor import CompactType

logger = logging.getLogger(__name__)

# Every handle a resize can start from
RESIZE_HANDLES = ("n", "s", "e", "w", "ne", "nw", "se", "sw")


class GridDefaults:
    """
    Manager for default grid settings.

    Loads grid_defaults.yaml by default, but allows users to provide a
    custom configuration file.
    """

    REQUIRED_SECTIONS = ("grid", "breakpoints", "cols", "fallback")

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the defaults manager.

        Args:
            config_path: Optional path to a custom defaults YAML file.
                        If None, uses the packaged grid_defaults.yaml.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "grid_defaults.yaml"

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self):
        """Load defaults from the YAML configuration file."""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Grid defaults file not found: {self.config_path}"
            )

        # Refuse symlinks so a defaults path cannot redirect to unrelated files
        if self.config_path.is_symlink():
            raise ValueError(
                f"Grid defaults file cannot be a symlink: {self.config_path}"
            )

        with open(self.config_path, 'r') as f:
            self._config = yaml.safe_load(f) or {}

        missing = [s for s in self.REQUIRED_SECTIONS if s not in self._config]
        if missing:
            raise ValueError(
                f"Grid defaults file missing required sections: {missing}"
            )
        logger.debug("Loaded grid defaults from %s", self.config_path)

    @property
    def grid(self) -> Dict[str, Any]:
        """Per-container settings."""
        return dict(self._config.get('grid') or {})

    @property
    def breakpoints(self) -> Dict[str, int]:
        """Breakpoint name -> minimum width in pixels."""
        return {str(k): int(v) for k, v in (self._config.get('breakpoints') or {}).items()}

    @property
    def cols(self) -> Dict[str, int]:
        """Breakpoint name -> column count."""
        return {str(k): int(v) for k, v in (self._config.get('cols') or {}).items()}

    @property
    def fallback_breakpoint(self) -> str:
        """Breakpoint used when a breakpoint table is empty."""
        return str(self._config['fallback'].get('breakpoint', 'lg'))

    @property
    def fallback_cols(self) -> int:
        """Column count used when no table knows a breakpoint."""
        return int(self._config['fallback'].get('cols', 12))

    def reload(self):
        """Reload configuration from file (useful during development)."""
        self._load_config()


# Global instance for convenience
_default_config: Optional[GridDefaults] = None


def get_defaults(config_path: Optional[Union[str, Path]] = None) -> GridDefaults:
    """
    Get the grid defaults instance.

    Args:
        config_path: Optional path to a custom defaults file.
                    If None, uses the cached packaged instance.
    """
    global _default_config

    if config_path is not None:
        return GridDefaults(config_path)

    if _default_config is None:
        _default_config = GridDefaults()

    return _default_config


def reload_defaults():
    """Reload the packaged defaults from their configuration file."""
    global _default_config
    if _default_config is not None:
        _default_config.reload()


@dataclass(frozen=True)
class GridConfig:
    """Settings for one grid container."""
    # Geometry
    cols: int = 12
    row_height: float = 60  # px
    gap: float = 16  # px
    margin: Optional[Tuple[float, float]] = None  # (horizontal, vertical) px; defaults to gap
    container_padding: Tuple[float, float] = (16, 16)
    container_width: float = 0  # content width in px, padding excluded
    max_rows: Optional[int] = None

    # Interaction
    is_draggable: bool = True
    is_resizable: bool = True
    prevent_collision: bool = False  # reject moves that hit any item
    allow_overlap: bool = False  # no cascade, no compaction
    is_bounded: bool = True
    compact_type: CompactType = CompactType.VERTICAL
    resize_handles: Tuple[str, ...] = ("se",)
    resize_threshold: float = 0.3  # fraction of a cell before a resize snaps

    # Unknown keys from a defaults file end up here instead of failing
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "compact_type", CompactType.parse(self.compact_type))
        handles = tuple(self.resize_handles)
        unknown = [h for h in handles if h not in RESIZE_HANDLES]
        if unknown:
            raise ValueError(
                f"Unknown resize handles: {unknown}. Valid options: {list(RESIZE_HANDLES)}"
            )
        object.__setattr__(self, "resize_handles", handles)
        if self.margin is not None:
            object.__setattr__(self, "margin", tuple(self.margin))
        object.__setattr__(self, "container_padding", tuple(self.container_padding))

    @property
    def effective_compact_type(self) -> CompactType:
        """Compaction applied after operations (none while overlaps are allowed)."""
        if self.allow_overlap:
            return CompactType.NONE
        return self.compact_type

    def with_cols(self, cols: int) -> "GridConfig":
        return replace(self, cols=cols)

    def with_width(self, container_width: float) -> "GridConfig":
        return replace(self, container_width=container_width)

    @classmethod
    def from_defaults(cls, defaults: Optional[GridDefaults] = None,
                      **overrides: Any) -> "GridConfig":
        """
        Build a config from the ``grid`` section of a defaults file.

        Args:
            defaults: Defaults to read; the packaged defaults if None
            **overrides: Field values that win over the file
        """
        defaults = defaults or get_defaults()
        known = set(cls.__dataclass_fields__) - {"extra"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in defaults.grid.items():
            if key in known:
                if value is not None:
                    values[key] = value
            else:
                extra[key] = value
        if extra:
            logger.warning("Ignoring unknown grid settings: %s", sorted(extra))
        values.update(overrides)
        return cls(extra=extra, **values)
