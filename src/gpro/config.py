"""Configuration: display theme and column layout settings.

Settings live in a YAML file::

    theme:
      chord: bold cyan
      comment: italic bright_black
      title: bold yellow
      plain: ""
    column_width: 60
    extra_column_size: 4

The file is taken from ``--config``, else from ``$GPRO_CONFIG``. Missing
settings fall back to their defaults; a missing ``$GPRO_CONFIG`` file falls
back to the default configuration.
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import yaml
from rich.errors import StyleSyntaxError
from rich.style import Style as RichStyle

from .exceptions import ConfigError
from .models import Style

logger = logging.getLogger(__name__)

ENV_VAR = "GPRO_CONFIG"


@dataclass
class Theme:
    """Rich style strings for each :class:`~gpro.models.Style`."""

    chord: str = "bold cyan"
    comment: str = "italic bright_black"
    title: str = "bold yellow"
    plain: str = ""

    def style_for(self, style: Style) -> str:
        return getattr(self, style.value)


@dataclass
class Config:
    theme: Theme = field(default_factory=Theme)
    column_width: int | None = None  # None: columns may use the full width
    extra_column_size: int = 0  # widens column_width, never past the viewport

    @classmethod
    def from_dict(cls, data: dict, path="<config>") -> "Config":
        unknown = set(data) - {f.name for f in fields(cls)}
        for key in sorted(unknown):
            logger.warning("Ignoring unknown config key %r in %s", key, path)

        theme_data = data.get("theme") or {}
        if not isinstance(theme_data, dict):
            raise ConfigError(path, "'theme' must be a mapping")
        theme = Theme()
        for key, value in theme_data.items():
            if key not in {f.name for f in fields(Theme)}:
                logger.warning("Ignoring unknown theme key %r in %s", key, path)
                continue
            if not isinstance(value, str):
                raise ConfigError(path, f"theme.{key} must be a string")
            try:
                RichStyle.parse(value)
            except StyleSyntaxError as exc:
                raise ConfigError(path, f"theme.{key}: {exc}") from exc
            setattr(theme, key, value)

        column_width = data.get("column_width")
        if column_width is not None:
            if isinstance(column_width, bool) or not isinstance(column_width, int):
                raise ConfigError(path, "'column_width' must be an integer")
            if column_width < 1:
                raise ConfigError(path, "'column_width' must be positive")
        extra_column_size = data.get("extra_column_size", 0)
        if isinstance(extra_column_size, bool) or not isinstance(extra_column_size, int):
            raise ConfigError(path, "'extra_column_size' must be an integer")
        if extra_column_size < 0:
            raise ConfigError(path, "'extra_column_size' must not be negative")
        return cls(theme=theme, column_width=column_width, extra_column_size=extra_column_size)

    def effective_column_width(self, column_width: int | None = None) -> int | None:
        """Column width to lay out with: *column_width* (or the configured one)
        widened by ``extra_column_size``. None leaves columns the full width.
        """
        column_width = column_width or self.column_width
        if column_width is None:
            return None
        return column_width + self.extra_column_size

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Read a YAML config file. Raises ConfigError on any problem."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(path, exc.strerror or str(exc)) from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(path, f"invalid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(path, "top level must be a mapping")
        logger.debug("Loaded config from %s", path)
        return cls.from_dict(data, path)

    @classmethod
    def discover(cls, path: Path | None = None) -> "Config":
        """Load *path* if given, else ``$GPRO_CONFIG`` if it exists, else defaults."""
        if path is not None:
            return cls.load(path)
        env_path = os.environ.get(ENV_VAR)
        if env_path:
            if Path(env_path).exists():
                return cls.load(Path(env_path))
            logger.warning("%s points to missing file %s, using defaults", ENV_VAR, env_path)
        return cls()

    def to_yaml(self) -> str:
        return yaml.safe_dump(asdict(self), default_flow_style=False, sort_keys=False)

    @classmethod
    def write_default(cls, path: Path) -> None:
        Path(path).write_text(cls().to_yaml(), encoding="utf-8")
