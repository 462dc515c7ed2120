import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib  # type: ignore
else:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore

from rich.console import Console

from .handles import set_append, set_log_level, set_output, set_prepend
from .levels import LEVELS, ErrorCode, parse_level
from .logutil import get_logger
from .sinks import AnsiStyler, ConsoleSink, FileSink, NullSink, Sink, StreamSink, default_styler


class ConfigError(ValueError):
    pass


OUTPUTS = ("stdout", "stderr", "file", "console", "null")
COLOR_MODES = ("auto", "always", "never")


@dataclass
class LogConfig:
    # Global filter; a level name, its number, or "disabled"
    level: Union[str, int] = "error"
    # Where every severity writes: stdout | stderr | file | console (rich) | null
    output: str = "stdout"
    # Required when output == "file"
    path: Optional[str] = None
    # auto: escape codes only on a TTY
    color: str = "auto"
    # Per-level decoration, keyed by level name
    prepend: Dict[str, str] = field(default_factory=dict)
    append: Dict[str, str] = field(default_factory=dict)


def _from_mapping(data: Mapping[str, Any], base: Optional[LogConfig] = None) -> LogConfig:
    # never mutate the caller's config
    cfg = replace(base, prepend=dict(base.prepend), append=dict(base.append)) if base is not None else LogConfig()
    level = data.get("level")
    if level is not None:
        # TOML integers stay numeric: level = 3 means info
        cfg.level = level if isinstance(level, int) and not isinstance(level, bool) else str(level)
    for key in ("output", "path", "color"):
        if key in data:
            setattr(cfg, key, str(data[key]))
    for key in ("prepend", "append"):
        if key in data:
            table = data[key]
            if not isinstance(table, Mapping):
                raise ConfigError(f"'{key}' must be a table of level = text")
            getattr(cfg, key).update({str(k): str(v) for k, v in table.items()})
    return cfg


def load_config(path: Union[str, Path], base: Optional[LogConfig] = None) -> LogConfig:
    """Read a TOML file; settings may sit at top level or under [chainlog] / [tool.chainlog]."""
    p = Path(path)
    try:
        data = tomllib.loads(p.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {p}: {exc}") from exc
    if "tool" in data and "chainlog" in data["tool"]:
        data = data["tool"]["chainlog"]
    elif "chainlog" in data:
        data = data["chainlog"]
    return _from_mapping(data, base)


def config_from_env(environ: Optional[Mapping[str, str]] = None, base: Optional[LogConfig] = None) -> LogConfig:
    env = os.environ if environ is None else environ
    data = {}
    for key in ("level", "output", "path", "color"):
        value = env.get(f"CHAINLOG_{key.upper()}")
        if value:
            data[key] = value
    return _from_mapping(data, base)


def build_sink(cfg: LogConfig) -> Sink:
    if cfg.output not in OUTPUTS:
        raise ConfigError(f"unknown output '{cfg.output}' (expected one of {', '.join(OUTPUTS)})")
    if cfg.color not in COLOR_MODES:
        raise ConfigError(f"unknown color mode '{cfg.color}' (expected one of {', '.join(COLOR_MODES)})")
    if cfg.output == "null":
        return NullSink()
    if cfg.output == "file":
        if not cfg.path:
            raise ConfigError("output 'file' requires a path")
        # files never get escape codes unless asked for
        return FileSink(cfg.path, styler=AnsiStyler() if cfg.color == "always" else None)
    if cfg.output == "console":
        return ConsoleSink(Console(no_color=cfg.color == "never", highlight=False, soft_wrap=True))
    stream = sys.stdout if cfg.output == "stdout" else sys.stderr
    if cfg.color == "never":
        return StreamSink(stream)
    if cfg.color == "always":
        return StreamSink(stream, AnsiStyler())
    return StreamSink(stream, default_styler(stream))


def configure(cfg: LogConfig) -> ErrorCode:
    """Apply ``cfg`` to every registered logger; return the set_log_level result."""
    for table in (cfg.prepend, cfg.append):
        for name in table:
            if parse_level(name) not in LEVELS:
                raise ConfigError(f"unknown level '{name}' in decoration table")
    sink = build_sink(cfg)
    set_output(sink)
    for severity in LEVELS:
        set_prepend(severity, *_lookup(cfg.prepend, severity))
        set_append(severity, *_lookup(cfg.append, severity))
    rc = set_log_level(cfg.level)
    get_logger("config").debug("configured output=%s level=%s rc=%s", cfg.output, cfg.level, rc.name)
    return rc


def _lookup(table: Dict[str, str], severity) -> tuple:
    # later keys win, so "warning" added after a "warn" entry overrides it
    found: tuple = ()
    for name, text in table.items():
        if parse_level(name) is severity:
            found = (text,)
    return found


__all__ = [
    "LogConfig",
    "ConfigError",
    "load_config",
    "config_from_env",
    "build_sink",
    "configure",
]
