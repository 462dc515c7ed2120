"""chainlog: leveled, chainable logging handles.

Expose a single source of truth for the version. Prefer reading from
importlib.metadata so that an editable install or wheel always reports
the version declared in pyproject.toml. Fallback to a hardcoded string
to avoid import errors when metadata is unavailable (e.g. direct source
usage without installation).
"""

from __future__ import annotations

from importlib import metadata as _metadata

from .color import BLACK, BLUE, CYAN, GRAY, GREEN, MAGENTA, RED, WHITE, YELLOW, Color, Colour, blink, reset, underline
from .config import ConfigError, LogConfig, config_from_env, configure, load_config
from .handles import (
	debug,
	error,
	get_log_level,
	handle,
	info,
	set_append,
	set_log_level,
	set_output,
	set_prepend,
	trace,
	warning,
)
from .levels import ErrorCode, Severity, parse_level
from .logger import Logger, PendingWrite, endl, flush
from .registry import RegistryError, destroy, init
from .sinks import AnsiStyler, AttributeStyler, ConsoleSink, FileSink, MultiSink, NullSink, StreamSink

__all__ = [
	"__version__",
	"Color",
	"Colour",
	"blink",
	"underline",
	"reset",
	"BLACK",
	"RED",
	"GREEN",
	"YELLOW",
	"BLUE",
	"MAGENTA",
	"CYAN",
	"WHITE",
	"GRAY",
	"debug",
	"trace",
	"info",
	"warning",
	"error",
	"handle",
	"set_output",
	"set_log_level",
	"get_log_level",
	"set_prepend",
	"set_append",
	"ErrorCode",
	"Severity",
	"parse_level",
	"Logger",
	"PendingWrite",
	"endl",
	"flush",
	"RegistryError",
	"init",
	"destroy",
	"ConfigError",
	"LogConfig",
	"config_from_env",
	"configure",
	"load_config",
	"AnsiStyler",
	"AttributeStyler",
	"ConsoleSink",
	"FileSink",
	"MultiSink",
	"NullSink",
	"StreamSink",
]

_FALLBACK_VERSION = "0.3.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via CLI test
	__version__ = _metadata.version("chainlog")  # type: ignore[assignment]
except Exception:  # pragma: no cover - fallback exercised if metadata missing
	__version__ = _FALLBACK_VERSION
