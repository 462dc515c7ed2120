import argparse
import sys
from typing import List, Optional

from rich.console import Console

from . import __version__
from .color import Color, GRAY, GREEN, RED, blink
from .config import ConfigError, LogConfig, config_from_env, configure, load_config
from .handles import error, handle, info, set_log_level, set_output, warning
from .levels import ErrorCode, LEVELS, level_name, parse_level
from .logger import endl
from .sinks import ConsoleSink, Sink, StreamSink


def _build_config(args: argparse.Namespace) -> LogConfig:
    cfg = LogConfig()
    if getattr(args, "config", None):
        cfg = load_config(args.config, cfg)
    cfg = config_from_env(base=cfg)
    if getattr(args, "filter", None) is not None:
        cfg.level = args.filter
    if getattr(args, "file", None):
        cfg.output, cfg.path = "file", args.file
    elif getattr(args, "stderr", False):
        cfg.output = "stderr"
    if getattr(args, "no_color", False):
        cfg.color = "never"
    return cfg


def cmd_emit(args: argparse.Namespace) -> int:
    severity = parse_level(args.level)
    if severity not in LEVELS:
        print(f"[chainlog] unknown level '{args.level}'", file=sys.stderr)
        return 2
    try:
        cfg = _build_config(args)
        if args.prepend is not None:
            cfg.prepend[level_name(severity)] = args.prepend
        if args.append is not None:
            cfg.append[level_name(severity)] = args.append
        rc = configure(cfg)
    except (ConfigError, OSError) as exc:
        print(f"[chainlog] {exc}", file=sys.stderr)
        return 2
    if rc is not ErrorCode.OK:
        print(f"[chainlog] invalid filter level '{cfg.level}'", file=sys.stderr)
        return 2
    log = handle(severity)
    # the line ends after the append text
    log.set_append(*log.append_parts, endl)
    log.write(" ".join(args.message))
    return 0


def _demo_sink(no_color: bool) -> Sink:
    if no_color:
        return StreamSink(sys.stdout)
    # force_terminal keeps the escape codes when output is captured
    return ConsoleSink(Console(color_system="standard", force_terminal=True, highlight=False, soft_wrap=True))


def cmd_demo(args: argparse.Namespace) -> int:
    set_output(_demo_sink(getattr(args, "no_color", False)))
    set_log_level("info")

    info.prepend() << "[" << Color(GRAY) << ".." << Color() << "] "
    warning.prepend() << "[" << Color(GREEN) << "ww" << Color() << "] "
    error.prepend() << "[" << Color(RED, True) << blink() << "EE" << Color() << "] " << Color(True)
    error.append() << Color()

    info << "A custom flavour info line" << endl
    warning << "A custom flavour warning line" << endl
    error << "A custom flavour error line" << endl
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chainlog", description="Leveled, chainable logging handles.")
    # Global --version (argparse will exit 0 before validating subcommands)
    parser.add_argument(
        "--version",
        action="version",
        version=f"chainlog {__version__}",
        help="Show version and exit",
    )
    sub = parser.add_subparsers(dest="cmd")

    emit_parser = sub.add_parser("emit", help="Write one message through a severity handle")
    emit_parser.add_argument("level", help="debug, trace, info, warning or error")
    emit_parser.add_argument("message", nargs="+", help="Message words (joined with spaces)")
    emit_parser.add_argument("--filter", help="Global filter level (default: error, or CHAINLOG_LEVEL)")
    emit_parser.add_argument("--prepend", help="Text written before the message")
    emit_parser.add_argument("--append", help="Text written after the message")
    target = emit_parser.add_mutually_exclusive_group()
    target.add_argument("--stderr", action="store_true", help="Write to stderr instead of stdout")
    target.add_argument("--file", help="Append to this file instead of stdout")
    emit_parser.add_argument("--config", help="TOML file with [chainlog] settings")
    emit_parser.add_argument("--no-color", action="store_true", help="Never emit escape sequences")
    emit_parser.set_defaults(func=cmd_emit)

    demo_parser = sub.add_parser("demo", help="Show colored per-level prefixes")
    demo_parser.add_argument("--no-color", action="store_true", help="Disable colorized output")
    demo_parser.set_defaults(func=cmd_demo)

    # Simple 'version' subcommand for shells/users preferring explicit command
    version_parser = sub.add_parser("version", help="Show version and exit")
    version_parser.set_defaults(func=lambda _: (print(f"chainlog {__version__}"), 0)[1])

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "cmd", None):  # No subcommand provided
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
