import pytest

import chainlog
from chainlog import ErrorCode, Severity
from chainlog.config import ConfigError, LogConfig, build_sink, config_from_env, configure, load_config
from chainlog.sinks import ConsoleSink, FileSink, NullSink, StreamSink


def test_load_config_from_chainlog_table(tmp_path):
    path = tmp_path / "log.toml"
    path.write_text(
        '[chainlog]\nlevel = "info"\noutput = "stderr"\n\n[chainlog.prepend]\nerror = "E: "\n',
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.level == "info"
    assert cfg.output == "stderr"
    assert cfg.prepend == {"error": "E: "}


def test_load_config_from_pyproject_tool_table(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n\n[tool.chainlog]\nlevel = "debug"\ncolor = "never"\n', encoding="utf-8")
    cfg = load_config(path)
    assert (cfg.level, cfg.color) == ("debug", "never")


def test_load_config_rejects_bad_toml(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("level = \n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_env_overrides_base():
    base = LogConfig(level="info", output="stdout")
    cfg = config_from_env({"CHAINLOG_LEVEL": "trace", "CHAINLOG_OUTPUT": "null", "UNRELATED": "1"}, base)
    assert cfg.level == "trace"
    assert cfg.output == "null"
    assert cfg.color == "auto"


def test_build_sink_variants(tmp_path):
    assert isinstance(build_sink(LogConfig(output="null")), NullSink)
    assert isinstance(build_sink(LogConfig(output="console")), ConsoleSink)
    plain = build_sink(LogConfig(output="stderr", color="never"))
    assert isinstance(plain, StreamSink) and plain.styler is None
    colored = build_sink(LogConfig(output="stdout", color="always"))
    assert colored.styler is not None
    fsink = build_sink(LogConfig(output="file", path=str(tmp_path / "a.log")))
    assert isinstance(fsink, FileSink) and fsink.styler is None
    fsink.close()


@pytest.mark.parametrize(
    "cfg",
    [
        LogConfig(output="syslog"),
        LogConfig(color="sometimes"),
        LogConfig(output="file"),
        LogConfig(prepend={"loud": "!"}),
    ],
)
def test_invalid_config_raises(cfg):
    with pytest.raises(ConfigError):
        configure(cfg)


def test_configure_applies_everything(tmp_path):
    path = tmp_path / "app.log"
    cfg = LogConfig(level="info", output="file", path=str(path), prepend={"warn": "W: "}, append={"error": "!"})
    assert configure(cfg) is ErrorCode.OK
    assert chainlog.get_log_level() is Severity.INFO
    chainlog.debug << "hidden" << chainlog.endl
    chainlog.warning << "low disk" << chainlog.endl
    chainlog.error << "gone" << chainlog.endl
    chainlog.error.output.close()
    assert path.read_text(encoding="utf-8") == "W: low disk\ngone\n!"


def test_configure_reports_invalid_level_but_keeps_output(capsys):
    rc = configure(LogConfig(level="loud", output="stdout", color="never"))
    assert rc is ErrorCode.INVALID_LOGLEVEL
    assert chainlog.get_log_level() is Severity.ERROR
    chainlog.error << "still here" << chainlog.endl
    assert capsys.readouterr().out == "still here\n"


def test_loading_leaves_the_base_config_untouched(tmp_path):
    base = LogConfig(level="info", prepend={"error": "E: "})
    path = tmp_path / "log.toml"
    path.write_text('level = "debug"\n\n[prepend]\nwarning = "W: "\n', encoding="utf-8")
    cfg = load_config(path, base)
    env_cfg = config_from_env({"CHAINLOG_OUTPUT": "null"}, base)
    assert cfg.level == "debug"
    assert cfg.prepend == {"error": "E: ", "warning": "W: "}
    assert env_cfg.output == "null"
    assert base == LogConfig(level="info", prepend={"error": "E: "})


def test_numeric_level_from_toml(tmp_path):
    path = tmp_path / "log.toml"
    path.write_text("[chainlog]\nlevel = 3\noutput = \"null\"\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.level == 3
    assert configure(cfg) is ErrorCode.OK
    assert chainlog.get_log_level() is Severity.INFO
