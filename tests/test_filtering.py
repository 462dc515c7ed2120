import logging

import pytest

import chainlog
from chainlog import ErrorCode, FileSink, Logger, Severity, endl
from chainlog.levels import LEVELS

FILTERS = LEVELS + (Severity.DISABLED,)


@pytest.mark.parametrize("severity", LEVELS)
@pytest.mark.parametrize("level", FILTERS)
def test_visibility_grid(severity, level, sink, buf):
    assert chainlog.set_log_level(level) is ErrorCode.OK
    log = Logger(severity)
    log.set_output(sink)
    log << "x" << endl
    shown = level is not Severity.DISABLED and severity >= level
    assert buf.getvalue() == ("x\n" if shown else "")


def test_default_filter_is_error(sink, buf):
    assert chainlog.get_log_level() is Severity.ERROR
    chainlog.set_output(sink)
    chainlog.warning << "w"
    chainlog.error << "e"
    assert buf.getvalue() == "e"


def test_no_sink_is_silent():
    log = Logger(Severity.ERROR)
    log.set_prepend("P")
    log << "nothing" << endl
    assert log.output is None


def test_filter_level_scenario(sink, buf):
    chainlog.set_output(sink)
    chainlog.set_log_level(Severity.WARNING)
    chainlog.error(True) << 1
    chainlog.error(False) << 2
    chainlog.warning(True) << 3
    assert buf.getvalue() == "13"


def test_every_handle_against_warning_filter(sink, buf):
    chainlog.set_output(sink)
    chainlog.set_log_level("warning")
    n = 1
    for log in (chainlog.debug, chainlog.trace, chainlog.info, chainlog.warning, chainlog.error):
        log(True) << n
        log(False) << n + 1
        n += 2
    assert buf.getvalue() == "79"


def test_writing_to_a_file(tmp_path):
    path = tmp_path / "out.log"
    out = FileSink(str(path))
    chainlog.set_output(out)
    chainlog.set_log_level("warning")
    chainlog.info << 5
    chainlog.warning << 7
    chainlog.error(False) << 0
    chainlog.error << 9
    out.close()
    assert path.read_text(encoding="utf-8") == "79"


def test_disabled_filter_hides_decoration(sink, buf):
    chainlog.set_log_level("disabled")
    chainlog.set_output(sink)
    chainlog.warning.prepend() << "a" << chainlog.Color(chainlog.GREEN)
    chainlog.warning.append() << "b" << chainlog.Color()
    for log in (chainlog.debug, chainlog.trace, chainlog.info, chainlog.warning, chainlog.error):
        log << "a" << "\n" << endl
    assert buf.getvalue() == ""


def test_decision_is_held_for_the_whole_chain(sink, buf):
    log = Logger(Severity.WARNING)
    log.set_output(sink)
    log.set_append("!")
    chainlog.set_log_level("info")
    token = log << "a"
    chainlog.set_log_level("disabled")
    token << "b"
    del token
    assert buf.getvalue() == "ab!"
    log << "c"
    assert buf.getvalue() == "ab!"


def test_suppressed_token_reports_it(sink):
    log = Logger(Severity.DEBUG)
    log.set_output(sink)
    assert (log << "x").suppressed
    chainlog.set_log_level("debug")
    assert not (log << "x").suppressed


def test_invalid_level_is_reported_not_applied(caplog):
    chainlog.set_log_level("info")
    with caplog.at_level(logging.WARNING, logger="chainlog"):
        assert chainlog.set_log_level("loud") is ErrorCode.INVALID_LOGLEVEL
        assert chainlog.set_log_level(42) is ErrorCode.INVALID_LOGLEVEL
        assert chainlog.set_log_level(None) is ErrorCode.INVALID_LOGLEVEL
    assert chainlog.get_log_level() is Severity.INFO
    assert "invalid log level" in caplog.text


def test_level_parsing():
    assert chainlog.parse_level("WARN") is Severity.WARNING
    assert chainlog.parse_level(" Error ") is Severity.ERROR
    assert chainlog.parse_level(3) is Severity.INFO
    assert chainlog.parse_level("off") is Severity.DISABLED
    assert chainlog.parse_level(True) is None
    assert chainlog.parse_level("verbose") is None


def test_logger_needs_real_severity():
    with pytest.raises(ValueError):
        Logger(Severity.DISABLED)
