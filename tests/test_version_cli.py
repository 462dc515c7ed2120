import re
import subprocess
import sys

import pytest

import chainlog
from chainlog.cli import main

VERSION_RE = re.compile(r"chainlog\s+(\d+\.\d+\.\d+)")


@pytest.mark.parametrize("args", [["--version"], ["version"]])
def test_cli_version_matches_package(args):
    proc = subprocess.run([sys.executable, "-m", "chainlog.cli"] + args, capture_output=True, text=True)
    assert proc.returncode == 0
    out = (proc.stdout + proc.stderr).strip()
    m = VERSION_RE.match(out)
    assert m, f"Unexpected version output: {out}"
    assert m.group(1) == chainlog.__version__


def test_version_flag_exits_before_subcommands(capsys):
    # argparse's version action exits even when a subcommand follows
    with pytest.raises(SystemExit) as exc:
        main(["--version", "emit", "loud", "x"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"chainlog {chainlog.__version__}"
