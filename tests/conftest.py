import io

import pytest

import chainlog
from chainlog import StreamSink


@pytest.fixture(autouse=True)
def fresh_state():
    chainlog.init()
    yield
    chainlog.destroy()


@pytest.fixture
def buf():
    return io.StringIO()


@pytest.fixture
def sink(buf):
    return StreamSink(buf)
