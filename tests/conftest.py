import pytest

from lunet.std.host import Host


class RecordingHost(Host):
    """Host that keeps output and diagnostics in lists."""
    def __init__(self, now: float = 1700000000000.0):
        super().__init__()
        self.output = []
        self.logs = []
        self.now = now

    def write(self, text):
        self.output.append(text)

    def log(self, text):
        self.logs.append(text)

    def now_ms(self):
        return self.now


@pytest.fixture
def host():
    return RecordingHost()
