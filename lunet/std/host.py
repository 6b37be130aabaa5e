import sys
import time
from typing import Optional, TextIO


class Host:
    """What the interpreter needs from the program embedding it.

    `write` receives output from `print`, `log` receives diagnostics
    (syntax errors, the CLI's runtime errors) and `now_ms` backs `tick`.
    """
    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out
        self.err = err

    def write(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def log(self, text: str) -> None:
        print(text, file=self.err if self.err is not None else sys.stderr)

    def now_ms(self) -> float:
        return float(time.time_ns() // 1_000_000)
