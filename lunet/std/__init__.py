from typing import Any, List

from lunet.builtin_function import BuiltinFunction
from lunet.environment import Environment
from lunet.types import to_string

from .host import Host


def populate_native_environment(host: Host) -> Environment:
    """Build the root frame holding the native functions as constants."""
    env = Environment()

    def std_print(args: List[Any]) -> Any:
        host.write(' '.join(to_string(a) for a in args))
        return None

    def std_tick(args: List[Any]) -> Any:
        return host.now_ms()

    env.declare('print', True, BuiltinFunction('print', None, std_print), initialized=True)
    env.declare('tick', True, BuiltinFunction('tick', 0, std_tick), initialized=True)
    return env
