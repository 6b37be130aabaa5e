from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass(eq=False)
class BuiltinFunction:
    """A callable backed by a host (Python) function.

    `fn` receives the evaluated argument list. An `arity` of None accepts
    any number of arguments.
    """
    name: str
    arity: Optional[int]
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"
