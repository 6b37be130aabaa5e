from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from lunet.errors import ConstVar, VarDNE, VarExists


class ScopeState(Enum):
    NONE = 'none'
    LOOP = 'loop'


@dataclass
class Binding:
    value: Any = None
    is_const: bool = False
    # False until the binding first receives a value; an unset const may
    # be assigned exactly once.
    is_set: bool = False


class Environment:
    """One scope frame: bindings plus a reference to the enclosing frame.

    The frame's state tag is inherited from the parent unless given
    explicitly, so every frame nested inside a loop body knows it is
    inside a loop.
    """
    def __init__(self, parent: Optional['Environment'] = None, state: Optional[ScopeState] = None):
        self.parent = parent
        self.values: Dict[str, Binding] = {}
        if state is None:
            state = parent.state if parent is not None else ScopeState.NONE
        self.state = state

    def resolve(self, name: str) -> Optional['Environment']:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def get(self, name: str) -> Any:
        owner = self.resolve(name)
        if owner is None:
            raise VarDNE(name)
        return owner.values[name].value

    def set(self, name: str, value: Any) -> None:
        owner = self.resolve(name)
        if owner is None:
            raise VarDNE(name)
        binding = owner.values[name]
        if binding.is_const and binding.is_set:
            raise ConstVar(name)
        binding.value = value
        binding.is_set = True

    def declare(self, name: str, is_const: bool, value: Any = None, initialized: bool = False) -> None:
        """Create `name` in this frame. Without `initialized` it is unset."""
        if name in self.values:
            raise VarExists(name)
        self.values[name] = Binding(value if initialized else None, is_const, initialized)

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None
