from typing import Any, Dict, Iterable, Optional, Tuple


class Trie:
    """Prefix tree node. `value` is set on nodes that complete an entry."""
    def __init__(self, value: Optional[Any] = None):
        self.value = value
        self.children: Dict[str, 'Trie'] = {}

    def child(self, c: str) -> Optional['Trie']:
        return self.children.get(c)

    def __repr__(self) -> str:
        return f"<trie value={self.value!r} children={sorted(self.children)}>"


def build_trie(entries: Iterable[Tuple[str, Any]]) -> Trie:
    root = Trie()
    for text, value in entries:
        node = root
        for c in text:
            if c not in node.children:
                node.children[c] = Trie()
            node = node.children[c]
        node.value = value
    return root
