"""Prefix index over product names."""

from __future__ import annotations

from typing import Dict, List

from .types import Product


class _TrieNode:
    __slots__ = ("children", "products", "is_end_of_word")

    def __init__(self) -> None:
        self.children: Dict[str, _TrieNode] = {}
        self.products: List[Product] = []
        self.is_end_of_word = False


def _normalize(prefix: str | None) -> str:
    return (prefix or "").strip().lower()


class PrefixIndex:
    """Trie keyed by lowercased product name.

    Each node keeps every product whose name passes through it, so a prefix
    lookup is a walk down the prefix followed by a copy of one list.
    """

    def __init__(self) -> None:
        self._root = _TrieNode()

    def insert(self, product: Product) -> None:
        if product is None:
            raise ValueError("product cannot be None")

        current = self._root
        current.products.append(product)
        for ch in product.name.lower():
            current = current.children.setdefault(ch, _TrieNode())
            current.products.append(product)
        current.is_end_of_word = True

    def _find(self, prefix: str) -> _TrieNode | None:
        current = self._root
        for ch in prefix:
            current = current.children.get(ch)
            if current is None:
                return None
        return current

    def search(self, prefix: str | None) -> List[Product]:
        """Return products whose name starts with *prefix* (case-insensitive)."""
        normalized = _normalize(prefix)
        if not normalized:
            return []
        node = self._find(normalized)
        return list(node.products) if node is not None else []

    def search_with_limit(self, prefix: str | None, limit: int) -> List[Product]:
        if limit <= 0:
            return []
        return self.search(prefix)[:limit]

    def has_prefix(self, prefix: str | None) -> bool:
        normalized = _normalize(prefix)
        if not normalized:
            return False
        node = self._find(normalized)
        return node is not None and bool(node.products)

    def all_products(self) -> List[Product]:
        return list(self._root.products)

    def remove(self, product: Product | None) -> bool:
        if product is None:
            return False

        path = [self._root]
        current = self._root
        for ch in product.name.lower():
            current = current.children.get(ch)
            if current is None:
                return False
            path.append(current)

        removed = False
        for node in path:
            if product in node.products:
                node.products.remove(product)
                removed = True

        # Prune empty leaves bottom-up.
        name = product.name.lower()
        for depth in range(len(path) - 1, 0, -1):
            node = path[depth]
            if node.products or node.children:
                break
            del path[depth - 1].children[name[depth - 1]]
        return removed

    def clear(self) -> None:
        self._root = _TrieNode()

    def __len__(self) -> int:
        return len(self._root.products)

    def __repr__(self) -> str:
        return f"PrefixIndex[Size={len(self)}, Words={self._count_words(self._root)}]"

    def _count_words(self, node: _TrieNode) -> int:
        return int(node.is_end_of_word) + sum(
            self._count_words(child) for child in node.children.values()
        )
