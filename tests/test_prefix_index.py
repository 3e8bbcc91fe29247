import pytest

from search_cache.trie import PrefixIndex
from search_cache.types import Product


@pytest.fixture
def index(catalog):
    idx = PrefixIndex()
    for product in catalog:
        idx.insert(product)
    return idx


def test_search_is_case_insensitive_and_trimmed(index):
    names = [p.name for p in index.search("  AP ")]
    assert names == ["Apple", "Apple Juice", "Apricot"]


def test_search_blank_prefix_returns_empty(index):
    assert index.search("") == []
    assert index.search("   ") == []
    assert index.search(None) == []


def test_search_unknown_prefix_returns_empty(index):
    assert index.search("zucchini") == []
    assert index.has_prefix("zu") is False


def test_search_with_limit(index):
    assert [p.name for p in index.search_with_limit("ap", 2)] == ["Apple", "Apple Juice"]
    assert index.search_with_limit("ap", 0) == []


def test_search_returns_copy(index):
    results = index.search("ban")
    results.clear()
    assert len(index.search("ban")) == 1


def test_remove_product_prunes_nodes(index, catalog):
    banana = catalog[3]

    assert index.remove(banana) is True
    assert index.search("b") == []
    assert index.has_prefix("ban") is False
    assert len(index) == len(catalog) - 1
    assert index.remove(banana) is False


def test_remove_keeps_shared_prefix(index, catalog):
    index.remove(catalog[1])  # Apple Juice

    assert [p.name for p in index.search("apple")] == ["Apple"]


def test_insert_none_raises():
    with pytest.raises(ValueError):
        PrefixIndex().insert(None)


def test_clear_and_all_products(index, catalog):
    assert index.all_products() == catalog

    index.clear()

    assert len(index) == 0
    assert index.all_products() == []


def test_repr_counts_words():
    idx = PrefixIndex()
    idx.insert(Product(product_id="x", name="Kiwi", price=1.0))
    assert repr(idx) == "PrefixIndex[Size=1, Words=1]"


def test_has_prefix_true_for_indexed_name(index):
    assert index.has_prefix("APR") is True
    assert index.has_prefix("apple j") is True


def test_remove_unindexed_same_name_product_is_noop(index, catalog):
    """Test that an equal name with a different id removes nothing"""
    impostor = Product(product_id="p-99", name="Banana", price=9.99)

    assert index.remove(impostor) is False
    assert [p.name for p in index.search("ban")] == ["Banana"]
    assert len(index) == len(catalog)
