"""Tests for ancestor lookup along parent links."""
from dataclasses import dataclass

import pytest

from hinj import AncestorNotFound, find_ancestor, iter_ancestors, is_of_type, set_parent


@dataclass
class Book:
    title: str = "book"


@dataclass
class Chapter:
    number: int = 1


@dataclass
class Page:
    number: int = 1


@pytest.fixture
def chain():
    """root <- mid <- leaf, linked through the parent slot."""
    root = {"name": "root"}
    mid = {"name": "mid"}
    leaf = {"name": "leaf"}
    set_parent(mid, root)
    set_parent(leaf, mid)
    return root, mid, leaf


def named(name):
    return lambda candidate: candidate.get("name") == name


def test_finds_distant_ancestor(chain):
    """A predicate matching only root is found from leaf."""
    root, _, leaf = chain
    assert find_ancestor(leaf, named("root")) is root


def test_finds_nearest_match(chain):
    _, mid, leaf = chain
    assert find_ancestor(leaf, lambda candidate: True) is mid


def test_instance_itself_is_not_a_candidate(chain):
    root, _, _ = chain
    with pytest.raises(AncestorNotFound):
        find_ancestor(root, named("root"))


def test_no_parent_with_do_not_throw_returns_none(chain):
    root, _, _ = chain
    assert find_ancestor(root, lambda candidate: False, do_not_throw=True) is None


def test_no_parent_raises(chain):
    root, _, _ = chain
    with pytest.raises(AncestorNotFound, match="Cannot find ancestor"):
        find_ancestor(root, lambda candidate: False)


def test_deeper_miss_raises_even_with_do_not_throw(chain):
    """do_not_throw only covers a missing direct parent."""
    _, _, leaf = chain
    with pytest.raises(AncestorNotFound):
        find_ancestor(leaf, lambda candidate: False, do_not_throw=True)


def test_not_found_error_is_lookup_error(chain):
    _, _, leaf = chain
    with pytest.raises(LookupError):
        find_ancestor(leaf, named("missing"))


def test_class_as_kind():
    """A class works as the kind, tested with isinstance."""
    book, chapter, page = Book(), Chapter(), Page()
    set_parent(chapter, book)
    set_parent(page, chapter)
    assert find_ancestor(page, Book) is book
    assert find_ancestor(page, Chapter) is chapter


def test_is_of_type():
    assert is_of_type(Book(), Book)
    assert not is_of_type(Page(), Book)
    assert is_of_type(3, lambda candidate: candidate > 2)


def test_iter_ancestors(chain):
    root, mid, leaf = chain
    assert list(iter_ancestors(leaf)) == [mid, root]
    assert list(iter_ancestors(root)) == []


def test_hinge_values_on_ancestors(chain):
    """Stages can locate a containing instance and write to its slots."""
    from hinj import hinge

    total = hinge(0)
    root, _, leaf = chain

    def add_to_root(inst, value, token):
        owner = find_ancestor(inst, named("root"))
        total(owner, total(owner) + value)

    count = hinge().sync(add_to_root)
    count(leaf, 2)
    count(leaf, 3)
    assert total(root) == 5
