# tests/conftest.py
import pytest

from arraymap import IndexedSequence, Undefined


@pytest.fixture
def records():
    """The three records used throughout the scenario tests."""
    return [
        {"id": 1, "v": "a"},
        {"id": 2, "v": "b"},
        {"id": 3, "v": "c"},
    ]


@pytest.fixture
def seq(records):
    """A copy-on-write sequence over ``records`` keyed by ``id``."""
    return IndexedSequence.create(records, "id", copy_on_write=True)


@pytest.fixture
def shared_seq(records):
    """A sequence that mutates its backing storage in place."""
    return IndexedSequence.create(records, "id", copy_on_write=False)


@pytest.fixture
def check_consistent():
    """Assert every indexed record sits where the index says it does."""

    def _check(s: IndexedSequence) -> None:
        index = s.index
        indexed = 0
        for position, record in enumerate(s.to_list()):
            id_ = s.identity_of(record)
            if id_ is Undefined:
                continue
            assert index[id_] == position
            assert s.get_position(id_) == position
            indexed += 1
        assert len(index) == indexed

    return _check
