# tests/test_properties.py
"""
Tests for the extension property bag and JSON structural equality.
"""
from __future__ import annotations

import threading

import pytest

from chargingcloud.api.core.errors import ConflictError, NotFoundError, ValidationError
from chargingcloud.api.core.properties import PropertyBag, json_equal, validate_json


class TestJsonEqual:
    def test_scalars(self):
        assert json_equal("a", "a")
        assert json_equal(1, 1.0)
        assert json_equal(None, None)
        assert not json_equal("1", 1)

    def test_bool_is_not_a_number(self):
        assert not json_equal(True, 1)
        assert not json_equal(0, False)

    def test_objects_ignore_key_order(self):
        assert json_equal({"a": "b", "c": [1, 2]}, {"c": [1, 2], "a": "b"})
        assert not json_equal({"a": "b"}, {"a": "b", "c": None})

    def test_arrays_are_ordered(self):
        assert json_equal([1, [2, 3]], [1, [2, 3]])
        assert not json_equal([1, 2], [2, 1])

    def test_empty_string_is_not_null(self):
        assert not json_equal("", None)

    def test_rejects_non_json(self):
        with pytest.raises(ValidationError):
            validate_json({"a": object()})
        with pytest.raises(ValidationError):
            validate_json(float("nan"))
        with pytest.raises(ValidationError):
            validate_json({1: "a"})


class TestPropertyBag:
    def test_get_unset_raises_not_found(self):
        bag = PropertyBag()
        with pytest.raises(NotFoundError) as exc:
            bag.get("UndefinedProperty")
        assert exc.value.description == "Unknown property 'UndefinedProperty'!"

    def test_creation_sentinel(self):
        bag = PropertyBag()
        update = bag.set("p", "", "Test123!")
        assert update.created
        assert update.to_dict() == {"oldValue": "", "newValue": "Test123!"}
        assert bag.get("p") == "Test123!"

    def test_repeated_creation_conflicts(self):
        bag = PropertyBag()
        bag.set("p", "", "Test123!")
        with pytest.raises(ConflictError):
            bag.set("p", "", "Noch ein Test!")
        assert bag.get("p") == "Test123!"

    def test_update_with_matching_old_value(self):
        bag = PropertyBag()
        bag.set("p", "", "Test123!")
        update = bag.set("p", "Test123!", {"nested": [1, 2]})
        assert not update.created
        assert bag.get("p") == {"nested": [1, 2]}

    def test_unset_property_with_non_sentinel_conflicts(self):
        bag = PropertyBag()
        with pytest.raises(ConflictError):
            bag.set("p", "something", 1)
        assert "p" not in bag

    def test_structural_match_regardless_of_key_order(self):
        bag = PropertyBag()
        bag.set("p", "", {"a": "b", "c": "d"})
        bag.set("p", {"c": "d", "a": "b"}, "next")
        assert bag.get("p") == "next"

    def test_mismatch_leaves_value_untouched(self):
        bag = PropertyBag()
        bag.set("p", "", {"a": "b"})
        with pytest.raises(ConflictError) as exc:
            bag.set("p", {"a": "c"}, "x")
        assert bag.get("p") == {"a": "b"}
        # the stored value is not disclosed
        assert "b" not in exc.value.description

    def test_stored_values_are_detached(self):
        bag = PropertyBag()
        value = {"list": [1]}
        bag.set("p", "", value)
        value["list"].append(2)
        bag.get("p")["list"].append(3)
        assert bag.get("p") == {"list": [1]}

    def test_concurrent_writes_against_stale_value_have_one_winner(self):
        bag = PropertyBag()
        bag.set("counter", "", 0)
        barrier = threading.Barrier(8)
        results: list[tuple[str, int]] = []
        lock = threading.Lock()

        def worker(n: int) -> None:
            barrier.wait()
            try:
                bag.set("counter", 0, n)
                outcome = "ok"
            except ConflictError:
                outcome = "conflict"
            with lock:
                results.append((outcome, n))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 9)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [n for outcome, n in results if outcome == "ok"]
        assert len(winners) == 1
        assert len(results) == 8
        assert bag.get("counter") == winners[0]

    def test_names_in_creation_order(self):
        bag = PropertyBag()
        bag.set("b", "", 1)
        bag.set("a", "", 2)
        assert list(bag) == ["b", "a"]
        assert len(bag) == 2
