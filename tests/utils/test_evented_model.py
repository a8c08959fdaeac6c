from unittest.mock import Mock

import pytest
from psygnal.containers import EventedDict, EventedList
from request_store.exceptions import ReadOnlyStateError
from request_store.utils.evented_model import BatchedEventedModel


class Counter(BatchedEventedModel):
    total: int = 0
    label: str = ""


class Holder(BatchedEventedModel):
    value: object = None


class TestBatchedEventedModel:
    """Tests for the BatchedEventedModel."""

    def test_direct_assignment_is_rejected(self):
        model = Counter()

        with pytest.raises(ReadOnlyStateError):
            model.total = 1

        assert model.total == 0

    def test_batch_emits_changed_once(self):
        model = Counter()
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        assert model.batch_update(total=1, label="one") is True

        mock_handler.assert_called_once_with({"total": 1, "label": "one"})

    def test_noop_batch_emits_nothing(self):
        model = Counter(total=1, label="one")
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        assert model.batch_update(total=model.total, label=model.label) is False

        mock_handler.assert_not_called()

    def test_field_listeners_run_after_all_fields_are_written(self):
        model = Counter()
        seen = []
        model.events.total.connect(lambda value: seen.append((model.total, model.label)))
        model.events.label.connect(lambda value: seen.append((model.total, model.label)))

        model.batch_update(total=2, label="two")

        assert seen == [(2, "two"), (2, "two")]

    def test_unknown_field_rejected(self):
        model = Counter()

        with pytest.raises(AttributeError, match="no fields"):
            model.batch_update(missing=1)

    def test_evented_list_child_emits_changed(self):
        model = Holder()
        items = EventedList([1, 2])
        model.batch_update(value=items)
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        items.append(3)

        mock_handler.assert_called()

    def test_evented_dict_child_emits_changed(self):
        model = Holder()
        data = EventedDict({"a": 1})
        model.batch_update(value=data)
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        data["b"] = 2

        mock_handler.assert_called()

    def test_nested_model_change_bubbles_up(self):
        inner = Counter()
        model = Holder()
        model.batch_update(value=inner)
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        inner.batch_update(total=5)

        mock_handler.assert_called_once()

    def test_replaced_child_is_disconnected(self):
        old_list = EventedList([1, 2])
        model = Holder()
        model.batch_update(value=old_list)
        model.batch_update(value=None)
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        old_list.append(0)

        mock_handler.assert_not_called()

    def test_model_inserted_into_list_is_connected(self):
        items = EventedList()
        model = Holder()
        model.batch_update(value=items)
        inner = Counter()
        items.append(inner)
        mock_handler = Mock()
        model.changed.connect(mock_handler)

        inner.batch_update(total=1)

        mock_handler.assert_called()
