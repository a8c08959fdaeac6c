from contextlib import ExitStack
from typing import Any, ClassVar

from psygnal import EventedModel, Signal
from psygnal.containers import EventedDict, EventedList
from pydantic import ConfigDict

from request_store.exceptions import ReadOnlyStateError


class BatchedEventedModel(EventedModel):
    """A Pydantic EventedModel whose fields only change through `batch_update`.

    A batch writes several fields while their per-field signals are paused, then
    releases them and emits `changed` once. Listeners on any field therefore always
    read a fully updated model, never a half-written one.

    Evented values stored in fields (EventedList, EventedDict, other evented models)
    are connected to the model, so mutating them in place also emits `changed`.

    Attributes:
        changed: A signal emitted with `snapshot()` after every batch that changed at
                 least one field, and after in-place changes to evented children.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)
    changed: ClassVar[Signal] = Signal(object)

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        for name in self.__class__.model_fields:
            self._connect_child(getattr(self, name))

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__class__.model_fields:
            raise ReadOnlyStateError(name)
        super().__setattr__(name, value)

    def snapshot(self) -> Any:
        """Return the value emitted by `changed`. Subclasses narrow this."""
        return {name: getattr(self, name) for name in self.__class__.model_fields}

    def batch_update(self, **values: Any) -> bool:
        """Write `values` as one observable update.

        Returns:
            True if any field now holds a different object than before.
        """
        unknown = set(values) - set(self.__class__.model_fields)
        if unknown:
            raise AttributeError(f"{type(self).__name__} has no fields {sorted(unknown)}")

        previous = {name: getattr(self, name) for name in values}
        dirty = [name for name, value in values.items() if previous[name] is not value]
        if not dirty:
            return False

        with ExitStack() as stack:
            for name in dirty:
                stack.enter_context(getattr(self.events, name).paused())
            for name in dirty:
                self._disconnect_child(previous[name])
                super().__setattr__(name, values[name])
                self._connect_child(values[name])
        # Field signals have been released by now; the aggregate goes last.
        self.changed.emit(self.snapshot())
        return True

    def _on_child_changed(self, *args: Any) -> None:
        self.changed.emit(self.snapshot())

    def _connect_child(self, child: Any) -> None:
        """If `child` is an evented object, connect its events to our signal."""
        if isinstance(child, EventedList):
            child.events.connect(self._on_child_changed)
            child.events.inserted.connect(self._on_item_inserted)
            child.events.removed.connect(self._on_item_removed)
            for item in child:
                self._connect_child(item)
        elif isinstance(child, EventedDict):
            child.events.connect(self._on_child_changed)
            child.events.added.connect(self._on_item_added)
            for item in child.values():
                self._connect_child(item)
        elif isinstance(child, BatchedEventedModel):
            child.changed.connect(self._on_child_changed)
        elif self._is_evented(child):
            child.events.connect(self._on_child_changed)

    def _disconnect_child(self, child: Any) -> None:
        """If `child` is an evented object, disconnect its events."""
        if isinstance(child, EventedList):
            child.events.disconnect(self._on_child_changed)
            child.events.inserted.disconnect(self._on_item_inserted)
            child.events.removed.disconnect(self._on_item_removed)
            for item in child:
                self._disconnect_child(item)
        elif isinstance(child, EventedDict):
            child.events.disconnect(self._on_child_changed)
            child.events.added.disconnect(self._on_item_added)
            for item in child.values():
                self._disconnect_child(item)
        elif isinstance(child, BatchedEventedModel):
            child.changed.disconnect(self._on_child_changed)
        elif self._is_evented(child):
            child.events.disconnect(self._on_child_changed)

    def _on_item_inserted(self, index: int, value: Any) -> None:
        self._connect_child(value)

    def _on_item_removed(self, index: int, value: Any) -> None:
        self._disconnect_child(value)

    def _on_item_added(self, key: str, value: Any) -> None:
        self._connect_child(value)

    def _is_evented(self, obj: Any) -> bool:
        """Check if an object has a connectable `events` signal group."""
        events = getattr(obj, "events", None)
        return events is not None and callable(getattr(events, "connect", None))
