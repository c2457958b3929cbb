"""Tests for HapticLibrary state transitions."""

import threading
from typing import List

import pytest

from haptic_toolbox.core.ahap import LibraryIndexError
from haptic_toolbox.core.haptic_document import HapticDocument
from haptic_toolbox.core.haptic_library import HapticLibrary, LibraryState
from haptic_toolbox.models import LibraryEventType


def names(library: HapticLibrary) -> List[str]:
    return [document.name for document in library.documents]


class TestAddAndSelect:
    """Tests for add and select."""

    def test_new_library_is_empty(self) -> None:
        """A fresh library has no documents and no selection."""
        library = HapticLibrary()
        assert len(library) == 0
        assert library.active_index is None
        assert library.active_document is None

    def test_add_selects_new(self, library: HapticLibrary) -> None:
        """Adding always selects the appended document."""
        library.select(0)
        index = library.add(HapticDocument.create(name="D"))
        assert index == 3
        assert library.active_index == 3
        assert library.active_document.name == "D"

    def test_add_from_text_uses_default_name(self) -> None:
        """Nameless documents get the library's default name."""
        library = HapticLibrary(default_document_name="Imported")
        document = library.add_from_text("{}")
        assert document.name == "Imported"
        assert library.active_document is document

    def test_select(self, library: HapticLibrary) -> None:
        """select changes only the active index."""
        selected = library.select(1)
        assert selected.name == "B"
        assert library.active_index == 1
        assert names(library) == ["A", "B", "C"]

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_select_out_of_range(self, library: HapticLibrary, index: int) -> None:
        """Out-of-range indices raise and leave state untouched."""
        with pytest.raises(LibraryIndexError):
            library.select(index)
        assert library.active_index == 2

    def test_get_and_index_of(self, library: HapticLibrary, documents: List[HapticDocument]) -> None:
        """Documents can be looked up by index and id."""
        assert library.get(0) is documents[0]
        assert library.index_of(documents[2].id) == 2
        assert library.index_of(HapticDocument.create().id) is None


class TestRemove:
    """Tests for remove index arithmetic."""

    def test_remove_before_active_keeps_pointing_at_same(self, library: HapticLibrary) -> None:
        """Removing A while C is active keeps C active."""
        library.remove(0)
        assert names(library) == ["B", "C"]
        assert library.active_index == 1
        assert library.active_document.name == "C"

    def test_remove_active_selects_next(self, library: HapticLibrary) -> None:
        """Removing the active middle document selects the one now at that index."""
        library.select(1)
        library.remove(1)
        assert names(library) == ["A", "C"]
        assert library.active_index == 1

    def test_remove_active_last_clamps(self, library: HapticLibrary) -> None:
        """Removing the active last document selects the new last."""
        library.remove(2)
        assert names(library) == ["A", "B"]
        assert library.active_index == 1

    def test_remove_after_active(self, library: HapticLibrary) -> None:
        """Removing a document after the active one leaves the index alone."""
        library.select(0)
        library.remove(2)
        assert library.active_index == 0

    def test_remove_only_document(self) -> None:
        """Removing the last remaining document clears the selection."""
        library = HapticLibrary()
        library.add(HapticDocument.create(name="solo"))
        removed = library.remove(0)
        assert removed.name == "solo"
        assert len(library) == 0
        assert library.active_index is None

    def test_remove_out_of_range(self, library: HapticLibrary) -> None:
        """Invalid indices raise without mutation."""
        with pytest.raises(LibraryIndexError) as exc_info:
            library.remove(5)
        assert exc_info.value.size == 3
        assert names(library) == ["A", "B", "C"]

    def test_clear_all(self, library: HapticLibrary) -> None:
        """clear_all empties the library."""
        library.clear_all()
        assert library.documents == ()
        assert library.active_index is None


class TestUpdates:
    """Tests for in-place document replacement."""

    def test_update_active_content(self, library: HapticLibrary, sample_ahap: str) -> None:
        """The active document's content is replaced, identity kept."""
        before = library.active_document
        updated = library.update_active_content(sample_ahap)
        assert updated.id == before.id
        assert library.active_document.content == sample_ahap
        assert before.content == ""

    def test_update_active_content_without_selection(self) -> None:
        """Nothing happens when no document is active."""
        assert HapticLibrary().update_active_content("{}") is None

    def test_rename(self, library: HapticLibrary) -> None:
        """rename replaces the document at the index."""
        library.rename(0, "Alpha")
        assert names(library) == ["Alpha", "B", "C"]


class TestObservation:
    """Tests for state subscriptions."""

    def test_subscriber_receives_current_state(self, library: HapticLibrary) -> None:
        """Subscribing replays the latest state."""
        states: List[LibraryState] = []
        library.subscribe(states.append)
        assert len(states) == 1
        assert states[0].active_index == 2
        assert len(states[0].documents) == 3

    def test_each_mutation_publishes_snapshot(self, library: HapticLibrary) -> None:
        """Every transition emits a state tagged with its kind."""
        states: List[LibraryState] = []
        subscription = library.subscribe(states.append)
        library.select(0)
        library.remove(0)
        library.clear_all()
        subscription.dispose()
        library.add(HapticDocument.create())

        events = [state.last_event for state in states[1:]]
        assert events == [LibraryEventType.SELECTED, LibraryEventType.REMOVED, LibraryEventType.CLEARED]
        assert states[-1].documents == ()
        assert states[-1].active_document is None

    def test_failed_mutation_publishes_nothing(self, library: HapticLibrary) -> None:
        """An index error does not emit a state."""
        states: List[LibraryState] = []
        library.subscribe(states.append)
        with pytest.raises(LibraryIndexError):
            library.select(10)
        assert len(states) == 1

    def test_snapshot_is_immutable(self, library: HapticLibrary) -> None:
        """The state snapshot does not change with later mutations."""
        snapshot = library.state
        library.clear_all()
        assert len(snapshot.documents) == 3
        assert snapshot.active_document.name == "C"


class TestConcurrencyAndObserverErrors:
    """Tests for thread safety and misbehaving subscribers."""

    def test_concurrent_adds_publish_consistent_states(self) -> None:
        """Adds from many threads all land and every state selects its last document."""
        library = HapticLibrary()
        states: List[LibraryState] = []
        library.subscribe(states.append)
        thread_count = 16
        per_thread = 25
        start = threading.Barrier(thread_count)

        def worker(worker_id: int) -> None:
            start.wait()
            for n in range(per_thread):
                library.add(HapticDocument.create(name=f"{worker_id}-{n}"))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        total = thread_count * per_thread
        assert len(library) == total
        assert library.active_index == total - 1
        assert len({document.id for document in library.documents}) == total
        added = [state for state in states if state.last_event is LibraryEventType.ADDED]
        assert len(added) == total
        for state in added:
            assert state.active_index == len(state.documents) - 1

    def test_raising_subscriber_does_not_fail_mutation(self, library: HapticLibrary) -> None:
        """A subscriber error is logged, the mutation succeeds and other subscribers still run."""
        def explode(state: LibraryState) -> None:
            if state.last_event is not None:
                raise RuntimeError("subscriber failed")

        states: List[LibraryState] = []
        library.subscribe(explode)
        library.subscribe(states.append)

        index = library.add(HapticDocument.create(name="D"))

        assert index == 3
        assert library.active_document.name == "D"
        assert states[-1].last_event is LibraryEventType.ADDED

    def test_raising_observer_via_observe(self, library: HapticLibrary) -> None:
        """Errors from observers attached with observe() do not escape mutations."""
        armed = False

        def explode(state: LibraryState) -> None:
            if armed:
                raise RuntimeError("observer failed")

        library.observe().subscribe(on_next=explode)
        armed = True

        removed = library.remove(0)

        assert removed.name == "A"
        assert names(library) == ["B", "C"]
        assert library.active_index == 1
