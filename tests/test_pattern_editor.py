"""Tests for PatternEditor."""

import json

import pytest

from haptic_toolbox.core.ahap import AHAPCodec, HapticEvent, get_template
from haptic_toolbox.core.haptic_library import HapticLibrary
from haptic_toolbox.core.pattern_editor import PatternEditor


class TestPatternEditor:
    """Tests for the timeline editor."""

    def test_first_event_at_zero(self) -> None:
        """The first new event starts at 0 with default parameters."""
        editor = PatternEditor()
        event = editor.add_new_event()
        assert event.time == 0.0
        assert event.is_transient
        assert (event.intensity, event.sharpness) == (0.6, 0.5)
        assert editor.selected_index == 0

    def test_next_event_spaced_after_latest(self) -> None:
        """New events go 0.2s after the latest event."""
        editor = PatternEditor()
        editor.add_event(HapticEvent(time=1.0, type="HapticContinuous", intensity=0.1, sharpness=0.1))
        editor.add_event(HapticEvent(time=0.5, type="HapticTransient", intensity=0.1, sharpness=0.1))
        event = editor.add_new_event()
        assert event.time == pytest.approx(1.2)
        assert editor.selected_event is event

    def test_update_keeps_slot_id(self) -> None:
        """Replacing an event keeps the original id."""
        editor = PatternEditor()
        original = editor.add_new_event()
        replacement = HapticEvent(time=0.3, type="HapticTransient", intensity=0.9, sharpness=0.9)
        updated = editor.update_event(0, replacement)
        assert updated.id == original.id
        assert editor.events[0].intensity == 0.9

    def test_remove_clears_selection(self) -> None:
        """Removing an event deselects."""
        editor = PatternEditor()
        editor.add_new_event()
        editor.add_new_event()
        editor.remove_event(0)
        assert len(editor.events) == 1
        assert editor.selected_index is None

    def test_invalid_index(self) -> None:
        """Out-of-range indices raise IndexError."""
        editor = PatternEditor()
        with pytest.raises(IndexError):
            editor.update_event(0, HapticEvent(time=0.0, type="HapticTransient", intensity=0.5, sharpness=0.5))
        with pytest.raises(IndexError):
            editor.select(1)

    def test_events_property_is_copy(self) -> None:
        """The events list cannot be mutated from outside."""
        editor = PatternEditor()
        editor.add_new_event()
        editor.events.clear()
        assert len(editor.events) == 1

    def test_load_template(self) -> None:
        """Loading a template copies its name, description and events."""
        editor = PatternEditor()
        editor.load_template(get_template("Heartbeat"))
        assert editor.name == "Heartbeat"
        assert len(editor.events) == 4
        assert editor.selected_index is None

    def test_to_ahap_uses_name_as_project(self) -> None:
        """Generated AHAP carries the pattern name and description."""
        editor = PatternEditor(codec=AHAPCodec())
        editor.name = "Buzz"
        editor.description = "short"
        editor.add_new_event()
        metadata = json.loads(editor.to_ahap())["Metadata"]
        assert metadata["Project"] == "Buzz"
        assert metadata["Description"] == "short"

    def test_cannot_save_without_events_or_name(self) -> None:
        """Saving requires events and a non-blank name."""
        editor = PatternEditor()
        assert not editor.can_save()
        editor.add_new_event()
        editor.name = "  "
        assert not editor.can_save()
        with pytest.raises(ValueError):
            editor.save_to(HapticLibrary())

    def test_save_to_library_and_reset(self) -> None:
        """Saving adds a selected document and resets the editor."""
        library = HapticLibrary()
        editor = PatternEditor(default_name="Draft")
        editor.load_template(get_template("Double Tap"))
        document = editor.save_to(library)

        assert library.active_document is document
        assert document.name == "Double Tap"
        assert len(document.events()) == 2
        assert editor.name == "Draft"
        assert editor.events == []
