"""Shared pytest fixtures for haptic toolbox tests."""

import json
from typing import Any, Dict, List

import pytest

from haptic_toolbox.core.ahap import AHAPCodec, HapticEvent
from haptic_toolbox.core.haptic_document import HapticDocument
from haptic_toolbox.core.haptic_library import HapticLibrary


def make_entry(time: Any, event_type: Any = "HapticTransient",
               intensity: Any = 0.5, sharpness: Any = 0.5) -> Dict[str, Any]:
    """Build a raw AHAP pattern entry."""
    return {
        "Event": {
            "Time": time,
            "EventType": event_type,
            "EventParameters": [
                {"ParameterID": "HapticIntensity", "ParameterValue": intensity},
                {"ParameterID": "HapticSharpness", "ParameterValue": sharpness},
            ],
        }
    }


def make_ahap(entries: List[Dict[str, Any]], **top_level: Any) -> str:
    """Build AHAP text from raw entries and extra top-level fields."""
    document: Dict[str, Any] = {"Version": 1.0, "Pattern": entries}
    document.update(top_level)
    return json.dumps(document)


@pytest.fixture
def codec() -> AHAPCodec:
    """Codec with the default project name."""
    return AHAPCodec()


@pytest.fixture
def sample_events() -> List[HapticEvent]:
    """Three events in non-chronological order."""
    return [
        HapticEvent(time=0.4, type="HapticContinuous", intensity=0.3, sharpness=0.9),
        HapticEvent(time=0.0, type="HapticTransient", intensity=1.0, sharpness=0.5),
        HapticEvent(time=0.2, type="HapticTransient", intensity=0.6, sharpness=0.1),
    ]


@pytest.fixture
def sample_ahap() -> str:
    """AHAP text with metadata and two events."""
    return make_ahap(
        [make_entry(0.5, intensity=0.8, sharpness=0.2), make_entry(0.0, intensity=1.0, sharpness=0.4)],
        Metadata={"Project": "Demo", "Created": "2024-01-01T00:00:00Z", "Description": "two taps"},
    )


@pytest.fixture
def documents() -> List[HapticDocument]:
    """Documents named A, B and C."""
    return [HapticDocument.create(name=name) for name in ("A", "B", "C")]


@pytest.fixture
def library(documents: List[HapticDocument]) -> HapticLibrary:
    """Library holding A, B and C with C selected."""
    lib = HapticLibrary()
    for document in documents:
        lib.add(document)
    return lib


@pytest.fixture
def deeply_nested_json() -> str:
    """Valid-looking JSON nested beyond the parser's recursion limit."""
    return "[" * 100000 + "]" * 100000
