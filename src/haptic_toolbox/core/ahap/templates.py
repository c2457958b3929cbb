"""
内置触觉模板
"""

from dataclasses import dataclass, field
from typing import List, Optional

from haptic_toolbox.core.ahap.ahap_models import HapticEvent
from haptic_toolbox.models import HapticEventType


@dataclass(frozen=True)
class HapticTemplate:
    """触觉模板"""
    name: str
    description: str
    events: List[HapticEvent] = field(default_factory=list)

    def instantiate(self) -> List[HapticEvent]:
        """返回带新ID的事件副本"""
        return [
            HapticEvent(time=event.time, type=event.type, intensity=event.intensity, sharpness=event.sharpness)
            for event in self.events
        ]


def _transient(time: float, intensity: float, sharpness: float) -> HapticEvent:
    return HapticEvent(time=time, type=HapticEventType.TRANSIENT.value, intensity=intensity, sharpness=sharpness)


BUILTIN_TEMPLATES: List[HapticTemplate] = [
    HapticTemplate(
        name="Single Tap",
        description="A simple tap sensation",
        events=[_transient(0.0, 0.8, 0.5)],
    ),
    HapticTemplate(
        name="Double Tap",
        description="Two quick taps in succession",
        events=[_transient(0.0, 0.8, 0.5), _transient(0.2, 0.8, 0.5)],
    ),
    HapticTemplate(
        name="Success Feedback",
        description="Positive confirmation sensation",
        events=[_transient(0.0, 0.5, 0.3), _transient(0.1, 0.8, 0.7)],
    ),
    HapticTemplate(
        name="Error Feedback",
        description="Negative feedback sensation",
        events=[_transient(0.0, 0.7, 0.8), _transient(0.15, 0.7, 0.8), _transient(0.3, 0.9, 0.8)],
    ),
    HapticTemplate(
        name="Heartbeat",
        description="Rhythmic heartbeat sensation",
        events=[
            _transient(0.0, 0.7, 0.3),
            _transient(0.15, 0.5, 0.3),
            _transient(0.8, 0.7, 0.3),
            _transient(0.95, 0.5, 0.3),
        ],
    ),
]


def get_template(name: str) -> Optional[HapticTemplate]:
    """根据名称获取内置模板"""
    for template in BUILTIN_TEMPLATES:
        if template.name == name:
            return template
    return None
