"""
图案编辑器

时间轴草稿：逐个添加、修改、删除事件，完成后生成AHAP文本保存到文档库
"""

import logging
from typing import List, Optional

from haptic_toolbox.core.ahap.ahap_codec import AHAPCodec
from haptic_toolbox.core.ahap.ahap_models import HapticEvent, Pattern
from haptic_toolbox.core.ahap.templates import HapticTemplate
from haptic_toolbox.core.haptic_document import HapticDocument
from haptic_toolbox.core.haptic_library import HapticLibrary
from haptic_toolbox.models import HapticEventType

logger = logging.getLogger(__name__)


class PatternEditorDefaults:
    """新事件的默认参数"""
    PATTERN_NAME = "New Pattern"
    EVENT_SPACING = 0.2      # 新事件相对最后事件的间隔（秒）
    EVENT_INTENSITY = 0.6
    EVENT_SHARPNESS = 0.5


class PatternEditor:
    """图案编辑器

    Usage:
        editor = PatternEditor()
        editor.add_new_event()
        editor.save_to(library)
    """

    def __init__(self, codec: Optional[AHAPCodec] = None,
                 default_name: str = PatternEditorDefaults.PATTERN_NAME) -> None:
        super().__init__()
        self._codec = codec or AHAPCodec()
        self.default_name = default_name
        self.name: str = default_name
        self.description: str = ""
        self._events: List[HapticEvent] = []
        self.selected_index: Optional[int] = None

    @property
    def events(self) -> List[HapticEvent]:
        """事件列表（只读副本，按添加顺序）"""
        return self._events.copy()

    @property
    def selected_event(self) -> Optional[HapticEvent]:
        if self.selected_index is None:
            return None
        return self._events[self.selected_index]

    def add_new_event(self) -> HapticEvent:
        """在最后一个事件之后添加默认瞬时事件并选中"""
        time = 0.0
        if self._events:
            time = max(event.time for event in self._events) + PatternEditorDefaults.EVENT_SPACING

        event = HapticEvent(
            time=time,
            type=HapticEventType.TRANSIENT.value,
            intensity=PatternEditorDefaults.EVENT_INTENSITY,
            sharpness=PatternEditorDefaults.EVENT_SHARPNESS,
        )
        self._events.append(event)
        self.selected_index = len(self._events) - 1
        return event

    def add_event(self, event: HapticEvent) -> None:
        self._events.append(event)
        self.selected_index = len(self._events) - 1

    def update_event(self, index: int, event: HapticEvent) -> HapticEvent:
        """替换指定位置的事件，沿用该位置原有的ID

        Raises:
            IndexError: 索引越界
        """
        self._check_index(index)
        updated = event if event.id == self._events[index].id else event.model_copy(update={'id': self._events[index].id})
        self._events[index] = updated
        return updated

    def remove_event(self, index: int) -> HapticEvent:
        """删除指定位置的事件并清除选中

        Raises:
            IndexError: 索引越界
        """
        self._check_index(index)
        removed = self._events.pop(index)
        self.selected_index = None
        return removed

    def select(self, index: Optional[int]) -> None:
        if index is not None:
            self._check_index(index)
        self.selected_index = index

    def load_template(self, template: HapticTemplate) -> None:
        """载入模板的名称、描述和事件"""
        self.name = template.name
        self.description = template.description
        self._events = template.instantiate()
        self.selected_index = None
        logger.debug(f"Loaded template '{template.name}' with {len(self._events)} events")

    def to_pattern(self) -> Pattern:
        return Pattern(project=self.name, description=self.description, events=list(self._events))

    def to_ahap(self) -> str:
        """生成AHAP文本"""
        return self._codec.generate(self.to_pattern())

    def can_save(self) -> bool:
        """有事件且名称不为空时才能保存"""
        return bool(self._events) and bool(self.name.strip())

    def save_to(self, library: HapticLibrary) -> HapticDocument:
        """生成文档添加到文档库，然后重置编辑器

        Raises:
            ValueError: 没有事件或名称为空
        """
        if not self.can_save():
            raise ValueError("Pattern needs at least one event and a name before saving")

        document = library.add_from_text(self.to_ahap(), name=self.name)
        logger.info(f"Saved pattern '{document.name}' with {len(self._events)} events")
        self.reset()
        return document

    def reset(self) -> None:
        self.name = self.default_name
        self.description = ""
        self._events = []
        self.selected_index = None

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._events):
            raise IndexError(f"Event index {index} out of range for {len(self._events)} events")
