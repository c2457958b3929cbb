"""
触觉文档

包装一份AHAP文本及其派生元数据。所有修改都返回新实例，原实例保持不变。
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from haptic_toolbox.core.ahap.ahap_codec import AHAPCodec
from haptic_toolbox.core.ahap.ahap_models import EventNotFoundError, HapticEvent, HapticMetadata, Pattern
from haptic_toolbox.core.ahap.metadata_extractor import extract_metadata

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_NAME = "Untitled"

_codec = AHAPCodec()


class HapticDocument(BaseModel):
    """触觉文档

    content 保存最后一次写入的AHAP文本，metadata 随 content 一起重新计算，
    content 不是合法JSON时 metadata 为None，但 content 原样保留。
    """
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, description="文档标识")
    name: str = Field(description="显示名称")
    content: str = Field(default="", description="AHAP文本")
    loaded_time: datetime = Field(default_factory=datetime.now, description="创建/导入时间")
    metadata: Optional[HapticMetadata] = Field(default=None, description="派生元数据")

    # 最近一次解析结果，保证同一文档上多次编辑时事件ID稳定
    _pattern_cache: Optional[Pattern] = PrivateAttr(default=None)

    @classmethod
    def create(cls, name: Optional[str] = None, content: str = "",
               default_name: str = DEFAULT_DOCUMENT_NAME) -> 'HapticDocument':
        """创建文档

        Args:
            name: 文档名称，为空时使用默认名称
            content: AHAP文本
            default_name: 默认名称

        Returns:
            HapticDocument: 新文档
        """
        document = cls(
            name=name if name and name.strip() else default_name,
            content=content,
            metadata=extract_metadata(content),
        )
        logger.debug(f"Created document '{document.name}' ({document.id})")
        return document

    # ------------------------------------------------------------------
    # 内容与名称
    # ------------------------------------------------------------------

    def update_content(self, new_content: str) -> 'HapticDocument':
        """替换内容并重新计算元数据，ID和加载时间不变"""
        updated = self.model_copy(update={
            'content': new_content,
            'metadata': extract_metadata(new_content),
        })
        updated._pattern_cache = None
        return updated

    def rename(self, new_name: str) -> 'HapticDocument':
        """重命名"""
        return self.model_copy(update={'name': new_name})

    @property
    def is_parseable(self) -> bool:
        """内容是否为合法JSON（空内容视为空图案）"""
        return not self.content.strip() or self.metadata is not None

    # ------------------------------------------------------------------
    # 结构化视图
    # ------------------------------------------------------------------

    def pattern(self) -> Pattern:
        """解析内容为图案（返回副本）

        Raises:
            MalformedJSONError: 内容不是合法JSON
        """
        return self._parsed().model_copy(deep=True)

    def _parsed(self) -> Pattern:
        if self._pattern_cache is None:
            if not self.content.strip():
                self._pattern_cache = Pattern()
            else:
                self._pattern_cache = _codec.parse(self.content).pattern
        return self._pattern_cache

    def events(self) -> List[HapticEvent]:
        """按时间排列的事件，内容非法时返回空列表"""
        if not self.is_parseable:
            return []
        return self._parsed().sorted_events()

    def export_content(self) -> str:
        """重新生成规范化的AHAP文本，用于播放和导出

        Raises:
            MalformedJSONError: 内容不是合法JSON
        """
        return _codec.generate(self._parsed())

    # ------------------------------------------------------------------
    # 事件编辑
    # ------------------------------------------------------------------

    def redescribe(self, description: str) -> 'HapticDocument':
        """修改描述"""
        return self._apply(lambda pattern: pattern.model_copy(update={'description': description}))

    def add_event(self, event: HapticEvent) -> 'HapticDocument':
        """添加事件"""
        return self._apply(lambda pattern: pattern.model_copy(update={'events': [*pattern.events, event]}))

    def update_event(self, event: HapticEvent) -> 'HapticDocument':
        """按ID替换事件

        Raises:
            EventNotFoundError: 找不到对应ID的事件
        """
        def replace(pattern: Pattern) -> Pattern:
            if pattern.find_event(event.id) is None:
                raise EventNotFoundError(event.id)
            return pattern.model_copy(update={
                'events': [event if existing.id == event.id else existing for existing in pattern.events]
            })
        return self._apply(replace)

    def remove_event(self, event_id: uuid.UUID) -> 'HapticDocument':
        """按ID删除事件

        Raises:
            EventNotFoundError: 找不到对应ID的事件
        """
        def remove(pattern: Pattern) -> Pattern:
            if pattern.find_event(event_id) is None:
                raise EventNotFoundError(event_id)
            return pattern.model_copy(update={
                'events': [existing for existing in pattern.events if existing.id != event_id]
            })
        return self._apply(remove)

    def _apply(self, change: Callable[[Pattern], Pattern]) -> 'HapticDocument':
        """修改结构化图案并重新生成文本"""
        changed = change(self._parsed())
        text = _codec.generate(changed)
        updated = self.update_content(text)

        # 生成结果按时间排序，重新解析后与排序后的事件一一对应，沿用原ID
        reparsed = _codec.parse(text).pattern
        ordered = changed.sorted_events()
        if len(reparsed.events) == len(ordered):
            reparsed = reparsed.model_copy(update={
                'events': [
                    parsed.model_copy(update={'id': original.id})
                    for parsed, original in zip(reparsed.events, ordered)
                ]
            })
        updated._pattern_cache = reparsed
        return updated
