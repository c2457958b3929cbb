"""
AHAP数据模型

定义AHAP文档解析、生成所需的数据结构、常量和异常类型
"""

import math
import uuid
from dataclasses import dataclass
from typing import Any, Final, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from haptic_toolbox.models import AHAPVersion, HapticEventType


class AHAPConstants:
    """AHAP格式常量定义"""

    # 顶层字段
    KEY_VERSION: Final[str] = "Version"
    KEY_METADATA: Final[str] = "Metadata"
    KEY_PATTERN: Final[str] = "Pattern"
    KEY_DESCRIPTION: Final[str] = "Description"

    # Metadata字段
    KEY_PROJECT: Final[str] = "Project"
    KEY_CREATED: Final[str] = "Created"

    # 事件字段
    KEY_EVENT: Final[str] = "Event"
    KEY_TIME: Final[str] = "Time"
    KEY_EVENT_TYPE: Final[str] = "EventType"
    KEY_EVENT_PARAMETERS: Final[str] = "EventParameters"
    KEY_PARAMETER_ID: Final[str] = "ParameterID"
    KEY_PARAMETER_VALUE: Final[str] = "ParameterValue"

    # 生成时写入的固定版本号
    FORMAT_VERSION: Final[float] = 1.0

    # 时长缓冲（秒），用于覆盖最后一个事件的衰减
    DURATION_BUFFER: Final[float] = 0.5

    # 未提供参数时的默认值
    DEFAULT_PARAMETER_VALUE: Final[float] = 0.0

    # 生成时Metadata的默认值
    DEFAULT_PROJECT: Final[str] = "New Haptic Pattern"
    DEFAULT_DESCRIPTION: Final[str] = ""

    # JSON缩进
    JSON_INDENT: Final[int] = 2

    # 参数约定范围
    PARAMETER_MIN: Final[float] = 0.0
    PARAMETER_MAX: Final[float] = 1.0


class AHAPError(Exception):
    """AHAP处理异常基类"""


class MalformedJSONError(AHAPError, ValueError):
    """文本不是合法JSON"""

    def __init__(self, message: str) -> None:
        super().__init__(f"Malformed AHAP JSON: {message}")
        self.reason = message


class EventNotFoundError(AHAPError, KeyError):
    """按ID编辑事件时找不到目标事件"""

    def __init__(self, event_id: uuid.UUID) -> None:
        super().__init__(f"No haptic event with id {event_id}")
        self.event_id = event_id


class LibraryIndexError(AHAPError, IndexError):
    """库操作传入的索引越界"""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index {index} out of range for library of size {size}")
        self.index = index
        self.size = size


class AHAPFetchError(AHAPError):
    """下载AHAP内容失败"""


class HapticEvent(BaseModel):
    """单个触觉事件

    ID在创建时生成，编辑事件字段不会改变ID
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, description="事件标识")
    time: float = Field(ge=0, description="起始时间（秒）")
    type: str = Field(description="事件类型，如HapticTransient")
    intensity: float = Field(description="强度，约定范围[0, 1]")
    sharpness: float = Field(description="锐度，约定范围[0, 1]")

    @property
    def event_type(self) -> Optional[HapticEventType]:
        """事件类型枚举，未知类型返回None"""
        return HapticEventType.from_tag(self.type)

    @property
    def is_transient(self) -> bool:
        return self.event_type is HapticEventType.TRANSIENT

    def with_changes(self, **changes: Any) -> 'HapticEvent':
        """返回修改了部分字段的新事件，保留原ID"""
        data = self.model_dump()
        data.update(changes)
        data['id'] = self.id
        return HapticEvent.model_validate(data)

    def same_values(self, other: 'HapticEvent', tolerance: float = 1e-9) -> bool:
        """比较两个事件的字段值（不比较ID）"""
        return (
            self.type == other.type
            and math.isclose(self.time, other.time, rel_tol=0.0, abs_tol=tolerance)
            and math.isclose(self.intensity, other.intensity, rel_tol=0.0, abs_tol=tolerance)
            and math.isclose(self.sharpness, other.sharpness, rel_tol=0.0, abs_tol=tolerance)
        )


class Pattern(BaseModel):
    """AHAP图案的结构化表示"""
    version: Optional[AHAPVersion] = Field(default=None, description="源文档的Version字段")
    project: Optional[str] = Field(default=None, description="项目名称")
    created: Optional[str] = Field(default=None, description="创建时间（ISO8601）")
    description: Optional[str] = Field(default=None, description="描述")
    events: List[HapticEvent] = Field(default_factory=list, description="事件列表")

    def sorted_events(self) -> List[HapticEvent]:
        """按时间升序排列的事件，时间相同时保持原顺序"""
        return sorted(self.events, key=lambda event: event.time)

    @property
    def duration(self) -> float:
        """图案时长：最后事件时间加固定缓冲"""
        if not self.events:
            return AHAPConstants.DURATION_BUFFER
        return max(event.time for event in self.events) + AHAPConstants.DURATION_BUFFER

    def find_event(self, event_id: uuid.UUID) -> Optional[HapticEvent]:
        for event in self.events:
            if event.id == event_id:
                return event
        return None


class HapticMetadata(BaseModel):
    """文档摘要元数据"""
    model_config = ConfigDict(frozen=True)

    version: Optional[str] = Field(default=None, description="版本")
    description: Optional[str] = Field(default=None, description="描述")
    duration: Optional[float] = Field(default=None, description="时长（秒）")


class PatternValidation(BaseModel):
    """严格校验结果"""
    is_valid: bool = Field(description="是否有效")
    errors: List[str] = Field(default_factory=list, description="错误列表")
    warnings: List[str] = Field(default_factory=list, description="警告列表")


@dataclass
class SkippedEntry:
    """解析时被跳过的Pattern条目

    用于记录缺少必需字段的条目
    """
    index: int      # 在Pattern数组中的位置
    reason: str     # 跳过原因


class ParseResult(BaseModel):
    """解析结果

    包含解析后的图案、被跳过的条目以及可选的严格校验结果
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    pattern: Pattern = Field(description="解析出的图案")
    skipped: List[SkippedEntry] = Field(default_factory=list, description="被跳过的条目")
    validation: Optional[PatternValidation] = Field(default=None, description="严格校验结果")

    @property
    def events(self) -> List[HapticEvent]:
        return self.pattern.events

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
