"""
本地类型定义模块

集中定义AHAP相关的枚举、类型别名和设置字典结构
"""
from enum import Enum
from typing import Dict, List, Optional, TypedDict, Union


class HapticEventType(Enum):
    """
    触觉事件类型枚举

    :ivar TRANSIENT: 瞬时事件（单次脉冲）
    :ivar CONTINUOUS: 持续事件（持续振动）
    """
    TRANSIENT = "HapticTransient"
    CONTINUOUS = "HapticContinuous"

    @classmethod
    def from_tag(cls, tag: str) -> Optional['HapticEventType']:
        """根据AHAP中的EventType字符串获取枚举值，未知类型返回None"""
        for member in cls:
            if member.value == tag:
                return member
        return None


class HapticParameterID(Enum):
    """
    事件参数ID枚举

    生成时参数顺序固定为 强度、锐度
    """
    INTENSITY = "HapticIntensity"
    SHARPNESS = "HapticSharpness"


class LibraryEventType(Enum):
    """库状态变化类型"""
    ADDED = "added"
    REMOVED = "removed"
    SELECTED = "selected"
    UPDATED = "updated"
    CLEARED = "cleared"


# 基础类型定义
EventTime = float
"""事件起始时间（秒），非负"""

ParameterValue = float
"""参数值，约定范围 [0, 1]，解析时不做限制"""

AHAPVersion = Union[str, float, int]
"""AHAP文档中的Version字段原值"""

JSONObject = Dict[str, object]
"""JSON对象"""

JSONArray = List[object]
"""JSON数组"""


class SettingsDict(TypedDict, total=False):
    """
    设置字典结构

    :ivar default_document_name: 未命名文档的默认名称
    :ivar default_project_name: 生成AHAP时Metadata.Project的默认值
    :ivar editor_pattern_name: 编辑器新建图案的默认名称
    :ivar fetch_timeout: 下载AHAP的超时时间（秒）
    :ivar strict_validation: 解析时是否附带严格校验
    :ivar log_level: 日志级别
    :ivar log_file: 日志文件路径，为空则只输出到控制台
    """
    default_document_name: str
    default_project_name: str
    editor_pattern_name: str
    fetch_timeout: float
    strict_validation: bool
    log_level: str
    log_file: str
