"""
AHAP格式支持模块

提供AHAP文档的解析、生成、元数据提取和校验。
"""

from haptic_toolbox.core.ahap.ahap_models import (
    AHAPConstants,
    AHAPError,
    MalformedJSONError,
    EventNotFoundError,
    LibraryIndexError,
    AHAPFetchError,
    HapticEvent,
    Pattern,
    HapticMetadata,
    PatternValidation,
    SkippedEntry,
    ParseResult,
)

from haptic_toolbox.core.ahap.ahap_codec import AHAPCodec
from haptic_toolbox.core.ahap.ahap_validator import AHAPValidator
from haptic_toolbox.core.ahap.metadata_extractor import extract_metadata, compute_duration
from haptic_toolbox.core.ahap.templates import HapticTemplate, BUILTIN_TEMPLATES, get_template

__all__ = [
    # 数据模型
    "AHAPConstants",
    "HapticEvent",
    "Pattern",
    "HapticMetadata",
    "PatternValidation",
    "SkippedEntry",
    "ParseResult",

    # 异常
    "AHAPError",
    "MalformedJSONError",
    "EventNotFoundError",
    "LibraryIndexError",
    "AHAPFetchError",

    # 编解码
    "AHAPCodec",
    "AHAPValidator",
    "extract_metadata",
    "compute_duration",

    # 模板
    "HapticTemplate",
    "BUILTIN_TEMPLATES",
    "get_template",
]
