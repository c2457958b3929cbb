"""
触觉工具箱核心模块

AHAP编解码、文档模型、文档库与图案编辑器。
"""

# AHAP 格式
from .ahap import (
    AHAPCodec,
    AHAPConstants,
    AHAPError,
    AHAPFetchError,
    AHAPValidator,
    EventNotFoundError,
    HapticEvent,
    HapticMetadata,
    LibraryIndexError,
    MalformedJSONError,
    ParseResult,
    Pattern,
    PatternValidation,
    SkippedEntry,
    extract_metadata,
)
# 文档
from .haptic_document import HapticDocument
# 文档库
from .haptic_library import HapticLibrary, LibraryState
# 编辑器
from .pattern_editor import PatternEditor

__all__ = [
    # AHAP
    'AHAPCodec',
    'AHAPConstants',
    'AHAPValidator',
    'HapticEvent',
    'HapticMetadata',
    'Pattern',
    'PatternValidation',
    'ParseResult',
    'SkippedEntry',
    'extract_metadata',

    # 异常
    'AHAPError',
    'AHAPFetchError',
    'EventNotFoundError',
    'LibraryIndexError',
    'MalformedJSONError',

    # 文档
    'HapticDocument',

    # 文档库
    'HapticLibrary',
    'LibraryState',

    # 编辑器
    'PatternEditor',
]
