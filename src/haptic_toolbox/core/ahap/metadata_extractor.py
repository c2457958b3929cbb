"""
AHAP元数据提取

不构建事件对象，只读取列表展示所需的版本、描述和时长
"""

import logging
from typing import Any, Optional, Union

from haptic_toolbox.core.ahap.ahap_codec import is_number, load_json
from haptic_toolbox.core.ahap.ahap_models import AHAPConstants, HapticMetadata, MalformedJSONError

logger = logging.getLogger(__name__)


def extract_metadata(content: Union[str, bytes]) -> Optional[HapticMetadata]:
    """提取文档元数据

    Args:
        content: AHAP文本

    Returns:
        Optional[HapticMetadata]: 内容为空或不是合法JSON时返回None
    """
    if not content:
        return None

    try:
        document = load_json(content)
    except MalformedJSONError as e:
        logger.debug(f"No metadata available: {e}")
        return None

    if not isinstance(document, dict):
        return HapticMetadata(duration=compute_duration(None))

    version = document.get(AHAPConstants.KEY_VERSION)
    description = document.get(AHAPConstants.KEY_DESCRIPTION)

    return HapticMetadata(
        version=version if isinstance(version, str) else None,
        description=description if isinstance(description, str) else None,
        duration=compute_duration(document.get(AHAPConstants.KEY_PATTERN)),
    )


def compute_duration(raw_pattern: Any) -> float:
    """根据Pattern数组计算时长

    取所有带数值Time的事件的最大时间，加上固定缓冲；没有事件时只返回缓冲
    """
    max_time: Optional[float] = None

    if isinstance(raw_pattern, list):
        for entry in raw_pattern:
            if not isinstance(entry, dict):
                continue
            event = entry.get(AHAPConstants.KEY_EVENT)
            if not isinstance(event, dict):
                continue
            time = event.get(AHAPConstants.KEY_TIME)
            if is_number(time) and (max_time is None or time > max_time):
                max_time = float(time)

    if max_time is None:
        return AHAPConstants.DURATION_BUFFER
    return max_time + AHAPConstants.DURATION_BUFFER
