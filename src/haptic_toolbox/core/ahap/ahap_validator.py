"""
AHAP严格校验

默认解析不做范围检查，需要时由调用方显式执行校验。
"""

import logging
from typing import List

from haptic_toolbox.core.ahap.ahap_models import AHAPConstants, HapticEvent, Pattern, PatternValidation

logger = logging.getLogger(__name__)


class AHAPValidator:
    """图案校验器

    检查参数范围和事件类型，不修改图案本身
    """

    def validate(self, pattern: Pattern) -> PatternValidation:
        """校验图案

        Args:
            pattern: 要校验的图案

        Returns:
            PatternValidation: 校验结果
        """
        validation = PatternValidation(is_valid=True)

        if not pattern.events:
            validation.warnings.append("图案中没有事件")

        for position, event in enumerate(pattern.sorted_events()):
            validation.errors.extend(self._validate_event(event, position))

        seen_times: List[float] = []
        for event in pattern.events:
            if event.time in seen_times:
                validation.warnings.append(f"存在多个时间为{event.time}秒的事件")
            else:
                seen_times.append(event.time)

        validation.is_valid = not validation.errors
        if validation.errors:
            logger.info(f"Pattern failed strict validation with {len(validation.errors)} errors")
        return validation

    def _validate_event(self, event: HapticEvent, position: int) -> List[str]:
        """校验单个事件"""
        errors: List[str] = []

        if event.event_type is None:
            errors.append(f"事件{position + 1}: 未知的事件类型'{event.type}'")

        if not (AHAPConstants.PARAMETER_MIN <= event.intensity <= AHAPConstants.PARAMETER_MAX):
            errors.append(
                f"事件{position + 1}: 强度{event.intensity}超出范围"
                f"[{AHAPConstants.PARAMETER_MIN}-{AHAPConstants.PARAMETER_MAX}]"
            )

        if not (AHAPConstants.PARAMETER_MIN <= event.sharpness <= AHAPConstants.PARAMETER_MAX):
            errors.append(
                f"事件{position + 1}: 锐度{event.sharpness}超出范围"
                f"[{AHAPConstants.PARAMETER_MIN}-{AHAPConstants.PARAMETER_MAX}]"
            )

        return errors
