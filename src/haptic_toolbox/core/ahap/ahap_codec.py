"""
AHAP编解码器

在AHAP JSON文本与结构化Pattern之间双向转换。
解析是宽松的：单个条目缺少必需字段时跳过该条目，不影响其余条目。
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from haptic_toolbox.core.ahap.ahap_models import (
    AHAPConstants, HapticEvent, MalformedJSONError, ParseResult, Pattern, SkippedEntry
)
from haptic_toolbox.core.ahap.ahap_validator import AHAPValidator
from haptic_toolbox.models import AHAPVersion, HapticParameterID

logger = logging.getLogger(__name__)


def is_number(value: Any) -> bool:
    """JSON数值判断（bool不算数值）"""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def load_json(text: Union[str, bytes]) -> Any:
    """解析JSON文本

    Raises:
        MalformedJSONError: 文本不是合法JSON（包括NaN/Infinity）
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError) as e:
        # JSONDecodeError 和 UnicodeDecodeError 都是 ValueError 的子类，嵌套过深时抛出 RecursionError
        raise MalformedJSONError(str(e)) from e


class AHAPCodec:
    """AHAP编解码器

    Usage:
        codec = AHAPCodec()
        result = codec.parse(text)
        text = codec.generate(result.pattern)
    """

    def __init__(self, default_project: str = AHAPConstants.DEFAULT_PROJECT) -> None:
        """初始化编解码器

        Args:
            default_project: 生成时Pattern未设置project所使用的项目名
        """
        super().__init__()
        self.default_project = default_project
        self._validator = AHAPValidator()

    # ------------------------------------------------------------------
    # 解析
    # ------------------------------------------------------------------

    def parse(self, text: Union[str, bytes], strict: bool = False) -> ParseResult:
        """解析AHAP文本

        Args:
            text: AHAP JSON文本
            strict: 是否附带严格校验结果（不会修改解析出的值）

        Returns:
            ParseResult: 解析结果，事件按时间升序排列

        Raises:
            MalformedJSONError: 文本不是合法JSON
        """
        document = load_json(text)

        if not isinstance(document, dict):
            logger.debug(f"AHAP root is {type(document).__name__}, not an object; treating as empty pattern")
            document = {}

        skipped: List[SkippedEntry] = []
        events: List[HapticEvent] = []

        raw_pattern = document.get(AHAPConstants.KEY_PATTERN)
        if isinstance(raw_pattern, list):
            for index, entry in enumerate(raw_pattern):
                event = self._parse_entry(entry, index, skipped)
                if event is not None:
                    events.append(event)

        if skipped:
            logger.warning(f"Skipped {len(skipped)} of {len(raw_pattern)} pattern entries")

        metadata = document.get(AHAPConstants.KEY_METADATA)
        if not isinstance(metadata, dict):
            metadata = {}

        description = self._optional_string(metadata.get(AHAPConstants.KEY_DESCRIPTION))
        if description is None:
            description = self._optional_string(document.get(AHAPConstants.KEY_DESCRIPTION))

        pattern = Pattern(
            version=self._optional_version(document.get(AHAPConstants.KEY_VERSION)),
            project=self._optional_string(metadata.get(AHAPConstants.KEY_PROJECT)),
            created=self._optional_string(metadata.get(AHAPConstants.KEY_CREATED)),
            description=description,
            events=sorted(events, key=lambda event: event.time),
        )

        result = ParseResult(pattern=pattern, skipped=skipped)
        if strict:
            result.validation = self._validator.validate(pattern)
        return result

    def try_parse(self, text: Union[str, bytes], strict: bool = False) -> Optional[ParseResult]:
        """解析AHAP文本，非法JSON时返回None"""
        try:
            return self.parse(text, strict=strict)
        except MalformedJSONError as e:
            logger.debug(f"try_parse failed: {e}")
            return None

    def parse_events(self, text: Union[str, bytes]) -> List[HapticEvent]:
        """只获取事件列表，用于可视化；内容为空或非法时返回空列表"""
        if not text:
            return []
        result = self.try_parse(text)
        return result.events if result is not None else []

    def _parse_entry(self, entry: Any, index: int, skipped: List[SkippedEntry]) -> Optional[HapticEvent]:
        """解析单个Pattern条目

        Args:
            entry: Pattern数组中的一项
            index: 条目位置
            skipped: 被跳过条目的收集列表

        Returns:
            Optional[HapticEvent]: 条目有效时返回事件，否则返回None
        """
        def skip(reason: str) -> None:
            skipped.append(SkippedEntry(index=index, reason=reason))
            logger.debug(f"Pattern entry {index} skipped: {reason}")

        if not isinstance(entry, dict):
            skip("entry is not an object")
            return None

        event_data = entry.get(AHAPConstants.KEY_EVENT)
        if not isinstance(event_data, dict):
            skip(f"missing '{AHAPConstants.KEY_EVENT}' object")
            return None

        time = event_data.get(AHAPConstants.KEY_TIME)
        if not is_number(time):
            skip(f"missing numeric '{AHAPConstants.KEY_TIME}'")
            return None

        event_type = event_data.get(AHAPConstants.KEY_EVENT_TYPE)
        if not isinstance(event_type, str):
            skip(f"missing string '{AHAPConstants.KEY_EVENT_TYPE}'")
            return None

        intensity: Any = AHAPConstants.DEFAULT_PARAMETER_VALUE
        sharpness: Any = AHAPConstants.DEFAULT_PARAMETER_VALUE

        parameters = event_data.get(AHAPConstants.KEY_EVENT_PARAMETERS)
        if isinstance(parameters, list):
            for parameter in parameters:
                if not isinstance(parameter, dict):
                    continue
                parameter_id = parameter.get(AHAPConstants.KEY_PARAMETER_ID)
                value = parameter.get(AHAPConstants.KEY_PARAMETER_VALUE)
                if not is_number(value):
                    continue
                if parameter_id == HapticParameterID.INTENSITY.value:
                    intensity = value
                elif parameter_id == HapticParameterID.SHARPNESS.value:
                    sharpness = value

        try:
            return HapticEvent(
                time=float(time),
                type=event_type,
                intensity=float(intensity),
                sharpness=float(sharpness),
            )
        except OverflowError as e:
            skip(f"numeric value out of range: {e}")
            return None
        except ValidationError as e:
            skip(f"invalid event values: {e.errors()[0]['msg']}")
            return None

    @staticmethod
    def _optional_string(value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @staticmethod
    def _optional_version(value: Any) -> Optional[AHAPVersion]:
        if isinstance(value, str) or is_number(value):
            return value
        return None

    # ------------------------------------------------------------------
    # 生成
    # ------------------------------------------------------------------

    def generate(self, pattern: Pattern) -> str:
        """将图案生成为规范化的AHAP文本

        事件按时间升序输出，参数顺序固定为强度、锐度。
        对同一图案重复 生成-解析-生成 得到的文本完全一致。

        Args:
            pattern: 要生成的图案

        Returns:
            str: 缩进格式的AHAP JSON文本
        """
        ahap: Dict[str, Any] = {
            AHAPConstants.KEY_VERSION: AHAPConstants.FORMAT_VERSION,
            AHAPConstants.KEY_METADATA: {
                AHAPConstants.KEY_PROJECT: pattern.project if pattern.project is not None else self.default_project,
                AHAPConstants.KEY_CREATED: pattern.created if pattern.created is not None else self._now_iso(),
                AHAPConstants.KEY_DESCRIPTION: (
                    pattern.description if pattern.description is not None else AHAPConstants.DEFAULT_DESCRIPTION
                ),
            },
            AHAPConstants.KEY_PATTERN: [self._serialize_event(event) for event in pattern.sorted_events()],
        }

        text = json.dumps(ahap, indent=AHAPConstants.JSON_INDENT, ensure_ascii=False, allow_nan=False)
        logger.debug(f"Generated AHAP with {len(pattern.events)} events ({len(text)} chars)")
        return text

    def generate_empty(self, project: Optional[str] = None) -> str:
        """生成空白AHAP文本"""
        return self.generate(Pattern(
            project=project if project is not None else self.default_project,
            description=AHAPConstants.DEFAULT_DESCRIPTION,
        ))

    @staticmethod
    def _serialize_event(event: HapticEvent) -> Dict[str, Any]:
        """序列化单个事件"""
        return {
            AHAPConstants.KEY_EVENT: {
                AHAPConstants.KEY_TIME: float(event.time),
                AHAPConstants.KEY_EVENT_TYPE: event.type,
                AHAPConstants.KEY_EVENT_PARAMETERS: [
                    {
                        AHAPConstants.KEY_PARAMETER_ID: HapticParameterID.INTENSITY.value,
                        AHAPConstants.KEY_PARAMETER_VALUE: float(event.intensity),
                    },
                    {
                        AHAPConstants.KEY_PARAMETER_ID: HapticParameterID.SHARPNESS.value,
                        AHAPConstants.KEY_PARAMETER_VALUE: float(event.sharpness),
                    },
                ],
            }
        }

    @staticmethod
    def _now_iso() -> str:
        return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')

    # ------------------------------------------------------------------
    # 格式化
    # ------------------------------------------------------------------

    @staticmethod
    def format_text(text: str) -> str:
        """重新缩进任意JSON文本，非法JSON原样返回"""
        try:
            document = load_json(text)
        except MalformedJSONError:
            return text
        return json.dumps(document, indent=AHAPConstants.JSON_INDENT, ensure_ascii=False)
