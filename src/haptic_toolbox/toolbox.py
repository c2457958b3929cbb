import logging
from typing import Optional

from haptic_toolbox.config import default_load_settings, get_default_settings
from haptic_toolbox.core.ahap.ahap_codec import AHAPCodec
from haptic_toolbox.core.ahap.ahap_models import ParseResult
from haptic_toolbox.core.haptic_library import HapticLibrary
from haptic_toolbox.core.pattern_editor import PatternEditor
from haptic_toolbox.logger_config import setup_logging
from haptic_toolbox.models import SettingsDict
from haptic_toolbox.services.haptic_library_service import HapticLibraryService
from haptic_toolbox.services.haptic_service_interface import IAHAPFetcher, IHapticPlayer
from haptic_toolbox.services.http_ahap_fetcher import HttpAHAPFetcher

logger = logging.getLogger(__name__)


class HapticToolbox:
    """按设置组装编解码器、文档库、编辑器和服务"""

    def __init__(self, settings: Optional[SettingsDict] = None,
                 fetcher: Optional[IAHAPFetcher] = None,
                 player: Optional[IHapticPlayer] = None) -> None:
        """
        初始化 HapticToolbox 实例

        Args:
            settings: 设置字典，为空时使用默认设置
            fetcher: 下载器，为空时使用HTTP下载器
            player: 播放器，为空时不能播放
        """
        super().__init__()
        self.settings: SettingsDict = get_default_settings()
        if settings:
            self.settings.update(settings)

        self.codec: AHAPCodec = AHAPCodec(default_project=self.settings['default_project_name'])
        self.library: HapticLibrary = HapticLibrary(default_document_name=self.settings['default_document_name'])
        self.editor: PatternEditor = PatternEditor(codec=self.codec, default_name=self.settings['editor_pattern_name'])
        self.service: HapticLibraryService = HapticLibraryService(
            self.library,
            fetcher=fetcher or HttpAHAPFetcher(timeout=self.settings['fetch_timeout']),
            player=player,
        )

    @classmethod
    def from_settings_file(cls, path: str, configure_logging: bool = True,
                           fetcher: Optional[IAHAPFetcher] = None,
                           player: Optional[IHapticPlayer] = None) -> 'HapticToolbox':
        """从设置文件创建，文件不存在时写入默认设置"""
        settings = default_load_settings(path)
        if configure_logging:
            setup_logging(settings['log_level'], settings['log_file'] or None)
        logger.info(f"Haptic toolbox configured from {path}")
        return cls(settings, fetcher=fetcher, player=player)

    def parse(self, text: str) -> ParseResult:
        """按设置的校验模式解析AHAP文本"""
        return self.codec.parse(text, strict=self.settings['strict_validation'])
