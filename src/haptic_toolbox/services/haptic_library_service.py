"""
文档库服务

连接文档库与外部协作者：从网络或文本导入文档，将选中文档交给播放器。
空内容的拦截在这一层完成，核心本身把空内容视为零事件的合法图案。
"""

import logging
from typing import Optional

from haptic_toolbox.core.ahap.ahap_models import AHAPFetchError, MalformedJSONError
from haptic_toolbox.core.haptic_document import HapticDocument
from haptic_toolbox.core.haptic_library import HapticLibrary
from haptic_toolbox.services.haptic_service_interface import IAHAPFetcher, IHapticPlayer
from haptic_toolbox.services.http_ahap_fetcher import document_name_from_url

logger = logging.getLogger(__name__)


class HapticLibraryService:
    """文档库服务"""

    def __init__(self, library: HapticLibrary, fetcher: Optional[IAHAPFetcher] = None,
                 player: Optional[IHapticPlayer] = None) -> None:
        super().__init__()
        self.library = library
        self.fetcher = fetcher
        self.player = player

    async def import_from_url(self, url: str) -> Optional[HapticDocument]:
        """下载并添加到文档库

        Args:
            url: AHAP文件地址

        Returns:
            Optional[HapticDocument]: 添加的文档，下载失败时返回None
        """
        if self.fetcher is None:
            logger.error("No fetcher configured, cannot import from URL")
            return None

        try:
            content = await self.fetcher.fetch(url)
        except AHAPFetchError as e:
            logger.error(f"Failed to import {url}: {e}")
            return None

        return self.library.add_from_text(content, name=document_name_from_url(url))

    def import_from_text(self, content: str, name: Optional[str] = None) -> Optional[HapticDocument]:
        """添加粘贴的文本，空文本不添加"""
        if not content:
            logger.warning("Refusing to import empty AHAP content")
            return None
        return self.library.add_from_text(content, name=name)

    async def play_active(self) -> bool:
        """播放选中的文档

        Returns:
            bool: 是否成功交给播放器并播放
        """
        document = self.library.active_document
        if document is None:
            logger.warning("No document selected for playback")
            return False
        return await self.play_document(document)

    async def play_document(self, document: HapticDocument) -> bool:
        """播放指定文档，内容为空或无法解析时拒绝播放"""
        if self.player is None:
            logger.error("No haptic player configured")
            return False

        if not document.content.strip():
            logger.warning(f"Document '{document.name}' has no AHAP content to play")
            return False

        try:
            content = document.export_content()
        except MalformedJSONError as e:
            logger.error(f"Cannot play '{document.name}': {e}")
            return False

        success = await self.player.play(content)
        if not success:
            logger.error(f"Haptic player failed to play '{document.name}'")
        return success
