"""
外部协作者接口定义

下载和播放由外部实现，核心只依赖以下接口。
"""

from abc import ABC, abstractmethod


class IAHAPFetcher(ABC):
    """AHAP内容下载接口"""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """下载AHAP文本

        Args:
            url: 文件地址

        Returns:
            str: 文本内容

        Raises:
            AHAPFetchError: 下载失败
        """
        ...


class IHapticPlayer(ABC):
    """触觉播放接口

    接收生成好的AHAP文本并播放
    """

    @abstractmethod
    async def play(self, content: str) -> bool:
        """播放AHAP文本

        Args:
            content: AHAPCodec.generate 生成的文本

        Returns:
            bool: 播放是否成功
        """
        ...
