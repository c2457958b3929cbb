"""
服务模块

外部协作者接口及其实现。
"""

from .haptic_service_interface import IAHAPFetcher, IHapticPlayer
from .http_ahap_fetcher import HttpAHAPFetcher, document_name_from_url
from .haptic_library_service import HapticLibraryService

__all__ = [
    'IAHAPFetcher',
    'IHapticPlayer',
    'HttpAHAPFetcher',
    'document_name_from_url',
    'HapticLibraryService',
]
