import logging
import os
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from haptic_toolbox.core.ahap.ahap_models import AHAPConstants
from haptic_toolbox.core.haptic_document import DEFAULT_DOCUMENT_NAME
from haptic_toolbox.core.pattern_editor import PatternEditorDefaults
from haptic_toolbox.models import SettingsDict

logger = logging.getLogger(__name__)

SETTINGS_FILE = 'settings.yml'


def get_default_settings() -> SettingsDict:
    """获取默认设置"""
    return {
        # 文档设置
        'default_document_name': DEFAULT_DOCUMENT_NAME,
        'default_project_name': AHAPConstants.DEFAULT_PROJECT,
        'editor_pattern_name': PatternEditorDefaults.PATTERN_NAME,

        # 网络设置
        'fetch_timeout': 30.0,

        # 解析设置
        'strict_validation': False,

        # 日志设置
        'log_level': "INFO",
        'log_file': "",
    }


yaml: YAML = YAML()
# 禁用YAML引用以提高可读性
yaml.representer.ignore_aliases = lambda *args: True  # type: ignore


def default_load_settings(path: str = SETTINGS_FILE) -> SettingsDict:
    """加载设置，如果不存在则创建默认设置，缺失的键用默认值补全"""
    if not os.path.exists(path):
        settings = get_default_settings()
        save_settings(settings, path)
        logger.info(f"Created default {path}")
        return settings

    loaded_settings = load_settings(path)
    if loaded_settings is None:
        settings = get_default_settings()
        save_settings(settings, path)
        logger.info(f"Recreated corrupted {path}")
        return settings

    settings = get_default_settings()
    settings.update(loaded_settings)  # type: ignore[typeddict-item]
    return settings


# Load the configuration from a YAML file
def load_settings(path: str = SETTINGS_FILE) -> Optional[SettingsDict]:
    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            logger.info(f"{path} found")
            try:
                data: Any = yaml.load(f)  # type: ignore
            except YAMLError as e:
                logger.warning(f"{path} is not valid YAML: {e}")
                return None
            if isinstance(data, dict):
                return dict(data)  # type: ignore[return-value]
            else:
                logger.warning(f"{path} does not contain a valid dictionary")
                return None
    logger.info(f"No {path} found")
    return None


# Save the configuration to a YAML file
def save_settings(settings: SettingsDict, path: str = SETTINGS_FILE) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(dict(settings), f)  # type: ignore
        logger.info(f"{path} saved")
