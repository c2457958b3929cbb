"""
Haptic Toolbox

AHAP（Apple Haptic and Audio Pattern）文件的解析、校验、生成与编辑。
"""

__version__ = "1.0.0"
