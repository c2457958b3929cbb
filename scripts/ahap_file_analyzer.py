"""
AHAP文件分析脚本

遍历目录中的 .ahap 文件，使用 AHAPCodec 严格模式解析并输出结果。
用于批量检查AHAP文件的格式、被跳过的条目和参数范围。
"""

import argparse
import sys
from pathlib import Path
from typing import List, Dict, Any

# 添加 src 目录到 Python 路径，以便导入模块
current_dir = Path(__file__).parent
src_dir = current_dir.parent / "src"
sys.path.insert(0, str(src_dir))

from haptic_toolbox.core.ahap import AHAPCodec, MalformedJSONError, ParseResult, extract_metadata


class AHAPFileAnalyzer:
    """AHAP文件分析器"""

    def __init__(self, directory: str = "ahap") -> None:
        """初始化分析器

        Args:
            directory: 包含 .ahap 文件的目录路径
        """
        super().__init__()
        self.directory = Path(directory)
        self.codec = AHAPCodec()
        self.results: List[Dict[str, Any]] = []

    def analyze_all_files(self) -> None:
        """分析所有 .ahap 文件"""
        if not self.directory.exists():
            print(f"错误：目录 {self.directory} 不存在")
            return

        ahap_files = list(self.directory.glob("*.ahap"))

        if not ahap_files:
            print(f"在目录 {self.directory} 中未找到 .ahap 文件")
            return

        print(f"找到 {len(ahap_files)} 个 .ahap 文件")
        print("=" * 80)

        for file_path in sorted(ahap_files):
            self.analyze_single_file(file_path)

        self.print_summary()

    def analyze_single_file(self, file_path: Path) -> None:
        """分析单个 .ahap 文件"""
        print(f"\n📁 分析文件: {file_path.name}")
        print("-" * 60)

        try:
            content = file_path.read_text(encoding='utf-8')
            result: ParseResult = self.codec.parse(content, strict=True)
        except (OSError, UnicodeDecodeError, MalformedJSONError) as e:
            print(f"❌ 读取或解析失败: {e}")
            self.results.append({
                'file_name': file_path.name,
                'success': False,
                'errors': [str(e)],
                'warnings': [],
                'skipped': 0,
            })
            return

        validation = result.validation
        file_result = {
            'file_name': file_path.name,
            'success': validation is not None and validation.is_valid,
            'errors': validation.errors if validation else [],
            'warnings': validation.warnings if validation else [],
            'skipped': result.skipped_count,
        }
        self.results.append(file_result)

        pattern = result.pattern
        metadata = extract_metadata(content)
        print(f"📊 基本信息:")
        print(f"  - 版本: {pattern.version}")
        print(f"  - 项目: {pattern.project}")
        print(f"  - 描述: {pattern.description}")
        print(f"  - 事件数量: {len(pattern.events)}")
        print(f"  - 时长: {metadata.duration if metadata else pattern.duration:.2f} 秒")

        if pattern.events:
            print(f"📋 事件预览:")
            for i, event in enumerate(pattern.events[:5], 1):
                print(f"  [{i}] {event.time:.3f}s {event.type} 强度: {event.intensity} 锐度: {event.sharpness}")
            if len(pattern.events) > 5:
                print(f"  ... 还有 {len(pattern.events) - 5} 个事件")

        if result.skipped:
            print(f"⏭️  跳过的条目 ({result.skipped_count} 个):")
            for entry in result.skipped:
                print(f"  - 条目 {entry.index}: {entry.reason}")

        if file_result['errors']:
            print(f"🚨 错误信息 ({len(file_result['errors'])} 个):")
            for error in file_result['errors']:
                print(f"  - {error}")

        if file_result['warnings']:
            print(f"⚠️  警告信息 ({len(file_result['warnings'])} 个):")
            for warning in file_result['warnings']:
                print(f"  - {warning}")

    def print_summary(self) -> None:
        """打印分析总结"""
        print("\n" + "=" * 80)
        print("📈 分析总结")
        print("=" * 80)

        total_files = len(self.results)
        successful_files = sum(1 for r in self.results if r['success'])
        failed_files = total_files - successful_files

        print(f"总文件数: {total_files}")
        print(f"校验通过: {successful_files}")
        print(f"校验失败: {failed_files}")
        print(f"通过率: {successful_files/total_files*100:.1f}%")
        print(f"跳过条目总数: {sum(r['skipped'] for r in self.results)}")

        if failed_files > 0:
            print(f"\n❌ 校验失败的文件:")
            for result in self.results:
                if not result['success']:
                    print(f"  - {result['file_name']}")


def main():
    """主函数"""
    parser = argparse.ArgumentParser(description="批量分析AHAP文件")
    parser.add_argument("directory", nargs="?", default="ahap", help="包含 .ahap 文件的目录")
    args = parser.parse_args()

    print("🔍 AHAP文件分析器")
    print("=" * 80)

    analyzer = AHAPFileAnalyzer(args.directory)
    analyzer.analyze_all_files()


if __name__ == "__main__":
    main()
