"""文件大小解析工具

使用示例:
    from yrbac.utils import parse_file_size

    parse_file_size("10MB")   # 10485760
    parse_file_size("512K")   # 524288
    parse_file_size(1024)     # 1024
"""

from typing import Union


# 按后缀长度降序，保证 "MB" 先于 "B" 匹配
SIZE_UNITS = [
    ("TB", 1024 ** 4),
    ("GB", 1024 ** 3),
    ("MB", 1024 ** 2),
    ("KB", 1024),
    ("T", 1024 ** 4),
    ("G", 1024 ** 3),
    ("M", 1024 ** 2),
    ("K", 1024),
    ("B", 1),
]


def parse_file_size(size_str: Union[str, int, float]) -> int:
    """解析文件大小字符串为字节数

    Raises:
        ValueError: 格式无效
    """
    if isinstance(size_str, (int, float)):
        return int(size_str)

    text = str(size_str).strip().upper()
    if not text:
        raise ValueError("文件大小字符串不能为空")

    for unit, multiplier in SIZE_UNITS:
        if text.endswith(unit):
            number_str = text[: -len(unit)].strip()
            try:
                return int(float(number_str) * multiplier)
            except ValueError:
                raise ValueError(f"无法解析文件大小: {size_str}") from None

    try:
        return int(float(text))
    except ValueError:
        raise ValueError(f"无法解析文件大小: {size_str}") from None
