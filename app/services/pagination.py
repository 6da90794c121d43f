"""分页策略：limit 钳制、page/offset 换算、总页数计算（纯函数）"""
from typing import Optional, Tuple

from app.models.entities import Pagination

# 通用文章列表 / 分类文章列表 / Zenn 列表
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# 热门 / 最新（固定 Top-N，不带分页）
TOP_DEFAULT_LIMIT = 5
TOP_MAX_LIMIT = 20


def validate_limit(limit: Optional[int], default_limit: int, max_limit: int) -> int:
    """
    钳制 limit

    Args:
        limit: 请求的 limit，None 或 <= 0 时使用默认值
        default_limit: 默认值
        max_limit: 上限

    Returns:
        钳制后的 limit
    """
    if limit is None or limit <= 0:
        return default_limit
    if limit > max_limit:
        return max_limit
    return limit


def validate_page(page: Optional[int]) -> int:
    """page 为 None 或小于 1 时返回 1"""
    if page is None or page < 1:
        return 1
    return page


def convert_page_to_offset(page: int, limit: int) -> int:
    """1 起始页码转换为 0 起始偏移量"""
    return (validate_page(page) - 1) * limit


def calculate_total_pages(total: int, limit: int) -> int:
    """total 或 limit 不为正时返回 0，否则向上取整"""
    if limit <= 0 or total <= 0:
        return 0
    return (total + limit - 1) // limit


def build_pagination(
    page: Optional[int],
    limit: Optional[int],
    default_limit: int,
    max_limit: int,
    total: int,
) -> Tuple[int, int, Pagination]:
    """
    校验分页参数并生成分页信息

    Args:
        page: 请求页码（1 起始）
        limit: 请求每页条数
        default_limit: 默认每页条数
        max_limit: 每页条数上限
        total: 上游返回的总条数

    Returns:
        (钳制后的 limit, offset, 分页信息)
    """
    validated_page = validate_page(page)
    validated_limit = validate_limit(limit, default_limit, max_limit)
    offset = convert_page_to_offset(validated_page, validated_limit)
    pagination = Pagination(
        total=total,
        page=validated_page,
        limit=validated_limit,
        total_pages=calculate_total_pages(total, validated_limit),
    )
    return validated_limit, offset, pagination
