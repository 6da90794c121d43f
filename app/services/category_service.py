"""分类查询用例"""
from dataclasses import dataclass, field
from typing import List

from app.exceptions import UsecaseError
from app.models.entities import Category
from app.services.sources.base import CategoryReader


@dataclass(frozen=True)
class CategoriesOutput:
    categories: List[Category] = field(default_factory=list)


class GetCategoriesUsecase:
    """全部分类（只来自 microCMS，不分页）"""

    def __init__(self, repo: CategoryReader):
        self.repo = repo

    async def execute(self) -> CategoriesOutput:
        try:
            categories = await self.repo.get_categories()
        except Exception as e:
            raise UsecaseError(f"failed to get categories: {e}") from e
        return CategoriesOutput(categories=categories)
