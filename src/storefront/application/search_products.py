"""Application service: Search Products use case (query).

A text query wins over a category filter; with neither, the catalog is
listed page by page.
"""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.repository.product_repository import ProductRepository


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        query: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProductDTO]:
        if query:
            products = self._product_repo.search(query)
        elif category:
            products = self._product_repo.find_by_category(category)
        else:
            products = self._product_repo.list_all(limit=limit, offset=offset)
        return [ProductDTO.from_product(p) for p in products]
