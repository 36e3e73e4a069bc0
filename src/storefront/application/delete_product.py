"""Application service: Delete Product use case."""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_permission
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import Permission, User
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, actor: User, product_id: str) -> None:
        require_permission(actor, Permission.PRODUCT_DELETE)
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        self._product_repo.delete(product_id)
        logger.info("Product deleted", product_id=product_id)
