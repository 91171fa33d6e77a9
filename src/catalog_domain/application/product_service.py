"""Application service for the product registry."""

import logging
from typing import Optional

from src.catalog_domain.domain.entities.product import Product, Review
from src.catalog_domain.domain.repositories.product_repository import IProductRepository
from src.catalog_domain.domain.services import catalog_domain_service
from src.catalog_domain.domain.services.tax_policy import TaxCategory
from src.common.config.backend import BackendSelector
from src.common.exceptions.custom_exceptions import NotFoundError, ValidationError
from src.common.utils.text_utils import normalize_brand

logger = logging.getLogger(__name__)


class ProductApplicationService:
    """Creates, finds, reviews and withdraws products against whichever store is active.

    The backend is checked once at the start of each operation and the whole operation runs
    against that store only.
    """

    def __init__(
        self, local_repo: IProductRepository, remote_repo: IProductRepository, backend: BackendSelector
    ) -> None:
        self.local_repo = local_repo
        self.remote_repo = remote_repo
        self.backend = backend
        # Withdrawn products leave the active listings but are kept here
        self.withdrawn_products: list[Product] = []

    def _active_repo(self) -> IProductRepository:
        if self.backend.is_remote_active():
            return self.remote_repo
        return self.local_repo

    def list_products(self) -> list[Product]:
        return self._active_repo().load_all()

    def find_by_name(self, name: str) -> Optional[Product]:
        return catalog_domain_service.find_by_name(self.list_products(), name)

    def product_exists(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def create_product(
        self,
        name: str,
        brand: str,
        mrp: float,
        category: str | TaxCategory,
        average_rating: Optional[float] = None,
    ) -> Product:
        """Registers a new product. Names are unique regardless of case."""
        repo = self._active_repo()
        if catalog_domain_service.find_by_name(repo.load_all(), name) is not None:
            raise ValidationError(f"Product '{name}' already exists.")

        product = Product(
            name=(name or "").strip(),
            brand=normalize_brand(brand),
            mrp=mrp,
            category=TaxCategory.from_tag(category),
            average_rating=average_rating,
        )
        repo.append(product)
        logger.info(f'The product "{product.name}" by "{product.brand}" was added to the system.')
        return product

    def remove_product(self, name: str) -> Product:
        """Withdraws a product from sale. Shop catalogues that list it are left untouched."""
        repo = self._active_repo()
        product = catalog_domain_service.find_by_name(repo.load_all(), name)
        if product is None:
            raise NotFoundError("Product", name)

        repo.remove(product.name)
        self.withdrawn_products.append(product)
        logger.info(f'"{product.name}" by "{product.brand}" has been withdrawn from sale.')
        return product

    def search_products(self, query: str) -> list[Product]:
        return catalog_domain_service.search_products(self.list_products(), query)

    def price_within_limit(self, candidate_price: float) -> bool:
        return catalog_domain_service.price_within_limit(candidate_price, self.list_products())

    def add_review(self, product_name: str, rating: int, comment: str) -> Review:
        repo = self._active_repo()
        product = catalog_domain_service.find_by_name(repo.load_all(), product_name)
        if product is None:
            raise NotFoundError("Product", product_name)

        review = Review(rating=rating, comment=comment)
        product.add_review(review)
        repo.update(product)
        logger.info(f'Review of {rating}* added to "{product.name}".')
        return review

    def get_reviews(self, product_name: str) -> list[Review]:
        product = self.find_by_name(product_name)
        if product is None:
            raise NotFoundError("Product", product_name)
        return list(product.reviews)

    def average_rating(self, product_name: str) -> float:
        return catalog_domain_service.average_rating(self.get_reviews(product_name))
