"""Startup validation for the permission catalog."""

import logging

from lodge.domain.shared.authorization.catalog import CATALOG, PermissionCatalog

logger = logging.getLogger(__name__)


def validate_authorization(catalog: PermissionCatalog = CATALOG) -> None:
    """Fail fast if any grade, office or tier is missing from the catalog.

    Raises ConfigurationError listing every gap.
    """
    catalog.validate_coverage()
    logger.info("Authorization startup validation passed for permission catalog")
