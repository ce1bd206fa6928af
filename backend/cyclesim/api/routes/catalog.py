from fastapi import APIRouter

from cyclesim.services.catalog_service import describe_catalog

router = APIRouter(tags=["catalog"])


@router.get("/catalog")
def get_catalog_tables():
    """Return keys and labels of the active reference catalogs."""
    return describe_catalog()
