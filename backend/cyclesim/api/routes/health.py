from fastapi import APIRouter

from cyclesim.services.catalog_service import CatalogRegistry

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    registry = CatalogRegistry.get()
    return {
        "status": "ok",
        "catalog": registry.get_status(),
    }
