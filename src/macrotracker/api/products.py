"""Product search endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from macrotracker.api.dependencies import get_container, require_api_token
from macrotracker.api.models import ProductPayload
from macrotracker.errors import NetworkUnavailableError, SearchFailedError

router = APIRouter(
    prefix="/products", tags=["products"], dependencies=[Depends(require_api_token)]
)


@router.get("/search")
async def search_products(
    request: Request, q: str = Query(default="")
) -> list[ProductPayload]:
    """Search products by name."""
    service = get_container(request).food_search_service
    try:
        products = await service.search_products_by_name(q)
    except NetworkUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except SearchFailedError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
    return [ProductPayload.from_record(product) for product in products]
