# product_api/routes.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from .core import ProductFilter, validate_product
from .database import ProductNotFound, ProductStore
from .logger import get_logger
from .models import ProductIn

logger = get_logger(__name__)

NOT_FOUND = "Product not found"
INVALID_JSON = "Invalid JSON body."

router = APIRouter(prefix="/api/products")

# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store

async def check_product_payload(request: Request) -> None:
    """Reject create/replace bodies before the store is touched."""
    payload: Any = {}
    if (await request.body()).strip():
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail=INVALID_JSON)
    reason = validate_product(payload)
    if reason is not None:
        raise HTTPException(status_code=400, detail=reason)

# ---------------------------
# Product endpoints
# ---------------------------
# each path is declared with and without one trailing slash; redirects are off
@router.api_route("", methods=["GET", "HEAD"])
@router.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
async def list_products(
    category: Optional[str] = None,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    name: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    try:
        product_filter = ProductFilter.from_params(category, min_price, max_price, name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [p.to_dict() for p in store.list(product_filter)]

@router.api_route("/{product_id}", methods=["GET", "HEAD"])
@router.api_route("/{product_id}/", methods=["GET", "HEAD"], include_in_schema=False)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    try:
        return store.get_by_id(product_id).to_dict()
    except ProductNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

@router.post("", status_code=201, dependencies=[Depends(check_product_payload)])
@router.post("/", status_code=201, dependencies=[Depends(check_product_payload)], include_in_schema=False)
async def create_product(payload: ProductIn, store: ProductStore = Depends(get_store)):
    product = store.insert(payload)
    logger.info("product_created", product_id=product.id)
    return product.to_dict()

@router.put("/{product_id}", dependencies=[Depends(check_product_payload)])
@router.put("/{product_id}/", dependencies=[Depends(check_product_payload)], include_in_schema=False)
async def replace_product(product_id: str, payload: ProductIn, store: ProductStore = Depends(get_store)):
    try:
        product = store.replace(product_id, payload)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("product_replaced", product_id=product_id)
    return product.to_dict()

@router.delete("/{product_id}")
@router.delete("/{product_id}/", include_in_schema=False)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    try:
        product = store.delete(product_id)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("product_deleted", product_id=product.id)
    return {"message": "Product deleted", "product": product.to_dict()}
