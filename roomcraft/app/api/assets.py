"""Asset catalog API endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends

from roomcraft.app.api.deps import get_asset_catalog
from roomcraft.app.schemas.asset import AssetCategory, AssetListResponse
from roomcraft.app.services.asset_catalog import AssetCatalog

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/", response_model=AssetListResponse)
async def list_assets(
    q: str = "",
    category: AssetCategory | None = None,
    sort: Literal["name", "category"] | None = None,
    catalog: AssetCatalog = Depends(get_asset_catalog),
) -> AssetListResponse:
    """List catalog assets, optionally filtered by name and category."""
    assets = catalog.search_assets(q)
    if category is not None:
        assets = [asset for asset in assets if asset.category == category]
    if sort is not None:
        assets = catalog.sort_assets(assets, sort)
    return AssetListResponse(assets=assets)
