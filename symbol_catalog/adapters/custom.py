"""Custom symbol and custom category CRUD endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from symbol_catalog.adapters.catalog import rejection
from symbol_catalog.catalog.engine import CatalogEngine
from symbol_catalog.errors import ValidationError
from symbol_catalog.models import (
    CreateCustomCategoryIn,
    CreateCustomSymbolIn,
    CustomCategory,
    CustomSectionsOut,
    CustomSymbolItem,
    CustomSymbolsOut,
    UpdateCustomSymbolIn,
)

router = APIRouter(prefix="/api/v1/catalog", tags=["custom"])


def _get_engine(request: Request) -> CatalogEngine:
    return request.app.state.engine


# ---------------------------------------------------------------------------
# Custom symbols
# ---------------------------------------------------------------------------

@router.get("/custom-symbols", response_model=CustomSymbolsOut, response_model_by_alias=False)
async def list_custom_symbols(request: Request):
    items = _get_engine(request).custom.items
    return CustomSymbolsOut(symbols=items, total=len(items))


@router.post(
    "/custom-symbols",
    status_code=201,
    response_model=CustomSymbolItem,
    response_model_by_alias=False,
)
async def create_custom_symbol(body: CreateCustomSymbolIn, request: Request):
    """Create a custom symbol; names are unique case-insensitively."""
    engine = _get_engine(request)
    try:
        item = engine.custom.add(body.name, body.image_uri, body.category_id)
    except ValidationError as exc:
        raise rejection(exc) from exc
    await engine.custom_symbols_changed()
    return item


@router.patch(
    "/custom-symbols/{symbol_id}",
    response_model=CustomSymbolItem,
    response_model_by_alias=False,
)
async def update_custom_symbol(symbol_id: str, body: UpdateCustomSymbolIn, request: Request):
    """Patch name, image or category; only fields present in the body change."""
    engine = _get_engine(request)
    patch = body.model_dump(exclude_unset=True)
    try:
        item = engine.custom.update(symbol_id, **patch)
    except ValidationError as exc:
        raise rejection(exc) from exc
    if item is None:
        raise HTTPException(404, "Custom symbol not found")
    await engine.custom_symbols_changed()
    return item


@router.delete("/custom-symbols/{symbol_id}")
async def delete_custom_symbol(symbol_id: str, request: Request) -> dict:
    """Delete a custom symbol. Deleting an unknown id is not an error."""
    engine = _get_engine(request)
    deleted = engine.custom.remove(symbol_id)
    if deleted:
        await engine.custom_symbols_changed()
    return {"deleted": deleted}


# ---------------------------------------------------------------------------
# Custom categories
# ---------------------------------------------------------------------------

@router.get(
    "/custom-categories",
    response_model=list[CustomCategory],
    response_model_by_alias=False,
)
async def list_custom_categories(request: Request):
    return _get_engine(request).custom.categories


@router.post(
    "/custom-categories",
    status_code=201,
    response_model=CustomCategory,
    response_model_by_alias=False,
)
async def create_custom_category(body: CreateCustomCategoryIn, request: Request):
    try:
        return _get_engine(request).custom.add_category(body.name)
    except ValidationError as exc:
        raise rejection(exc) from exc


@router.patch(
    "/custom-categories/{category_id}",
    response_model=CustomCategory,
    response_model_by_alias=False,
)
async def rename_custom_category(category_id: str, body: CreateCustomCategoryIn, request: Request):
    try:
        category = _get_engine(request).custom.rename_category(category_id, body.name)
    except ValidationError as exc:
        raise rejection(exc) from exc
    if category is None:
        raise HTTPException(404, "Custom category not found")
    return category


@router.delete("/custom-categories/{category_id}")
async def delete_custom_category(category_id: str, request: Request) -> dict:
    """Delete a category; its symbols become uncategorized."""
    deleted = _get_engine(request).custom.remove_category(category_id)
    return {"deleted": deleted}


@router.get("/custom-sections", response_model=CustomSectionsOut, response_model_by_alias=False)
async def list_custom_sections(request: Request):
    """Custom symbols grouped by category, uncategorized first."""
    return CustomSectionsOut(sections=_get_engine(request).custom.sections())
