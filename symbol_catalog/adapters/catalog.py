"""Catalog browsing endpoints — categories, selection, display list, settings."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from symbol_catalog.catalog.engine import CatalogEngine
from symbol_catalog.catalog.layout import resolve_layout
from symbol_catalog.catalog.naming import display_name_for
from symbol_catalog.errors import ValidationError
from symbol_catalog.models import (
    AddKeywordIn,
    CategoriesOut,
    CategoryOut,
    DisplaySettings,
    LayoutOut,
    Region,
    SelectIn,
    StatusOut,
    SymbolsOut,
    UpdateSettingsIn,
)

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


def _get_engine(request: Request) -> CatalogEngine:
    return request.app.state.engine


def rejection(exc: ValidationError) -> HTTPException:
    return HTTPException(409 if exc.duplicate else 400, str(exc))


def _symbols_out(engine: CatalogEngine) -> SymbolsOut:
    presenter = engine.presenter
    symbols = presenter.displayed
    return SymbolsOut(
        selection=presenter.selection,
        label=presenter.selection_label,
        language=presenter.language,
        symbols=symbols,
        total=len(symbols),
    )


# ---------------------------------------------------------------------------
# Categories and symbols
# ---------------------------------------------------------------------------

@router.get("/categories", response_model=CategoriesOut)
async def list_categories(request: Request):
    """Ordered categories: contextual, custom, then alphabetical."""
    engine = _get_engine(request)
    categories = [
        CategoryOut(
            id=c.id,
            name=c.name,
            display_name=display_name_for(c.name),
            is_standard=c.is_standard,
        )
        for c in engine.categories.categories
    ]
    return CategoriesOut(categories=categories, total=len(categories))


@router.post("/categories/reload", response_model=CategoriesOut)
async def reload_categories(request: Request):
    """Refetch the remote category map and recompute the grid."""
    await _get_engine(request).reload_categories()
    return await list_categories(request)


@router.get("/symbols", response_model=SymbolsOut, response_model_by_alias=False)
async def current_symbols(request: Request):
    """Display list for the current selection."""
    return _symbols_out(_get_engine(request))


@router.post("/select", response_model=SymbolsOut, response_model_by_alias=False)
async def select_category(body: SelectIn, request: Request):
    """Change the selection (null or 'contextual' for the time-of-day set)."""
    engine = _get_engine(request)
    await engine.presenter.select(body.name)
    return _symbols_out(engine)


@router.post("/categories/{name}/keywords", status_code=201)
async def add_keyword(name: str, body: AddKeywordIn, request: Request) -> dict:
    """Add a keyword to a standard category."""
    engine = _get_engine(request)
    try:
        keywords = await engine.add_keyword(name, body.keyword)
    except ValidationError as exc:
        raise rejection(exc) from exc
    return {"category": name, "keywords": keywords, "total": len(keywords)}


# ---------------------------------------------------------------------------
# Settings and layout
# ---------------------------------------------------------------------------

@router.get("/settings", response_model=DisplaySettings, response_model_by_alias=False)
async def get_settings(request: Request):
    return _get_engine(request).settings.settings


@router.patch("/settings", response_model=DisplaySettings, response_model_by_alias=False)
async def update_settings(body: UpdateSettingsIn, request: Request):
    """Change the symbol language and/or grid density."""
    engine = _get_engine(request)
    try:
        await engine.update_settings(language=body.language, density=body.grid_density)
    except ValidationError as exc:
        raise rejection(exc) from exc
    return engine.settings.settings


@router.get("/layout", response_model=LayoutOut)
async def grid_layout(
    request: Request,
    viewport_width: float = Query(..., gt=0, description="Viewport width in points"),
    region: Region = Query(Region.SPLIT),
    margin: float = Query(2.5, ge=0),
):
    """Columns and item size for the configured density."""
    density = _get_engine(request).settings.density
    layout = resolve_layout(density, region, viewport_width, margin)
    return LayoutOut(
        density=density,
        region=region,
        columns=layout.columns,
        item_size=layout.item_size,
    )


@router.get("/status", response_model=StatusOut)
async def catalog_status(request: Request):
    """Engine readiness, configuration, counts and storage notices."""
    engine = _get_engine(request)
    return StatusOut(
        ready=engine.ready,
        config=engine.config.to_dict(),
        counts=engine.counts(),
        notices=list(engine.notices),
    )
