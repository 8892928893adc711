"""Pydantic models for the symbol catalog: engine data and API request/response shapes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Persisted blobs use camelCase keys (``imageUri``, ``categoryId``).

    Routes serialize these with ``response_model_by_alias=False`` so the HTTP
    API stays snake_case throughout.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Engine data
# ---------------------------------------------------------------------------

class CategoryInfo(_CamelModel):
    id: str
    name: str  # canonical English identifier, unique case-insensitively
    is_standard: bool


class CustomSymbolItem(_CamelModel):
    id: str
    name: str
    image_uri: str | None = None
    category_id: str | None = None


class CustomCategory(_CamelModel):
    id: str
    name: str


class DisplayedSymbolData(_CamelModel):
    id: str
    keyword: str
    display_text: str
    image_uri: str | None = None
    is_custom: bool = False


class CustomSection(_CamelModel):
    id: str | None  # None for the uncategorized section
    name: str
    symbols: list[CustomSymbolItem]


class Density(str, Enum):
    SIMPLE = "simple"
    STANDARD = "standard"
    DENSE = "dense"


class Region(str, Enum):
    FULL = "full"
    SPLIT = "split"


class DisplaySettings(_CamelModel):
    language: str = "en"
    grid_density: Density = Density.STANDARD


class GridLayout(BaseModel):
    columns: int
    item_size: int


# ---------------------------------------------------------------------------
# Catalog browsing
# ---------------------------------------------------------------------------

class CategoryOut(BaseModel):
    id: str
    name: str
    display_name: str
    is_standard: bool


class CategoriesOut(BaseModel):
    categories: list[CategoryOut]
    total: int


class SymbolsOut(BaseModel):
    selection: str | None  # None means contextual
    label: str
    language: str
    symbols: list[DisplayedSymbolData]
    total: int


class SelectIn(BaseModel):
    name: str | None = None


class AddKeywordIn(BaseModel):
    keyword: str


# ---------------------------------------------------------------------------
# Custom symbols and custom categories
# ---------------------------------------------------------------------------

class CreateCustomSymbolIn(BaseModel):
    name: str
    image_uri: str | None = None
    category_id: str | None = None


class UpdateCustomSymbolIn(BaseModel):
    name: str | None = None
    image_uri: str | None = None
    category_id: str | None = None


class CustomSymbolsOut(BaseModel):
    symbols: list[CustomSymbolItem]
    total: int


class CreateCustomCategoryIn(BaseModel):
    name: str


class CustomSectionsOut(BaseModel):
    sections: list[CustomSection]


# ---------------------------------------------------------------------------
# Settings, layout and status
# ---------------------------------------------------------------------------

class UpdateSettingsIn(BaseModel):
    language: str | None = None
    grid_density: Density | None = None


class LayoutOut(BaseModel):
    density: Density
    region: Region
    columns: int
    item_size: int


class StatusOut(BaseModel):
    ready: bool
    config: dict
    counts: dict
    notices: list[str]
