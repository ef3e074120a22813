"""
Pydantic models for the catalog: suppliers and products.

Suppliers are the quarries and yards the business represents;
products are the aggregates they sell, measured by default in cubic
meters.  Both are read-only through the API and populated by the
sample seed.
"""

from pydantic import Field

from .base import CamelModel


class SupplierCreate(CamelModel):
    name: str = Field(..., min_length=1, examples=["Nova Areião"])
    active: bool = True


class Supplier(SupplierCreate):
    id: str


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, examples=["Areia Média"])
    unit: str = "m³"
    active: bool = True


class Product(ProductCreate):
    id: str
