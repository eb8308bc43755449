"""
Transformers Package

Conversions from external records into the internal property shape.
"""
from src.subasta.transformers.attom_transformer import (
    AttomPropertyTransformer,
    property_type_for_size,
)

__all__ = [
    "AttomPropertyTransformer",
    "property_type_for_size",
]
