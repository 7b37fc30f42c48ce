"""
Configuration module for the Document Classification Engine.

This module contains the analysis configuration and the registry builders.
"""

from .analysis_config import ANALYSIS_CONFIG
from .registry_loader import (
    Category,
    IssuerTemplate,
    CategoryRegistry,
    TemplateRegistry,
    build_category_registry,
    build_template_registry,
    load_category_csv,
)

__all__ = [
    "ANALYSIS_CONFIG",
    "Category",
    "IssuerTemplate",
    "CategoryRegistry",
    "TemplateRegistry",
    "build_category_registry",
    "build_template_registry",
    "load_category_csv",
]
