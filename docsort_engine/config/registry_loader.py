"""
Registry loader for category and issuer template tables.

Converts the pattern dictionaries (or a CSV category table) into immutable
registries that are built once and passed into the engines.
"""

import csv
import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from ..errors import RegistryConfigurationError
from ..patterns.category_patterns import CATEGORY_PATTERNS, FALLBACK_CATEGORY
from ..patterns.issuer_templates import ISSUER_TEMPLATE_PATTERNS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    """One taxonomy bucket with its keyword weight table."""
    id: str
    keywords: Tuple[str, ...]
    aliases: Tuple[str, ...] = ()
    weight: float = 1.0
    description: str = ""
    folder: str = ""


@dataclass(frozen=True)
class IssuerTemplate:
    """Pattern profile for documents from one known sender."""
    id: str
    company: str
    category: str
    indicators: Tuple[str, ...]
    required_fields: Tuple[str, ...]
    patterns: Mapping[str, re.Pattern]
    confidence_boost: int = 0


class CategoryRegistry:
    """Read-only, ordered collection of categories."""

    def __init__(self, categories: Tuple[Category, ...], fallback_id: str = FALLBACK_CATEGORY):
        self._categories = tuple(categories)
        self._by_id = {c.id: c for c in self._categories}
        self.fallback_id = fallback_id

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._by_id

    def get(self, category_id: str) -> Optional[Category]:
        return self._by_id.get(category_id)

    def ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self._categories)

    def is_known(self, category_id: str) -> bool:
        """True for registered ids and the fallback bucket."""
        return category_id == self.fallback_id or category_id in self._by_id

    def folder_for(self, category_id: str) -> str:
        """Folder name a file organizer should use for this category."""
        category = self._by_id.get(category_id)
        if category and category.folder:
            return category.folder
        return self.fallback_id if category is None else category.id


class TemplateRegistry:
    """Read-only, ordered collection of issuer templates."""

    def __init__(self, templates: Tuple[IssuerTemplate, ...]):
        self._templates = tuple(templates)

    def __iter__(self) -> Iterator[IssuerTemplate]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


def _as_phrase_tuple(values, field_name: str, owner: str) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str) or not all(isinstance(v, str) for v in values):
        raise RegistryConfigurationError(
            f"'{owner}': {field_name} must be a list of strings"
        )
    return tuple(v.strip() for v in values if v.strip())


def build_category_registry(
    patterns: Optional[Dict[str, Dict]] = None,
    fallback_id: str = FALLBACK_CATEGORY
) -> CategoryRegistry:
    """
    Build a category registry from a pattern dictionary.

    Args:
        patterns: Mapping of category id to {"keywords", "aliases", "weight", ...}.
            Defaults to CATEGORY_PATTERNS.
        fallback_id: Id reported when no category scores

    Returns:
        CategoryRegistry preserving the dictionary order

    Raises:
        RegistryConfigurationError: on empty ids, non-positive or non-finite weights or
            keyword lists that are not lists of strings
    """
    if patterns is None:
        patterns = CATEGORY_PATTERNS

    categories = []
    for category_id, info in patterns.items():
        if not isinstance(category_id, str) or not category_id.strip():
            raise RegistryConfigurationError(f"Invalid category id: {category_id!r}")
        if category_id == fallback_id:
            raise RegistryConfigurationError(
                f"Category id '{category_id}' is reserved for the fallback bucket"
            )

        try:
            weight = float(info.get("weight", 1.0))
        except (TypeError, ValueError):
            raise RegistryConfigurationError(
                f"'{category_id}': weight must be a number, got {info.get('weight')!r}"
            )
        if not (math.isfinite(weight) and weight > 0):
            raise RegistryConfigurationError(
                f"'{category_id}': weight must be a positive finite number, got {weight}"
            )

        categories.append(Category(
            id=category_id,
            keywords=_as_phrase_tuple(info.get("keywords"), "keywords", category_id),
            aliases=_as_phrase_tuple(info.get("aliases"), "aliases", category_id),
            weight=weight,
            description=info.get("description", ""),
            folder=info.get("folder", ""),
        ))

    # Dict keys are unique; duplicates can only come from CSV rows
    logger.debug("Built category registry with %d categories", len(categories))
    return CategoryRegistry(tuple(categories), fallback_id=fallback_id)


def build_template_registry(
    categories: CategoryRegistry,
    patterns: Optional[Dict[str, Dict]] = None
) -> TemplateRegistry:
    """
    Build an issuer template registry, compiling every field pattern.

    Args:
        categories: Registry the template categories must belong to
        patterns: Mapping of template id to template definition.
            Defaults to ISSUER_TEMPLATE_PATTERNS.

    Returns:
        TemplateRegistry preserving the dictionary order

    Raises:
        RegistryConfigurationError: on unknown categories, invalid regexes
            or a non-integer confidence boost
    """
    if patterns is None:
        patterns = ISSUER_TEMPLATE_PATTERNS

    templates = []
    for template_id, info in patterns.items():
        category = info.get("category")
        if not categories.is_known(category):
            raise RegistryConfigurationError(
                f"Template '{template_id}' references unknown category {category!r}"
            )

        company = info.get("company")
        if not isinstance(company, str) or not company.strip():
            raise RegistryConfigurationError(f"Template '{template_id}' has no company")

        boost = info.get("confidence_boost", 0)
        if isinstance(boost, bool) or not isinstance(boost, int) or boost < 0:
            raise RegistryConfigurationError(
                f"Template '{template_id}': confidence_boost must be a non-negative int"
            )

        compiled = {}
        for name, regex in (info.get("patterns") or {}).items():
            try:
                compiled[name] = re.compile(regex)
            except re.error as e:
                raise RegistryConfigurationError(
                    f"Template '{template_id}': invalid pattern '{name}': {e}"
                ) from e

        templates.append(IssuerTemplate(
            id=template_id,
            company=company,
            category=category,
            indicators=tuple(
                p.lower() for p in _as_phrase_tuple(info.get("indicators"), "indicators", template_id)
            ),
            required_fields=tuple(
                p.lower() for p in _as_phrase_tuple(info.get("required_fields"), "required_fields", template_id)
            ),
            patterns=MappingProxyType(compiled),
            confidence_boost=boost,
        ))

    logger.debug("Built template registry with %d templates", len(templates))
    return TemplateRegistry(tuple(templates))


def load_category_csv(csv_path: str, fallback_id: str = FALLBACK_CATEGORY) -> CategoryRegistry:
    """
    Load a category table from a CSV file.

    Args:
        csv_path: Path to CSV file containing one category per row

    Returns:
        CategoryRegistry in file order

    Example CSV format:
        id,keywords,aliases,weight,folder
        IMU,imu|imposta municipale|f24,ici,1.0,Tasse/IMU
        Banca,banca|iban|bonifico,bancario,1.2,Banca
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Category file not found: {csv_path}")

    patterns = {}
    with open(csv_path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            category_id = (row.get('id') or '').strip()
            if not category_id:
                continue
            if category_id in patterns:
                raise RegistryConfigurationError(
                    f"Duplicate category id '{category_id}' in {csv_path}"
                )
            patterns[category_id] = {
                'keywords': [k for k in (row.get('keywords') or '').split('|')],
                'aliases': [a for a in (row.get('aliases') or '').split('|')],
                'weight': (row.get('weight') or '1.0').strip(),
                'description': (row.get('description') or '').strip(),
                'folder': (row.get('folder') or '').strip(),
            }

    return build_category_registry(patterns, fallback_id=fallback_id)
