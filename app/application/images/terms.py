"""
Category name -> search term mapping.

Lookups run as a chain of strategies: exact key, then a bidirectional
substring scan over the table keys (in file order), then a synthesized
person-centric phrase. The tables themselves live in a JSON data file so
new categories can be added without touching code.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from app.core.config import settings
from app.core.exceptions import CategoryTermsError
from app.core.pyd_schemas import CategoryCluster, SearchTerm, TermSource

logger = logging.getLogger(__name__)

BUNDLED_TERMS_PATH = Path(__file__).resolve().parents[2] / "core" / "category_terms.json"


def normalize_category(category_name: str) -> str:
    return (category_name or "").strip().lower()


def classify_category(
    category_name: str, wealth_keywords: Optional[Iterable[str]] = None
) -> CategoryCluster:
    """Return ``wealth`` when the category name mentions any wealth keyword."""
    name = normalize_category(category_name)
    keywords = settings.wealth_keywords if wealth_keywords is None else wealth_keywords
    if any(kw and kw in name for kw in keywords):
        return CategoryCluster.wealth
    return CategoryCluster.generic


def _partial_match(name: str, keys: Iterable[str]) -> Optional[str]:
    if not name:
        return None
    for key in keys:
        if key in name or name in key:
            return key
    return None


@dataclass
class CategoryTermTable:
    """Primary and alternative search phrasings per category."""

    primary: Dict[str, str] = field(default_factory=dict)
    alternatives: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict, source: str = "<dict>") -> "CategoryTermTable":
        primary = data.get("primary") if isinstance(data, dict) else None
        alternatives = data.get("alternatives") if isinstance(data, dict) else None
        if not isinstance(primary, dict) or not isinstance(alternatives, dict):
            raise CategoryTermsError(
                "Category terms must contain 'primary' and 'alternatives' objects",
                path=source,
            )
        for key, value in alternatives.items():
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise CategoryTermsError(
                    f"Alternatives for '{key}' must be a list of strings", path=source
                )
        return cls(
            primary={k.strip().lower(): str(v) for k, v in primary.items()},
            alternatives={k.strip().lower(): list(v) for k, v in alternatives.items()},
        )

    @classmethod
    def load(cls, path: Union[str, Path, None] = None) -> "CategoryTermTable":
        terms_path = Path(path or settings.category_terms_path or BUNDLED_TERMS_PATH)
        try:
            data = json.loads(terms_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise CategoryTermsError(
                f"Category terms file not found: {terms_path}", path=str(terms_path)
            ) from e
        except json.JSONDecodeError as e:
            raise CategoryTermsError(
                f"Invalid category terms JSON: {e}", path=str(terms_path)
            ) from e
        table = cls.from_dict(data, source=str(terms_path))
        logger.debug(
            "Loaded %d primary / %d alternative category terms from %s",
            len(table.primary),
            len(table.alternatives),
            terms_path,
        )
        return table

    # ----- Primary term -----
    def resolve_search_term(self, category_name: str) -> SearchTerm:
        name = normalize_category(category_name)

        if name in self.primary:
            return SearchTerm(text=self.primary[name], source=TermSource.exact)

        key = _partial_match(name, self.primary)
        if key is not None:
            return SearchTerm(text=self.primary[key], source=TermSource.partial)

        # Person-centric phrasing comes first among the synthesized options
        return SearchTerm(text=self.synthesize_terms(name)[0], source=TermSource.synthesized)

    @staticmethod
    def synthesize_terms(name: str) -> List[str]:
        return [
            f"confident person {name}",
            f"{name} person",
            f"person {name}",
            f"achievement {name}",
            f"{name} success",
            f"{name} positive",
            f"empowered {name}",
            f"growth {name}",
        ]

    # ----- Alternative terms -----
    def alternative_terms(self, category_name: str) -> List[SearchTerm]:
        name = normalize_category(category_name)

        texts = self.alternatives.get(name)
        if texts is None:
            key = _partial_match(name, self.alternatives)
            if key is not None:
                texts = self.alternatives[key]
        if texts is None:
            texts = [
                f"confident person {name}",
                f"{name} person",
                f"achievement {name}",
                f"{name} success",
            ]
        return [SearchTerm(text=t, source=TermSource.alternative) for t in texts]


def fallback_term(cluster: CategoryCluster) -> SearchTerm:
    """Generic last-resort query for a category cluster."""
    if cluster is CategoryCluster.wealth:
        return SearchTerm(text=settings.wealth_fallback_term, source=TermSource.fallback)
    return SearchTerm(text=settings.generic_fallback_term, source=TermSource.fallback)
