# db/aliases.py - Maps free-text chemical identifiers (names, formulas, synonyms) to a known identity.
# Index: one flat mapping key(lowercased) -> ChemicalIdentity, built once from db.knowledge_base.
# Cross-identity key collisions are rejected while building, so a lookup is a plain dict hit.
#⚠️ The cached index never refreshes; the tables are static for the life of the process.

import threading
from typing import Dict, Iterable, List, Optional

from .knowledge_base import CHEMICALS, KnowledgeBaseError
from .schema import ChemicalIdentity

_lock = threading.Lock()
_cache: Optional[Dict[str, ChemicalIdentity]] = None  # key(lower) -> identity


# ---------------- internals ----------------

def _norm(s: str) -> str:
    return s.strip().lower()


def build_alias_index(chemicals: Iterable[ChemicalIdentity]) -> Dict[str, ChemicalIdentity]:
    """
    Index every name, formula and alias (case-insensitive) to its identity.
    Raises KnowledgeBaseError on duplicate ids or on a key claimed by two identities.
    """
    index: Dict[str, ChemicalIdentity] = {}
    seen_ids = set()
    for chem in chemicals:
        if chem.id in seen_ids:
            raise KnowledgeBaseError(f"Duplicate chemical id: {chem.id!r}")
        seen_ids.add(chem.id)
        for key in chem.lookup_keys():
            k = _norm(key or "")
            if not k:
                continue
            owner = index.get(k)
            if owner is None:
                index[k] = chem
            elif owner.id != chem.id:
                raise KnowledgeBaseError(
                    f"Identifier {key!r} is claimed by both {owner.id!r} and {chem.id!r}"
                )
    return index


def _load() -> Dict[str, ChemicalIdentity]:
    """Build the index from the static table (once) and return it."""
    global _cache
    with _lock:
        if _cache is None:
            _cache = build_alias_index(CHEMICALS)
    return _cache


# ---------------- queries ----------------

def normalize_input(raw: Optional[str],
                    index: Optional[Dict[str, ChemicalIdentity]] = None) -> Optional[ChemicalIdentity]:
    """
    Return the known identity for a raw user token, or None if it is not in the table.
    Matching is exact on the trimmed, lower-cased token against name, formula and aliases.
    An unrecognised token is not an error: the caller hands it to the remote analysis.
    """
    if not raw:
        return None
    key = _norm(raw)
    if not key:
        return None
    if index is None:
        index = _load()
    return index.get(key)


def list_known_chemicals() -> List[str]:
    """Canonical names in table order (for input suggestions in the UI)."""
    _load()
    return [c.name for c in CHEMICALS]
