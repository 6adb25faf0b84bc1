# db/query.py - Rule lookup for a pair of recognised chemicals (same-substance shortcut first).

import threading
from typing import Dict, FrozenSet, Iterable, Optional

from .knowledge_base import CHEMICALS, REACTION_RULES, KnowledgeBaseError
from .schema import ChemicalIdentity, ReactionOutcome, ReactionRule, SafetyLevel

RuleIndex = Dict[FrozenSet[str], ReactionOutcome]

_lock = threading.Lock()
_cache: Optional[RuleIndex] = None


def same_substance_outcome(chem: ChemicalIdentity) -> ReactionOutcome:
    return ReactionOutcome(
        SafetyLevel.SAFE,
        "Same Substance",
        f"You are mixing {chem.name} with itself. No chemical reaction will occur.",
        ("Mixing identical substances is safe.",),
    )


def build_rule_index(rules: Iterable[ReactionRule],
                     chemicals: Iterable[ChemicalIdentity]) -> RuleIndex:
    """
    Key every rule by its unordered id pair.
    Raises KnowledgeBaseError for a rule naming an unknown chemical or a pair listed twice.
    """
    known_ids = {c.id for c in chemicals}
    index: RuleIndex = {}
    for rule in rules:
        unknown = sorted(i for i in rule.chemicals if i not in known_ids)
        if unknown:
            raise KnowledgeBaseError(f"Rule references unknown chemical id(s): {unknown}")
        if rule.chemicals in index:
            raise KnowledgeBaseError(f"Duplicate rule for pair {sorted(rule.chemicals)}")
        index[rule.chemicals] = rule.result
    return index


def _load() -> RuleIndex:
    global _cache
    with _lock:
        if _cache is None:
            _cache = build_rule_index(REACTION_RULES, CHEMICALS)
    return _cache


def match_rule(a: ChemicalIdentity, b: ChemicalIdentity,
               index: Optional[RuleIndex] = None) -> Optional[ReactionOutcome]:
    """
    Precomputed outcome for two recognised chemicals, in either order.
    Identical chemicals always get the "Same Substance" outcome, whatever the table says.
    None means no local knowledge; the caller defers to the remote analysis.
    """
    if a.id == b.id:
        return same_substance_outcome(a)
    if index is None:
        index = _load()
    return index.get(frozenset((a.id, b.id)))
