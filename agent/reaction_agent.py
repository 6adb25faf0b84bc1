# File: agent/reaction_agent.py
# Decides whether two user-typed chemicals are safe to mix.
# Local knowledge first (same substance, then the rule table); anything else goes to the
# remote analysis service. Whatever happens there, the caller always gets a ReactionResult.

import logging
from typing import Any, Optional, Protocol

from agent.analysis_client import AnalysisClient, BackendError
from agent.config import Settings
from agent.response_parser import interpret
from db.aliases import normalize_input
from db.query import match_rule
from db.schema import ReactionOutcome, ReactionResult, ResultSource, SafetyLevel

logger = logging.getLogger(__name__)

FALLBACK_OUTCOME = ReactionOutcome(
    SafetyLevel.UNKNOWN,
    "Analysis Failed",
    "The system could not confidently determine the safety of this combination. "
    "Please check if the backend is running.",
    (
        "Do not mix unknown substances",
        "Assume it may be unsafe",
        "Refer to official safety documentation",
    ),
)


class AnalysisBackend(Protocol):
    def query(self, chem1: str, chem2: str) -> Any: ...


def check_reaction(input1: str, input2: str,
                   client: Optional[AnalysisBackend] = None) -> ReactionResult:
    """
    Resolve a pair of raw inputs to a ReactionResult. Never raises.

    Args:
        input1, input2: the strings exactly as the user typed them. They are stamped on the
            result as-is and sent unmodified to the remote service.
        client: anything with query(chem1, chem2); defaults to an AnalysisClient built
            from the environment.
    """
    chemicals = (input1, input2)

    c1 = normalize_input(input1)
    c2 = normalize_input(input2)

    # Rule-based fast path: only when both inputs are known chemicals
    if c1 and c2:
        outcome = match_rule(c1, c2)
        if outcome is not None:
            source = ResultSource.SAME_SUBSTANCE if c1.id == c2.id else ResultSource.RULE
            logger.debug("Local %s hit for %r + %r", source.value, c1.id, c2.id)
            return ReactionResult.from_outcome(outcome, chemicals, source)
        logger.debug("No rule for %r + %r; asking the analysis service", c1.id, c2.id)
    else:
        logger.debug("Unrecognised input(s) %r + %r; asking the analysis service", input1, input2)

    try:
        if client is None:
            client = AnalysisClient.from_settings(Settings.from_env())
        payload = client.query(input1, input2)
        outcome = interpret(payload)
    except BackendError as e:
        logger.warning("Analysis service failed for %r + %r: %s", input1, input2, e)
        return ReactionResult.from_outcome(FALLBACK_OUTCOME, chemicals, ResultSource.FALLBACK)
    except Exception:
        logger.exception("Unexpected failure analysing %r + %r", input1, input2)
        return ReactionResult.from_outcome(FALLBACK_OUTCOME, chemicals, ResultSource.FALLBACK)

    return ReactionResult.from_outcome(outcome, chemicals, ResultSource.REMOTE)
