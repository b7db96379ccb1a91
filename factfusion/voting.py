"""
Per-session vote bookkeeping and dispute classification.

Each fact moves through a small state machine during a session:

    UNVOTED --begin--> PENDING --record--> VOTED
                       PENDING --release--> UNVOTED

VOTED is terminal. Nothing here is persisted; a new session starts with
every fact UNVOTED.
"""

import logging
from enum import Enum
from typing import Dict, Hashable

from factfusion.models import Fact


logger = logging.getLogger(__name__)


class VoteState(str, Enum):
    """Where a fact's vote affordance stands this session."""
    UNVOTED = "unvoted"
    PENDING = "pending"
    VOTED = "voted"


class VoteSessionGuard:
    """
    Allows at most one successful vote per fact per session.

    A failed vote puts the fact back to UNVOTED so the user can retry.
    """

    def __init__(self):
        self._states: Dict[Hashable, VoteState] = {}

    def state_of(self, fact_id) -> VoteState:
        return self._states.get(fact_id, VoteState.UNVOTED)

    def can_vote(self, fact_id) -> bool:
        """True iff no successful vote has been recorded for this fact."""
        return self.state_of(fact_id) is not VoteState.VOTED

    def is_pending(self, fact_id) -> bool:
        return self.state_of(fact_id) is VoteState.PENDING

    def begin_vote(self, fact_id) -> bool:
        """
        Move a fact from UNVOTED to PENDING.

        Returns:
            False if the fact is already pending or voted
        """
        if self.state_of(fact_id) is not VoteState.UNVOTED:
            return False
        self._states[fact_id] = VoteState.PENDING
        return True

    def release_vote(self, fact_id):
        """Return a pending fact to UNVOTED after a failed vote."""
        if self.state_of(fact_id) is VoteState.PENDING:
            del self._states[fact_id]

    def record_vote(self, fact_id):
        """Mark a fact as voted. Idempotent."""
        if self.state_of(fact_id) is not VoteState.VOTED:
            logger.debug(f"Vote recorded for fact {fact_id}")
        self._states[fact_id] = VoteState.VOTED


def is_disputed(fact: Fact) -> bool:
    """A fact is disputed when false votes outnumber the positive ones."""
    return fact.votes_interesting + fact.votes_mindblowing < fact.votes_false
