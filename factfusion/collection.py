"""
Client-side state of the fact list and the operations that mutate it.

The collection holds an immutable CollectionSnapshot and swaps in a new
one on every transition. Renderers read ``snapshot`` and never mutate it.

Filter changes can overlap: each fetch takes a request number when it is
issued and its result is applied only if no newer fetch has been issued
since. A slow response for an old filter is dropped.
"""

import logging
from typing import Callable, Optional

from factfusion.categories import ALL_CATEGORIES, UnknownCategory, is_valid_filter
from factfusion.gateway import RemoteFailure
from factfusion.models import CollectionSnapshot, Fact, VoteColumn
from factfusion.validation import ValidationFailure, submission_problems
from factfusion.voting import VoteSessionGuard


logger = logging.getLogger(__name__)


LOAD_FAILED_MESSAGE = "Something happened and we can't load the data :("
SUBMIT_FAILED_MESSAGE = "Your fact could not be saved, please try again"
VOTE_FAILED_MESSAGE = "Your vote could not be counted, please try again"

Notifier = Callable[[str, RemoteFailure], None]


def log_notifier(message: str, failure: RemoteFailure):
    """Default notifier: log the failure for the user to see."""
    logger.warning(f"{message} ({failure})")


class FactCollection:
    """
    The list of facts currently shown, kept in sync with the store.

    Args:
        gateway: Object providing ``list_facts``, ``insert_fact`` and
            ``increment_vote`` coroutines (normally a RemoteFactGateway)
        notify: Called with a user-facing message whenever a store call fails
    """

    def __init__(self, gateway, notify: Optional[Notifier] = None):
        self.gateway = gateway
        self.notify = notify or log_notifier
        self.votes = VoteSessionGuard()
        self._snapshot = CollectionSnapshot()
        self._latest_request = 0

    @property
    def snapshot(self) -> CollectionSnapshot:
        return self._snapshot

    def _replace(self, **changes):
        self._snapshot = self._snapshot.model_copy(update=changes)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def set_filter(self, category: str = ALL_CATEGORIES) -> bool:
        """
        Switch the filter and load the matching facts.

        Returns:
            True if this fetch's result was applied, False if it failed or
            was superseded by a newer filter change
        """
        if not is_valid_filter(category):
            raise UnknownCategory(category)
        category = getattr(category, "value", category)

        self._latest_request += 1
        request_id = self._latest_request
        self._replace(filter=category, is_loading=True)

        try:
            facts = await self.gateway.list_facts(category)
        except RemoteFailure as failure:
            if request_id != self._latest_request:
                logger.debug(f"Ignoring failure of superseded fetch {request_id}")
                return False
            self._replace(is_loading=False)
            self.notify(LOAD_FAILED_MESSAGE, failure)
            return False
        except BaseException:
            if request_id == self._latest_request:
                self._replace(is_loading=False)
            raise

        if request_id != self._latest_request:
            logger.debug(
                f"Discarding stale fetch {request_id} for {category!r} "
                f"(latest is {self._latest_request})"
            )
            return False

        self._replace(facts=tuple(facts), is_loading=False)
        logger.info(f"Loaded {len(facts)} facts for {category!r}")
        return True

    # -------------------------------------------------------------------------
    # Local transitions
    # -------------------------------------------------------------------------

    def prepend_fact(self, fact: Fact):
        """Put a newly created fact at the head of the list."""
        self._replace(facts=(fact,) + self._snapshot.facts)

    def replace_fact(self, fact_id, updated: Fact) -> bool:
        """
        Swap the fact with ``fact_id`` for ``updated``, keeping its position.

        The list is not re-sorted. Returns False if the fact is not shown.
        """
        facts = self._snapshot.facts
        for index, fact in enumerate(facts):
            if fact.id == fact_id:
                self._replace(facts=facts[:index] + (updated,) + facts[index + 1:])
                return True
        logger.debug(f"Fact {fact_id} is not in the current list")
        return False

    # -------------------------------------------------------------------------
    # Store-backed operations
    # -------------------------------------------------------------------------

    async def submit_fact(self, text: str, source: str, category: str) -> Fact:
        """
        Validate, store and prepend a new fact.

        Raises:
            ValidationFailure: input rejected locally, nothing was sent
            RemoteFailure: the store call failed, the list is unchanged
        """
        problems = submission_problems(text, source, category)
        if problems:
            raise ValidationFailure(problems)

        category = getattr(category, "value", category)
        try:
            fact = await self.gateway.insert_fact(text, source, category)
        except RemoteFailure as failure:
            self.notify(SUBMIT_FAILED_MESSAGE, failure)
            raise

        self.prepend_fact(fact)
        return fact

    async def vote(self, fact_id, column: VoteColumn) -> Optional[Fact]:
        """
        Add one vote to a fact, at most once per session.

        Counters change only once the store returns the updated row.

        Returns:
            The updated fact, or None if the vote was refused or failed
        """
        if not self.votes.begin_vote(fact_id):
            logger.debug(f"Vote on fact {fact_id} refused ({self.votes.state_of(fact_id).value})")
            return None

        try:
            updated = await self.gateway.increment_vote(fact_id, column)
        except RemoteFailure as failure:
            self.votes.release_vote(fact_id)
            self.notify(VOTE_FAILED_MESSAGE, failure)
            return None
        except BaseException:
            # Cancelled or unexpected error: the vote was not counted
            self.votes.release_vote(fact_id)
            raise

        self.votes.record_vote(fact_id)
        self.replace_fact(fact_id, updated)
        return updated
