"""
The "share a fact" form.

Holds the user's draft while it is being edited and submitted. The draft
is only cleared once the store has accepted the fact.
"""

import logging
from typing import Optional

from factfusion.collection import FactCollection
from factfusion.gateway import RemoteFailure
from factfusion.models import Fact
from factfusion.validation import ValidationFailure, remaining_characters


logger = logging.getLogger(__name__)


class FactForm:
    """Draft state for a new fact and its submit flow."""

    def __init__(self, collection: FactCollection):
        self.collection = collection
        self.text = ""
        self.source = ""
        self.category = ""
        self.is_open = False
        self.is_uploading = False

    @property
    def remaining(self) -> int:
        """Characters left before the text limit."""
        return remaining_characters(self.text)

    def toggle(self) -> bool:
        self.is_open = not self.is_open
        return self.is_open

    def clear(self):
        self.text = ""
        self.source = ""
        self.category = ""

    async def submit(self) -> Optional[Fact]:
        """
        Send the draft to the store.

        On invalid input or a store failure the draft and the open form are
        left as they are so the user can correct or retry.

        Returns:
            The stored fact, or None if nothing was stored
        """
        if self.is_uploading:
            return None

        self.is_uploading = True
        try:
            fact = await self.collection.submit_fact(self.text, self.source, self.category)
        except ValidationFailure as e:
            logger.debug(f"Draft not submittable: {e}")
            return None
        except RemoteFailure:
            return None
        finally:
            self.is_uploading = False

        self.clear()
        self.is_open = False
        return fact
