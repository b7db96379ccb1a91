"""
HTTP client for the Fact Fusion store.

Every call either returns rows exactly as the store sent them or raises
RemoteFailure. Nothing is retried: a failed call stays failed until the
user triggers it again.
"""

import logging
from enum import Enum
from typing import List, Optional

import httpx
from pydantic import ValidationError

from factfusion.categories import ALL_CATEGORIES
from factfusion.config import get_settings
from factfusion.models import Fact, VoteColumn


logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Why a call to the store failed."""
    NETWORK_ERROR = "NetworkError"
    CONSTRAINT_VIOLATION = "ConstraintViolation"
    UNKNOWN = "Unknown"


class RemoteFailure(Exception):
    """A store call failed; surfaced to the user, never retried."""

    def __init__(self, kind: FailureKind, message: str, status_code: Optional[int] = None):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message
        self.status_code = status_code


# Status codes meaning the store refused the payload itself
_CONSTRAINT_STATUSES = {400, 409, 422}


class RemoteFactGateway:
    """
    Async client for the store's /facts endpoints.

    Args:
        base_url: Store API root (default from settings)
        api_key: Shared service key sent as X-API-Key (default from settings)
        timeout: Per-request timeout in seconds (default from settings)
        transport: Optional httpx transport, used to point the client at an
            in-process app or a mock
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.store_url).rstrip("/") + "/"
        self.max_facts = settings.max_facts

        headers = {"User-Agent": f"FactFusion/{settings.app_version}"}
        key = api_key if api_key is not None else settings.api_key
        if key:
            headers["X-API-Key"] = key

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self.client.aclose()

    async def list_facts(self, category: str = ALL_CATEGORIES) -> List[Fact]:
        """Fetch facts for a category (or "all"), most interesting first."""
        params = {"limit": self.max_facts}
        if category != ALL_CATEGORIES:
            params["category"] = category

        rows = await self._request("GET", "facts/", params=params)
        if not isinstance(rows, list):
            raise RemoteFailure(FailureKind.UNKNOWN, "Expected a list of facts")
        return [self._parse_fact(row) for row in rows]

    async def insert_fact(self, text: str, source: str, category: str) -> Fact:
        """Create a fact and return the row the store created."""
        row = await self._request(
            "POST",
            "facts/",
            json={"text": text, "source": source, "category": category},
        )
        return self._parse_fact(row)

    async def increment_vote(self, fact_id: int, column: VoteColumn) -> Fact:
        """Add one vote to a fact and return the updated row."""
        row = await self._request(
            "POST",
            f"facts/{fact_id}/votes",
            json={"column": VoteColumn(column).value},
        )
        return self._parse_fact(row)

    async def _request(self, method: str, path: str, **kwargs):
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"HTTP {status} from store on {method} {path}")
            kind = (
                FailureKind.CONSTRAINT_VIOLATION
                if status in _CONSTRAINT_STATUSES
                else FailureKind.UNKNOWN
            )
            raise RemoteFailure(kind, _error_detail(e.response), status_code=status) from e
        except httpx.RequestError as e:
            logger.warning(f"Request error on {method} {path}: {e!r}")
            raise RemoteFailure(FailureKind.NETWORK_ERROR, str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.warning(f"Unreadable response body on {method} {path}")
            raise RemoteFailure(FailureKind.UNKNOWN, "Response was not JSON") from e

    @staticmethod
    def _parse_fact(row) -> Fact:
        try:
            return Fact.model_validate(row)
        except ValidationError as e:
            raise RemoteFailure(FailureKind.UNKNOWN, f"Malformed fact row: {e}") from e


def _error_detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    return str(detail) if detail else response.reason_phrase
