"""
HTTP client for the external column-inference service.

The service receives a small sample of rows and answers with

    {"mapping": {"time": ..., "event": ..., "group": ...},
     "confidence": 0.9,
     "reasoning": "..."}

Every failure mode (network error, timeout, non-success status, body
that is not a JSON object) is raised as CollaboratorError so that
resolve_mapping() has a single exception type to recover from.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from kmcurves.core.defaults import COLLABORATOR_PATH, COLLABORATOR_TIMEOUT
from kmcurves.core.exceptions import CollaboratorError
from kmcurves.inference._common import CollaboratorReply


class ColumnInferenceClient:
    """Async callable suitable as resolve_mapping()'s `infer_fn`.

    Parameters
    ----------
    base_url : str
        Service root, e.g. "http://localhost:5000".
    path : str
        Endpoint path.
    timeout : float
        Network timeout in seconds for the whole request.
    headers : mapping or None
        Extra request headers (auth tokens and the like).
    transport : httpx.AsyncBaseTransport or None
        Custom transport; tests pass httpx.MockTransport.
    """

    def __init__(
        self,
        base_url: str,
        *,
        path: str = COLLABORATOR_PATH,
        timeout: float = COLLABORATOR_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.path = path
        self.timeout = timeout
        self.headers = dict(headers or {})
        self._transport = transport

    async def __call__(self, rows: Sequence[Any]) -> CollaboratorReply | None:
        return await self.infer(rows)

    async def infer(self, rows: Sequence[Any]) -> CollaboratorReply | None:
        """POST the sample and parse the reply.

        Returns
        -------
        CollaboratorReply or None
            None when the service answered without a mapping.

        Raises
        ------
        CollaboratorError
            On timeout, network failure, non-success status or a
            malformed body.
        """
        if len(rows) == 0:
            return None

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers=self.headers,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self.path, json={"rows": list(rows)})
            except httpx.TimeoutException as e:
                raise CollaboratorError(
                    f"column inference timed out after {self.timeout}s",
                    reason="timeout",
                ) from e
            except httpx.HTTPError as e:
                raise CollaboratorError(
                    f"column inference request failed: {e}", reason="network",
                ) from e

        if not response.is_success:
            raise CollaboratorError(
                f"column inference failed with status {response.status_code}",
                status_code=response.status_code,
                reason="status",
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise CollaboratorError(
                "column inference returned a non-JSON body",
                status_code=response.status_code,
                reason="malformed",
            ) from e

        if not isinstance(payload, Mapping):
            raise CollaboratorError(
                f"column inference returned {type(payload).__name__}, expected object",
                status_code=response.status_code,
                reason="malformed",
            )

        reply = CollaboratorReply.coerce(payload)
        if reply is None or reply.mapping is None:
            return None
        return reply
