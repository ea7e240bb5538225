"""Request dispatcher: address assembly, single GET and envelope decoding.

Architecture:
    The dispatcher is the only place a query touches the network. It joins the
    endpoint base URI, the datapath and the encoded parameters, issues exactly
    one GET through the transport and decodes the body into the pydantic model
    requested by the caller. Every failure maps onto one of three errors:

    - TransportError: the request never produced an HTTP response
    - APIError: non-200 status (server message or raw status line)
    - DecodeError: 200 status but the body does not fit the model

Design Decisions:
    - Single shot: no retries or backoff; the first failure is final
    - Transport injection: any object with ``get(url) -> HTTPResponse`` works,
      which keeps tests free of sockets
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from ...core.config import redact_url
from ...core.exceptions import APIError, DecodeError, TransportError
from ...core.params import ParameterSet
from ...models import ErrorEnvelope
from .http_client import HTTPResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Transport(Protocol):
    """Minimal transport the dispatcher and the export poller depend on."""

    async def get(self, url: str) -> HTTPResponse: ...

    async def head(self, url: str) -> int: ...

    async def download(self, url: str, destination: str | Path) -> Path: ...


def build_url(base_uri: str, datapath: str, params: ParameterSet) -> str:
    """Join base URI, datapath and encoded parameters.

    A ``?`` is only emitted when there is at least one parameter.

    Examples:
        >>> build_url("https://api.enigma.io/v2/data/key", "us.gov", ParameterSet())
        'https://api.enigma.io/v2/data/key/us.gov'
    """
    uri = f"{base_uri}/{datapath}"
    if params:
        uri += "?" + params.encode()
    return uri


class RequestDispatcher:
    """Sends one GET per terminal query call and decodes the response."""

    def __init__(self, transport: Transport) -> None:
        self._t = transport

    @property
    def transport(self) -> Transport:
        return self._t

    async def dispatch(
        self,
        base_uri: str,
        datapath: str,
        params: ParameterSet,
        model: type[ModelT],
    ) -> ModelT:
        """Perform the request and decode it into ``model``.

        Raises:
            TransportError: Connection failure or timeout
            APIError: Non-200 status
            DecodeError: Body does not match ``model``
        """
        url = build_url(base_uri, datapath, params)
        logger.debug(
            "Dispatching request",
            extra={"url": redact_url(url), "model": model.__name__},
        )

        try:
            response = await self._t.get(url)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.debug("Transport failure", extra={"url": redact_url(url), "error": str(e)})
            raise TransportError(f"Request to {redact_url(url)} failed: {e}", cause=e) from e

        if response.status != 200:
            raise self._api_error(response)

        try:
            decoded = model.model_validate_json(response.body)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected {model.__name__} payload: {e.error_count()} validation error(s)",
                cause=e,
            ) from e

        logger.debug("Request completed successfully", extra={"model": model.__name__})
        return decoded

    @staticmethod
    def _api_error(response: HTTPResponse) -> APIError:
        try:
            envelope = ErrorEnvelope.model_validate_json(response.body)
        except ValidationError:
            logger.debug("Undecodable error body", extra={"status": response.status})
            return APIError(response.status_line, status_code=response.status)
        return APIError(envelope.info.additional, status_code=response.status)
