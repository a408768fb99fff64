"""
PlatformClient abstraction layer for content-generation providers.

Defines the interface every provider client implements and the shared
HTTP plumbing: per-call credential resolution, timed single requests,
and translation of httpx errors into the job engine's error taxonomy.
"""

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import httpx

from app.config import settings
from app.models.action_result import ActionResult
from app.models.platform_requests import PlatformRequest
from job_engine import (
    ErrorKind,
    NotConfiguredError,
    StatusCheckError,
    SubmissionError,
    TransientPollError,
)
from job_engine.poller import Sleep
from .credential_resolver import Credential, CredentialResolver
from .platform_catalog import load_platform

logger = logging.getLogger(__name__)

# Status-check responses worth another attempt
TRANSIENT_STATUS_CODES = frozenset({408, 425, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class ActionSpec:
    """
    One action accepted by a platform endpoint.

    Attributes:
        name: Action name in the request body
        endpoint: Provider path recorded in the usage log; may reference
                  request fields, e.g. "/v1/video/task/{task_id}"
        request_model: Pydantic model validating the parameters
        handler: Name of the client coroutine that runs the action
    """

    name: str
    endpoint: str
    request_model: type[PlatformRequest]
    handler: str

    def endpoint_for(self, request: PlatformRequest) -> str:
        try:
            return self.endpoint.format(**request.model_dump())
        except (KeyError, IndexError):
            return self.endpoint


def describe_http_error(exc: Exception) -> str:
    """
    Extract the most useful message from a failed provider call.

    Looks at ``error`` (string or ``{message}``) and ``message`` in a JSON
    error body before falling back to the raw body or exception text.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, str) and error:
                return error
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if body.get("message"):
                return str(body["message"])
            if error:
                return json.dumps(error)

        text = response.text.strip()
        return text or f"HTTP {response.status_code}"

    return str(exc) or exc.__class__.__name__


def error_text(error: Any) -> Optional[str]:
    """Message of a job-level ``error`` field, a string or ``{message}``."""
    if isinstance(error, dict):
        error = error.get("message")
    if error is None or error == "":
        return None
    return str(error)


class PlatformClient(ABC):
    """
    Abstract base class for provider clients.

    Clients hold configuration only. The credential is resolved at the
    start of every operation and is not kept on the client.

    Implementations:
    - OpenAIClient, GeminiClient, SeedreamClient: single request per action
    - KlingClient, VeoClient: submit + poll long-running video jobs
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.resolver = resolver
        self._transport = transport
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._sleep = sleep
        self._clock = clock

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Platform identifier, e.g. "openai"."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        pass

    @property
    @abstractmethod
    def actions(self) -> Dict[str, ActionSpec]:
        """Actions accepted by this platform's endpoint, keyed by name."""
        pass

    @property
    def display_name(self) -> str:
        return load_platform(self.platform_name)["displayName"]

    def auth_headers(self, secret: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {secret}",
            "Content-Type": "application/json",
        }

    def resolve_credential(self) -> Credential:
        """
        Raises:
            NotConfiguredError: If no credential is available
        """
        credential = self.resolver.resolve(self.platform_name)
        if credential is None:
            logger.warning(f"{self.platform_name} request rejected: no API key configured")
            raise NotConfiguredError(
                f"{self.display_name} client not configured. Please add an API key."
            )
        return credential

    def is_configured(self) -> bool:
        return self.resolver.resolve(self.platform_name) is not None

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def elapsed_ms(self, started: float) -> int:
        return int(round((self._clock() - started) * 1000))

    async def execute(self, action: str, request: PlatformRequest) -> ActionResult:
        spec = self.actions[action]
        handler = getattr(self, spec.handler)
        return await handler(request)

    async def request_json(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[dict] = None,
    ) -> Any:
        """
        Issue one request and decode the JSON body.

        Raises:
            httpx.HTTPStatusError: On a 4xx/5xx response
            httpx.HTTPError: On transport failures
            ValueError: If the body is not JSON
        """
        async with self.http_client() as client:
            response = await client.request(method, url, headers=headers, json=body)
            response.raise_for_status()
            return response.json()

    async def call(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        model: Optional[str] = None,
    ) -> ActionResult:
        """
        Run a single-request action and normalize the result.

        Duration covers only the provider call. A missing credential
        fails before any request is made.
        """
        try:
            credential = self.resolve_credential()
        except NotConfiguredError as e:
            return ActionResult.from_error(e, model=model)

        started = self._clock()
        try:
            data = await self.request_json(
                method, f"{self.base_url}{path}", self.auth_headers(credential.secret), body
            )
        except httpx.HTTPStatusError as e:
            message = describe_http_error(e)
            logger.error(f"{self.platform_name} {path} failed ({e.response.status_code}): {message}")
            return ActionResult(
                success=False,
                error=message,
                error_kind=ErrorKind.UPSTREAM.value,
                duration=self.elapsed_ms(started),
                status_code=e.response.status_code,
                model=model,
                api_key_id=credential.key_id,
            )
        except (httpx.HTTPError, ValueError) as e:
            message = describe_http_error(e)
            logger.error(f"{self.platform_name} {path} failed: {message}")
            return ActionResult(
                success=False,
                error=message,
                error_kind=ErrorKind.UPSTREAM.value,
                duration=self.elapsed_ms(started),
                status_code=502,
                model=model,
                api_key_id=credential.key_id,
            )

        return ActionResult.ok(
            data,
            duration=self.elapsed_ms(started),
            model=model,
            api_key_id=credential.key_id,
        )

    async def submit_json(self, url: str, headers: Dict[str, str], body: dict) -> Any:
        """
        Job creation call for long-running actions.

        Raises:
            SubmissionError: For any rejection or transport failure
        """
        try:
            return await self.request_json("POST", url, headers, body)
        except httpx.HTTPStatusError as e:
            raise SubmissionError(describe_http_error(e), status_code=e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            raise SubmissionError(describe_http_error(e), status_code=502) from e

    async def poll_json(self, url: str, headers: Dict[str, str]) -> Any:
        """
        Status-check call for long-running actions.

        Raises:
            TransientPollError: Transport errors, undecodable bodies and
                                TRANSIENT_STATUS_CODES responses
            StatusCheckError: Any other 4xx/5xx response
        """
        try:
            return await self.request_json("GET", url, headers)
        except httpx.HTTPStatusError as e:
            message = describe_http_error(e)
            if e.response.status_code in TRANSIENT_STATUS_CODES:
                raise TransientPollError(message, status_code=e.response.status_code) from e
            raise StatusCheckError(message, status_code=e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TransientPollError(describe_http_error(e)) from e
