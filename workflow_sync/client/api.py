from __future__ import annotations

import logging
from typing import Any, List

import httpx
from pydantic import ValidationError

from workflow_sync.client.config import ClientSettings
from workflow_sync.client.result import ErrorKind, Failure, Ok, Outcome
from workflow_sync.schemas.workflow import WorkflowDeleted, WorkflowOut

logger = logging.getLogger(__name__)


class WorkflowApiClient:
    """HTTP client for the workflow REST API.

    Every method resolves to ``Ok`` or ``Failure``; transport errors, timeouts
    and unexpected payloads become ``Failure(ErrorKind.SERVICE, ...)``.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            headers={"Content-Type": "application/json"},
            timeout=self.settings.timeout_seconds,
            transport=transport,
        )

    async def list_workflows(self, token: str) -> Outcome[List[WorkflowOut]]:
        outcome = await self._request("GET", "/api/workflows", token, "Failed to fetch workflows")
        if isinstance(outcome, Failure):
            return outcome
        data = outcome.value
        if not isinstance(data, list):
            return self._malformed("Failed to fetch workflows", data)
        try:
            return Ok([WorkflowOut.model_validate(item) for item in data])
        except ValidationError:
            return self._malformed("Failed to fetch workflows", data)

    async def create_workflow(self, token: str, name: str) -> Outcome[WorkflowOut]:
        outcome = await self._request(
            "POST", "/api/workflows", token, "Failed to add workflow", json={"name": name}
        )
        return self._parse(outcome, WorkflowOut, "Failed to add workflow")

    async def update_workflow(self, token: str, workflow_id: int, name: str) -> Outcome[WorkflowOut]:
        outcome = await self._request(
            "PUT",
            f"/api/workflows/{workflow_id}",
            token,
            "Failed to update workflow",
            json={"name": name},
        )
        return self._parse(outcome, WorkflowOut, "Failed to update workflow")

    async def delete_workflow(self, token: str, workflow_id: int) -> Outcome[WorkflowOut]:
        outcome = await self._request(
            "DELETE", f"/api/workflows/{workflow_id}", token, "Failed to delete workflow"
        )
        parsed = self._parse(outcome, WorkflowDeleted, "Failed to delete workflow")
        if isinstance(parsed, Failure):
            return parsed
        return Ok(parsed.value.workflow)

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        failure_message: str,
        json: dict[str, Any] | None = None,
    ) -> Outcome[Any]:
        context = {"method": method, "path": path}
        logger.debug(f"{method} {path}", extra=context)
        try:
            response = await self.client.request(
                method,
                path,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TimeoutException:
            logger.warning(f"{method} {path} timed out", extra=context)
            return Failure(ErrorKind.SERVICE, failure_message)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {path} failed: {exc}", extra=context)
            return Failure(ErrorKind.SERVICE, failure_message)

        if response.is_success:
            try:
                return Ok(response.json())
            except ValueError:
                return self._malformed(failure_message, response.text)

        kind = _kind_for_status(response.status_code)
        message = failure_message
        if kind in (ErrorKind.CLIENT_INPUT, ErrorKind.NOT_FOUND):
            message = _detail(response) or failure_message
        logger.info(
            f"{method} {path} -> {response.status_code}",
            extra={**context, "status_code": response.status_code},
        )
        return Failure(kind, message)

    def _parse(self, outcome: Outcome[Any], model, failure_message: str) -> Outcome[Any]:
        if isinstance(outcome, Failure):
            return outcome
        try:
            return Ok(model.model_validate(outcome.value))
        except ValidationError:
            return self._malformed(failure_message, outcome.value)

    @staticmethod
    def _malformed(failure_message: str, payload: Any) -> Failure:
        logger.warning(f"Unexpected response payload: {payload!r}")
        return Failure(ErrorKind.SERVICE, failure_message)

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> WorkflowApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code == 400:
        return ErrorKind.CLIENT_INPUT
    if status_code in (401, 403):
        return ErrorKind.AUTH
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    return ErrorKind.SERVICE


def _detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        if isinstance(detail, str) and detail.strip():
            return detail
    return None
