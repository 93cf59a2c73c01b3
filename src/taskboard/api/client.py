# src/taskboard/api/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..tasks.task_errors import TaskNotFound, TaskSaveFailed
from ..tasks.task_models import DeleteResult, Task

logger = logging.getLogger(__name__)


def _make_timeout(timeout_s: float) -> httpx.Timeout:
    return httpx.Timeout(timeout_s, connect=min(5.0, timeout_s))


def _error_message(response: httpx.Response) -> str:
    """
    Best-effort message from an error response.

    The backend answers errors as {"statusCode": ..., "message": ...};
    message can be a string or a list of validation messages.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        msg = data.get("message") or data.get("error")
        if isinstance(msg, list):
            return "; ".join(str(m) for m in msg)
        if msg:
            return str(msg)

    text = response.text.strip()
    return text[:200] if text else (response.reason_phrase or "request failed")


class HttpTaskApi:
    """
    REST client for the task backend.

    Retries and auth belong to the transport; this client makes exactly one
    request per call and reports delete failures as DeleteResult.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise RuntimeError("Task API base URL is not set. Set TASKBOARD_API_BASE_URL in your .env.")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=_make_timeout(float(timeout_seconds)),
        )

    async def fetch_tasks(self) -> list[Task]:
        response = await self._client.get("/tasks")
        response.raise_for_status()
        payload: Any = response.json()

        if isinstance(payload, dict):
            payload = payload.get("tasks", payload.get("data", []))
        if not isinstance(payload, list):
            raise RuntimeError(f"Unexpected /tasks payload: {type(payload).__name__}")

        tasks: list[Task] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            try:
                tasks.append(Task.from_api(item))
            except ValueError:
                logger.warning("Skipping task without id: %r", item)
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    async def create_task(self, fields: dict[str, Any]) -> Task:
        return await self._save("POST", "/tasks", "", fields)

    async def update_task(self, task_id: str, changes: dict[str, Any]) -> Task:
        return await self._save("PATCH", f"/tasks/{task_id}", task_id, changes)

    async def _save(self, method: str, url: str, task_id: str, body: dict[str, Any]) -> Task:
        try:
            response = await self._client.request(method, url, json=body)
        except httpx.HTTPError as e:
            logger.info("%s %s failed: %s", method, url, e.__class__.__name__)
            raise TaskSaveFailed(task_id, message=str(e) or e.__class__.__name__) from e

        if not response.is_success:
            message = _error_message(response)
            logger.info("%s %s rejected: %s %s", method, url, response.status_code, message)
            if response.status_code == 404 and task_id:
                raise TaskNotFound(task_id)
            raise TaskSaveFailed(task_id, status=response.status_code, message=message)

        try:
            payload: Any = response.json()
        except ValueError:
            payload = None
        # Some deployments wrap the saved entity: {"task": {...}}.
        if isinstance(payload, dict) and isinstance(payload.get("task"), dict):
            payload = payload["task"]
        if not isinstance(payload, dict):
            raise TaskSaveFailed(task_id, status=response.status_code, message="unexpected response body")
        try:
            return Task.from_api(payload)
        except ValueError as e:
            raise TaskSaveFailed(task_id, status=response.status_code, message=str(e)) from e

    async def delete_task(self, task_id: str) -> DeleteResult:
        try:
            response = await self._client.delete(f"/tasks/{task_id}")
        except httpx.HTTPError as e:
            logger.info("Delete request failed for task %s: %s", task_id, e.__class__.__name__)
            return DeleteResult.failure(message=str(e) or e.__class__.__name__)

        if response.is_success:
            return DeleteResult.success(response.status_code)

        message = _error_message(response)
        logger.info("Delete rejected for task %s: %s %s", task_id, response.status_code, message)
        return DeleteResult.failure(message=message, status=response.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
