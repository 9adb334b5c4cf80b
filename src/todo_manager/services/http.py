"""Remote task store reached over HTTP.

Endpoints, relative to the base URL:
    GET    /tasks          -> [{"id", "name", "done", "created_at"}, ...]
    POST   /tasks          {"name", "done"} -> created task
    PUT    /tasks/{id}     {"id", "name", "done"}
    DELETE /tasks/{id}
"""

from typing import Any

import httpx

from todo_manager.logging import Loggers
from todo_manager.models import Task, TaskId
from todo_manager.services.base import StoreError, TaskService

logger = Loggers.store()


class HttpTaskService(TaskService):
    """Task store backed by a JSON-over-HTTP service.

    Every transport error, non-2xx response and undecodable body is
    raised as StoreError.

    Example:
        >>> service = HttpTaskService("https://tasks.example.com/api")
        >>> tasks = await service.list_tasks()
        >>> await service.aclose()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    def _collection_url(self) -> str:
        return f"{self.base_url}/tasks"

    def _item_url(self, task_id: TaskId, operation: str) -> str:
        if isinstance(task_id, bool) or not isinstance(task_id, (int, str)):
            raise StoreError(f"Cannot address task with id {task_id!r}", operation=operation)
        return f"{self.base_url}/tasks/{task_id}"

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        payload: str | None = None,
    ) -> httpx.Response:
        logger.debug("store_request", operation=operation, method=method, url=url)
        try:
            response = await self._client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreError(
                f"HTTP {e.response.status_code} from task store on {operation}",
                operation=operation,
                payload=payload,
            ) from e
        except httpx.RequestError as e:
            raise StoreError(
                f"Task store unreachable on {operation}: {e}",
                operation=operation,
                payload=payload,
            ) from e
        return response

    @staticmethod
    def _decode(response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(
                f"Task store sent an invalid body on {operation}",
                operation=operation,
            ) from e

    async def list_tasks(self) -> list[Task]:
        response = await self._request("list", "GET", self._collection_url())
        data = self._decode(response, "list")
        if not isinstance(data, list):
            raise StoreError("Task store list response is not a JSON array", operation="list")
        try:
            return [Task.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"Malformed task in list response: {e}", operation="list") from e

    async def create_task(self, name: str) -> Task:
        draft = Task(id=None, name=name, done=False)
        response = await self._request(
            "create",
            "POST",
            self._collection_url(),
            json={"name": name, "done": False},
            payload=draft.to_payload(),
        )
        data = self._decode(response, "create")
        try:
            return Task.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise StoreError(
                f"Malformed task in create response: {e}",
                operation="create",
                payload=draft.to_payload(),
            ) from e

    async def update_task(self, task_id: TaskId, name: str, done: bool) -> None:
        task = Task(id=task_id, name=name, done=done)
        await self._request(
            "update",
            "PUT",
            self._item_url(task_id, "update"),
            json={"id": task_id, "name": name, "done": done},
            payload=task.to_payload(),
        )

    async def delete_task(self, task_id: TaskId) -> None:
        await self._request("delete", "DELETE", self._item_url(task_id, "delete"))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
