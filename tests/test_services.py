"""Tests for the task store adapters."""

import json
from pathlib import Path

import httpx
import pytest

from todo_manager.controller import TaskListController
from todo_manager.models import Task
from todo_manager.services import (
    HttpTaskService,
    InMemoryTaskService,
    JsonFileTaskService,
    StoreError,
    create_task_service,
)

from tests.conftest import MockContext
from tests.fakes import seed_tasks


class TestInMemoryTaskService:
    """Tests for InMemoryTaskService."""

    @pytest.mark.asyncio
    async def test_ids_continue_after_seed(self):
        service = InMemoryTaskService(seed_tasks())

        task = await service.create_task("Buy milk")

        assert task.id == 3
        assert task.done is False
        assert task.created_at

    @pytest.mark.asyncio
    async def test_list_keeps_insertion_order(self):
        service = InMemoryTaskService()
        await service.create_task("first")
        await service.create_task("second")

        names = [t.name for t in await service.list_tasks()]
        assert names == ["first", "second"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self):
        service = InMemoryTaskService(seed_tasks())

        await service.update_task(0, "Feed the cat", True)
        await service.delete_task(1)

        tasks = await service.list_tasks()
        assert [t.id for t in tasks] == [0, 2]
        assert tasks[0].name == "Feed the cat"
        assert tasks[0].done is True

    @pytest.mark.asyncio
    async def test_unknown_ids_raise_store_error(self):
        service = InMemoryTaskService()

        with pytest.raises(StoreError) as exc_info:
            await service.update_task(5, "x", True)
        assert exc_info.value.operation == "update"

        with pytest.raises(StoreError):
            await service.delete_task(5)

    def test_seed_without_id_rejected(self):
        with pytest.raises(ValueError):
            InMemoryTaskService([Task(id=None, name="draft")])


class TestJsonFileTaskService:
    """Tests for JsonFileTaskService."""

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, tmp_path: Path):
        service = JsonFileTaskService(tmp_path / "tasks" / "tasks.json")
        assert await service.list_tasks() == []

    @pytest.mark.asyncio
    async def test_create_persists(self, tmp_path: Path):
        path = tmp_path / "tasks" / "tasks.json"
        service = JsonFileTaskService(path)

        task = await service.create_task("Buy milk")

        data = json.loads(path.read_text())
        assert data["items"][0]["id"] == task.id
        assert data["items"][0]["name"] == "Buy milk"
        assert data["items"][0]["done"] is False
        assert not path.with_suffix(".json.tmp").exists()

        # A second instance sees the same data
        other = JsonFileTaskService(path)
        assert [t.name for t in await other.list_tasks()] == ["Buy milk"]

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self, tmp_path: Path):
        service = JsonFileTaskService(tmp_path / "tasks.json")
        task = await service.create_task("Buy milk")

        await service.update_task(task.id, "Buy oat milk", True)

        [stored] = await service.list_tasks()
        assert stored.name == "Buy oat milk"
        assert stored.done is True
        assert stored.created_at == task.created_at

    @pytest.mark.asyncio
    async def test_delete(self, tmp_path: Path):
        service = JsonFileTaskService(tmp_path / "tasks.json")
        first = await service.create_task("first")
        second = await service.create_task("second")

        await service.delete_task(first.id)

        assert [t.id for t in await service.list_tasks()] == [second.id]

    @pytest.mark.asyncio
    async def test_unknown_id(self, tmp_path: Path):
        service = JsonFileTaskService(tmp_path / "tasks.json")

        with pytest.raises(StoreError) as exc_info:
            await service.update_task("nope", "x", False)
        assert json.loads(exc_info.value.payload)["id"] == "nope"

        with pytest.raises(StoreError):
            await service.delete_task("nope")

    @pytest.mark.asyncio
    async def test_corrupt_file(self, tmp_path: Path):
        path = tmp_path / "tasks.json"
        path.write_text("{not json")
        service = JsonFileTaskService(path)

        with pytest.raises(StoreError) as exc_info:
            await service.list_tasks()
        assert exc_info.value.operation == "list"

    @pytest.mark.asyncio
    async def test_undecodable_file_is_store_error(self, tmp_path: Path):
        path = tmp_path / "tasks.json"
        path.write_bytes(b'{"items": [{"id": "a", "name": "\xff\xfe"}]}')
        service = JsonFileTaskService(path)
        controller = TaskListController(service)

        with pytest.raises(StoreError):
            await service.list_tasks()
        assert await controller.refresh() is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("items", [[{"id": [1], "name": "x"}], [{"id": None}], "oops"])
    async def test_malformed_items_are_store_error(self, tmp_path: Path, items):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"items": items}))
        service = JsonFileTaskService(path)
        controller = TaskListController(service)

        with pytest.raises(StoreError) as exc_info:
            await service.list_tasks()
        assert exc_info.value.operation == "list"
        assert await controller.refresh() is False


def _task_server():
    """Build a MockTransport handler backed by a small in-memory list."""
    tasks = [
        {"id": 0, "name": "Feed the dog", "done": False},
        {"id": 1, "name": "Wash the car", "done": True},
    ]
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path

        if path == "/api/tasks" and request.method == "GET":
            return httpx.Response(200, json=tasks)

        if path == "/api/tasks" and request.method == "POST":
            body = json.loads(request.content)
            created = {"id": len(tasks), "name": body["name"], "done": body["done"]}
            tasks.append(created)
            return httpx.Response(201, json=created)

        task_id = int(path.rsplit("/", 1)[-1])
        match = [t for t in tasks if t["id"] == task_id]
        if not match:
            return httpx.Response(404, json={"error": "not found"})

        if request.method == "PUT":
            body = json.loads(request.content)
            match[0].update(name=body["name"], done=body["done"])
            return httpx.Response(204)

        if request.method == "DELETE":
            tasks.remove(match[0])
            return httpx.Response(204)

        return httpx.Response(405)

    return handler, tasks, requests


class TestHttpTaskService:
    """Tests for HttpTaskService using httpx.MockTransport."""

    def _service(self, handler) -> HttpTaskService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpTaskService("http://store.test/api/", client=client)

    @pytest.mark.asyncio
    async def test_list(self):
        handler, _, _ = _task_server()
        service = self._service(handler)

        tasks = await service.list_tasks()

        assert tasks == [
            Task(id=0, name="Feed the dog", done=False),
            Task(id=1, name="Wash the car", done=True),
        ]

    @pytest.mark.asyncio
    async def test_create_sends_name_and_not_done(self):
        handler, tasks, requests = _task_server()
        service = self._service(handler)

        created = await service.create_task("Buy milk")

        assert created == Task(id=2, name="Buy milk", done=False)
        assert json.loads(requests[-1].content) == {"name": "Buy milk", "done": False}

    @pytest.mark.asyncio
    async def test_update_and_delete(self):
        handler, tasks, requests = _task_server()
        service = self._service(handler)

        await service.update_task(1, "Wash the car", False)
        assert requests[-1].method == "PUT"
        assert str(requests[-1].url) == "http://store.test/api/tasks/1"
        assert tasks[1]["done"] is False

        await service.delete_task(0)
        assert [t["id"] for t in tasks] == [1]

    @pytest.mark.asyncio
    async def test_not_found_is_store_error(self):
        handler, _, _ = _task_server()
        service = self._service(handler)

        with pytest.raises(StoreError) as exc_info:
            await service.delete_task(99)
        assert exc_info.value.operation == "delete"
        assert "404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_is_store_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = self._service(handler)

        with pytest.raises(StoreError) as exc_info:
            await service.create_task("Buy milk")
        assert json.loads(exc_info.value.payload)["name"] == "Buy milk"

    @pytest.mark.asyncio
    async def test_bad_body_is_store_error(self):
        service = self._service(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(StoreError):
            await service.list_tasks()

    @pytest.mark.asyncio
    async def test_non_list_body_is_store_error(self):
        service = self._service(lambda request: httpx.Response(200, json={"items": []}))

        with pytest.raises(StoreError):
            await service.list_tasks()

    @pytest.mark.asyncio
    async def test_task_without_id_rejected_before_any_write(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[{"id": None, "name": "ghost", "done": False}])

        controller = TaskListController(self._service(handler))

        assert await controller.refresh() is False
        assert controller.tasks == ()
        assert [(r.method, r.url.path) for r in requests] == [("GET", "/api/tasks")]

    @pytest.mark.asyncio
    async def test_item_calls_never_target_the_collection(self):
        handler, tasks, requests = _task_server()
        service = self._service(handler)

        with pytest.raises(StoreError) as exc_info:
            await service.delete_task(None)
        assert exc_info.value.operation == "delete"

        with pytest.raises(StoreError):
            await service.update_task(None, "x", True)

        assert requests == []
        assert len(tasks) == 2

    @pytest.mark.asyncio
    async def test_string_done_flag_is_store_error(self):
        service = self._service(
            lambda request: httpx.Response(200, json=[{"id": 1, "name": "x", "done": "false"}])
        )

        with pytest.raises(StoreError):
            await service.list_tasks()

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        handler, _, _ = _task_server()
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        service = HttpTaskService("http://store.test/api", client=client)

        await service.aclose()

        assert not client.is_closed
        await client.aclose()


class TestCreateTaskService:
    """Tests for the backend factory."""

    def test_memory_backend_seeded(self):
        with MockContext() as ctx:
            service = create_task_service(ctx.settings)
        assert isinstance(service, InMemoryTaskService)

    @pytest.mark.asyncio
    async def test_memory_backend_unseeded(self):
        with MockContext(seed_demo=False) as ctx:
            service = create_task_service(ctx.settings)
        assert await service.list_tasks() == []

    def test_file_backend_uses_workspace(self):
        with MockContext(store_backend="file") as ctx:
            service = create_task_service(ctx.settings)
            assert isinstance(service, JsonFileTaskService)
            assert service.storage_path == ctx.workspace_dir / "tasks" / "tasks.json"

    @pytest.mark.asyncio
    async def test_http_backend(self):
        with MockContext(store_backend="http", store_url="http://store.test/api") as ctx:
            service = create_task_service(ctx.settings)
        assert isinstance(service, HttpTaskService)
        assert service.base_url == "http://store.test/api"
        await service.aclose()

    def test_http_backend_needs_url(self):
        with MockContext(store_backend="http") as ctx:
            with pytest.raises(ValueError):
                create_task_service(ctx.settings)
