# src/tasklist/connectors/http_api.py

"""
HTTP connector (FastAPI).

Exposes the same store as the console:
- POST /projects                              {"name": ...}         -> 200 / 400
- GET  /projects                                                    -> {project: [task, ...]}
- POST /projects/{project}/tasks              {"description": ...}  -> 201 / 400 / 404
- PUT  /projects/{project}/tasks/{id}?deadline=dd-MM-yyyy           -> 201 / 400 / 404
- GET  /projects/view_by_deadline                                   -> {"deadlines": ..., "noDeadlineTasks": ...}

Unlike the console, malformed input never propagates: it becomes a 400.
Dates in responses are ISO-8601 (YYYY-MM-DD).
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..core.ports import ProjectView
from ..core.state import AppState
from ..tasks.task_models import Task, parse_deadline

logger = logging.getLogger(__name__)


class CreateProjectRequest(BaseModel):
    name: str | None = None


class CreateTaskRequest(BaseModel):
    description: str | None = None


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "description": task.description,
        "done": task.done,
        "deadline": task.deadline.isoformat() if task.deadline is not None else None,
    }


def _projects_to_dict(projects: ProjectView) -> dict[str, list[dict[str, Any]]]:
    return {name: [task_to_dict(t) for t in tasks] for name, tasks in projects.items()}


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI app around an existing AppState (shared with the console)."""
    app = FastAPI(title=str(getattr(state.settings, "app_name", "tasklist")))

    @app.exception_handler(RequestValidationError)
    async def _validation_as_bad_request(request: Request, exc: RequestValidationError):
        logger.info("Bad request %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.post("/projects", status_code=200)
    def create_project(body: CreateProjectRequest) -> Response:
        if body.name is None or not body.name.strip():
            raise HTTPException(status_code=400, detail="name is required")
        with state.lock:
            state.task_list.add_project(body.name)
        return Response(status_code=200)

    @app.get("/projects")
    def get_projects() -> dict[str, list[dict[str, Any]]]:
        with state.lock:
            return _projects_to_dict(state.task_list.all_projects())

    @app.get("/projects/view_by_deadline")
    def get_tasks_by_deadline() -> dict[str, Any]:
        with state.lock:
            by_deadline = state.task_list.tasks_by_deadline()
            no_deadline = state.task_list.tasks_without_deadline()
        return {
            "deadlines": {
                day.isoformat(): _projects_to_dict(projects) for day, projects in by_deadline.items()
            },
            "noDeadlineTasks": _projects_to_dict(no_deadline),
        }

    @app.post("/projects/{project}/tasks", status_code=201)
    def create_task(project: str, body: CreateTaskRequest) -> Response:
        if body.description is None or not body.description.strip():
            raise HTTPException(status_code=400, detail="description is required")
        with state.lock:
            added = state.task_list.add_task(project, body.description)
        if not added:
            raise HTTPException(status_code=404, detail="Project not found")
        return Response(status_code=201)

    @app.put("/projects/{project}/tasks/{task_id}", status_code=201)
    def update_deadline(project: str, task_id: int, deadline: str = Query(...)) -> Response:
        # Tasks are found by id alone; `project` only scopes the URL.
        try:
            day = parse_deadline(deadline)
        except ValueError:
            logger.info("Rejected deadline %r for task_id=%s", deadline, task_id)
            raise HTTPException(status_code=400, detail="deadline must be dd-MM-yyyy") from None
        with state.lock:
            updated = state.task_list.add_deadline(task_id, day)
        if not updated:
            raise HTTPException(status_code=404, detail="Task not found")
        return Response(status_code=201)

    return app


@dataclass
class HttpBackgroundRunner:
    thread: threading.Thread
    server: uvicorn.Server

    def stop(self) -> None:
        self.server.should_exit = True

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_http_in_background(state: AppState) -> HttpBackgroundRunner:
    """
    Serve the API from a background thread so the console REPL can run in parallel.

    uvicorn's own logging config is disabled (log_config=None); records go through
    the handlers installed by setup_logging().
    """
    settings = state.settings
    host = str(getattr(settings, "http_host", "127.0.0.1"))
    port = int(getattr(settings, "http_port", 8080))

    config = uvicorn.Config(create_app(state), host=host, port=port, log_config=None)
    server = uvicorn.Server(config)

    t = threading.Thread(target=server.run, name="tasklist-http", daemon=True)
    t.start()

    logger.info("HTTP API started on http://%s:%s", host, port)
    return HttpBackgroundRunner(thread=t, server=server)
