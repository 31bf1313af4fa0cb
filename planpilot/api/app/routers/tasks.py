from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from planpilot.api.app.deps import scoped_resource
from planpilot.api.app.models.task import TaskCreateRequest, TaskListItem, TaskOut, TaskUpdateRequest
from planpilot.api.app.services.identity import get_caller_id
from planpilot.api.app.services.records import Task
from planpilot.api.app.services.scoped import TASKS, ScopedResource

router = APIRouter(prefix="/events/{event_id}/tasks", tags=["tasks"])

tasks_dep = scoped_resource(TASKS)


@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    event_id: str,
    payload: TaskCreateRequest,
    caller_id: str = Depends(get_caller_id),
    tasks: ScopedResource[Task] = Depends(tasks_dep),
) -> TaskOut:
    task = Task(event_id=event_id, **payload.model_dump())
    return TaskOut.model_validate(tasks.create(caller_id, event_id, task))


@router.get("", response_model=list[TaskListItem])
def list_tasks(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    tasks: ScopedResource[Task] = Depends(tasks_dep),
) -> list[TaskListItem]:
    return [TaskListItem.model_validate(t) for t in tasks.list(caller_id, event_id)]


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    event_id: str,
    task_id: str,
    caller_id: str = Depends(get_caller_id),
    tasks: ScopedResource[Task] = Depends(tasks_dep),
) -> TaskOut:
    return TaskOut.model_validate(tasks.get(caller_id, event_id, task_id))


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    event_id: str,
    task_id: str,
    payload: TaskUpdateRequest,
    caller_id: str = Depends(get_caller_id),
    tasks: ScopedResource[Task] = Depends(tasks_dep),
) -> TaskOut:
    changes = payload.model_dump(exclude_unset=True)
    return TaskOut.model_validate(tasks.update(caller_id, event_id, task_id, changes))


@router.delete("/{task_id}", status_code=204, response_class=Response)
def delete_task(
    event_id: str,
    task_id: str,
    caller_id: str = Depends(get_caller_id),
    tasks: ScopedResource[Task] = Depends(tasks_dep),
) -> Response:
    tasks.delete(caller_id, event_id, task_id)
    return Response(status_code=204)
