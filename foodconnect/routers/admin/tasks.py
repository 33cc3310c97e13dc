# foodconnect/routers/admin/tasks.py

import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, HTTPException, status

from foodconnect.schemas.admin import TaskInfo, TaskRunRequest
from foodconnect.schemas.common import StatusMessage
from foodconnect.tasks_registry import TASKS, get_tasks_list

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[TaskInfo])
def get_tasks_list_endpoint():
    """
    [ADMIN] Background jobs available for manual runs.
    """
    return get_tasks_list()


@router.post("/run", response_model=StatusMessage, status_code=status.HTTP_202_ACCEPTED)
async def run_task_endpoint(
    request_data: TaskRunRequest,
    background_tasks: BackgroundTasks
):
    """
    [ADMIN] Schedules one job, or all of them, to run after the response is sent.
    """
    task_name_to_run = request_data.task_name

    if task_name_to_run == "all":
        for data in TASKS.values():
            background_tasks.add_task(data["function"])
        message = "All background tasks have been scheduled to run."
        logger.info("All background tasks were manually triggered.")
    elif task_name_to_run in TASKS:
        background_tasks.add_task(TASKS[task_name_to_run]["function"])
        message = f"Task '{task_name_to_run}' has been scheduled to run."
        logger.info(f"Background task '{task_name_to_run}' was manually triggered.")
    else:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Task '{task_name_to_run}' not found.")

    return StatusMessage(status="accepted", message=message)
