"""Task → model selection. Text prompts on the mid tier, screenshot cloning on frontier."""

from __future__ import annotations

from bentogrid.config import settings

_TASK_MODEL_MAP = {
    "layout": "mid",
    "vision_layout": "frontier",
}


def get_model_for_task(task: str) -> str:
    tier = _TASK_MODEL_MAP.get(task, "cheap")
    if tier == "cheap":
        return settings.model_cheap
    elif tier == "mid":
        return settings.model_mid
    else:
        return settings.model_frontier
