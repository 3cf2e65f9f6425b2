"""
Counters shown on the current user's dashboard.
"""

from pydantic import BaseModel, ConfigDict, Field


class MyCountData(BaseModel):
    """Response of GET users/me/count."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    favorites_count: int = Field(0, alias="favoritesCount")
    notes_count: int = Field(0, alias="notesCount")
    organizations_count: int = Field(0, alias="organizationsCount")
    report_count: int = Field(0, alias="reportCount")
    subtasks_count: int = Field(0, alias="subtasksCount")
    tasks_count: int = Field(0, alias="tasksCount")
