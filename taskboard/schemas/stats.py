from pydantic import BaseModel


class StatsResponse(BaseModel):
    total: int
    completed: int
    active: int
    overdue: int
