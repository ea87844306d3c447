from pydantic import BaseModel


class SwitchState(BaseModel):
    """Point-in-time export of a switch, suitable for JSON output."""

    id: str
    name: str
    state: bool
    last_change: int
    current_w: float
