from pydantic import BaseModel


class SweepReport(BaseModel):
    """Outcome of one background sweep run"""

    examined: int = 0
    processed: int = 0
    failed: int = 0
