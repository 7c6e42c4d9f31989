"""
Shared query parameter types.
"""
from datetime import date
from typing import Annotated, Optional

from fastapi import Query

StartDate = Annotated[Optional[date], Query(description="Inclusive first day")]
EndDate = Annotated[Optional[date], Query(description="Inclusive last day")]
