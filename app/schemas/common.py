from typing import Annotated
from pydantic import Field

# largest value a BIGINT / SQLite INTEGER column can hold
MAX_DB_ID = 2**63 - 1

EntityId = Annotated[int, Field(gt=0, le=MAX_DB_ID)]
