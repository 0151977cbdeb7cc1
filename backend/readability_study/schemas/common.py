from typing import Annotated

from pydantic import Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# integers the storage layer can hold (signed 64-bit INTEGER / BIGINT)
StoredInt = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
