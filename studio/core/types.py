from datetime import datetime
from typing import Annotated
from pydantic import AfterValidator
from studio.core.intervals import normalize_datetime

# Timestamps as the store keeps them: naive UTC, millisecond precision.
UtcDatetime = Annotated[datetime, AfterValidator(normalize_datetime)]
