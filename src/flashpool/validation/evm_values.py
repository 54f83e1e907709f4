from decimal import Decimal
from typing import Annotated

from pydantic import Field

from flashpool.constants import DECIMAL_PLACES, MAX_UINT128, MIN_UINT128

type ValidatedUint128 = Annotated[int, Field(strict=True, ge=MIN_UINT128, le=MAX_UINT128)]

type ValidatedFeeRate = Annotated[Decimal, Field(ge=0, decimal_places=DECIMAL_PLACES)]
