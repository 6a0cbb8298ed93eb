"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Self

from product_service.domain.exceptions import InvalidPriceError

DEFAULT_PRICE_SCALE = 8

# Total digits of the stored price column
PRICE_PRECISION = 20
MAX_PRICE_INTEGER_DIGITS = PRICE_PRECISION - DEFAULT_PRICE_SCALE


@dataclass(frozen=True)
class Price:
    """Positive decimal price with a fixed number of fractional digits.

    Prices are kept as Decimal end to end; floats are converted through
    their string form so that 12.5 becomes Decimal("12.5"), not its
    binary approximation.

    Attributes:
        amount: Price quantized to `scale` fractional digits.
        scale: Number of fractional digits.
    """

    amount: Decimal
    scale: int = DEFAULT_PRICE_SCALE

    @classmethod
    def parse(cls, value: Any, scale: int = DEFAULT_PRICE_SCALE) -> Self:
        """Parse and validate a raw price.

        Args:
            value: Price as Decimal, int, float or numeric string.
            scale: Maximum number of fractional digits.

        Returns:
            Price quantized to the given scale.

        Raises:
            InvalidPriceError: If the value is not a positive decimal
                with at most `scale` fractional digits, or if its integer
                part does not fit the stored precision.
        """
        if isinstance(value, bool) or value is None:
            raise InvalidPriceError(value, "not a decimal number")

        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidPriceError(value, "not a decimal number") from None

        if not amount.is_finite():
            raise InvalidPriceError(value, "not a finite number")
        if amount <= 0:
            raise InvalidPriceError(value, "must be a positive number")
        if amount.adjusted() >= MAX_PRICE_INTEGER_DIGITS:
            raise InvalidPriceError(value, "too large")

        exponent = amount.as_tuple().exponent
        if isinstance(exponent, int) and -exponent > scale:
            raise InvalidPriceError(
                value, f"must have at most {scale} decimal places"
            )

        return cls(amount=amount.quantize(Decimal(1).scaleb(-scale)), scale=scale)

    def __str__(self) -> str:
        """Return string representation.

        Returns:
            Amount with all `scale` fractional digits.
        """
        return str(self.amount)
