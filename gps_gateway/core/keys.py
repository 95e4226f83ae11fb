"""
Object key construction for GPS data lookups.

Keys are hierarchical paths:

    {prefix}/{dataset}/{environment}/{user_id}/{vehicle_id}/{year}/{MonthName}/{day}/{filename}

e.g. gps_data-20241008T164836Z-001/gps_data/dev/u1/v1/2024/April/15/gps_data.json

The month slot carries the English month name, not the number the
client sends. This module has no I/O and no framework imports.
"""

from dataclasses import dataclass

from .errors import InvalidMonthError, MissingParametersError

# Fixed table rather than calendar.month_name, which follows the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class KeyLayout:
    """The literal segments surrounding the per-request parts of a key."""
    prefix: str = "gps_data-20241008T164836Z-001"
    dataset: str = "gps_data"
    environment: str = "dev"
    filename: str = "gps_data.json"


@dataclass(frozen=True)
class LookupRequest:
    """
    The five client-supplied fields identifying one day of GPS data.

    Values are kept as the client sent them; only the month is
    translated, and only when the key is built.
    """
    user_id: str
    vehicle_id: str
    year: str
    month: str
    day: str

    @classmethod
    def from_params(
        cls,
        user_id: str | None,
        vehicle_id: str | None,
        year: str | None,
        month: str | None,
        day: str | None,
    ) -> "LookupRequest":
        """
        Build a request from raw query values.

        Raises MissingParametersError naming every absent or empty field.
        """
        values = {
            "user_id": user_id,
            "vehicle_id": vehicle_id,
            "year": year,
            "month": month,
            "day": day,
        }
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise MissingParametersError(missing)
        return cls(**values)


def month_name(month: str) -> str:
    """
    Translate a zero-padded month number ("01".."12") into its English name.

    Single digits, surrounding whitespace, signs and anything outside
    the range are rejected.
    """
    if len(month) != 2 or not (month.isascii() and month.isdigit()):
        raise InvalidMonthError(month)

    number = int(month)
    if not 1 <= number <= 12:
        raise InvalidMonthError(month)

    return MONTH_NAMES[number - 1]


def build_object_key(request: LookupRequest, layout: KeyLayout = KeyLayout()) -> str:
    """Build the storage key for a lookup. Raises InvalidMonthError."""
    parts = [
        layout.prefix,
        layout.dataset,
        layout.environment,
        request.user_id,
        request.vehicle_id,
        request.year,
        month_name(request.month),
        request.day,
        layout.filename,
    ]
    return "/".join(parts)
