from datetime import date, datetime
from typing import Optional, Union

BIRTHDATE_FORMAT = "%d/%m/%Y"
CONNECTED_FORMAT = "%B %d, %Y"


def encode_date(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """Render a date as DD/MM/YYYY, None when absent"""
    if value is None:
        return None
    return value.strftime(BIRTHDATE_FORMAT)


def decode_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse DD/MM/YYYY; an empty string means no date"""
    if value is None or isinstance(value, date):
        if isinstance(value, datetime):
            return value.date()
        return value
    if not isinstance(value, str):
        raise ValueError("date must be a string in DD/MM/YYYY format")
    value = value.strip()
    if value == "":
        return None
    try:
        return datetime.strptime(value, BIRTHDATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"invalid date {value!r}, expected DD/MM/YYYY")


def encode_connected(value: Optional[datetime]) -> str:
    """Render a connection timestamp as 'January 02, 2006', empty when pending"""
    if value is None:
        return ""
    return value.strftime(CONNECTED_FORMAT)


def decode_connected(value: Union[str, datetime, None]) -> Union[str, datetime, None]:
    """Accept the 'January 02, 2006' form back; other strings are left to pydantic"""
    if value == "":
        return None
    if isinstance(value, str):
        try:
            return datetime.strptime(value, CONNECTED_FORMAT)
        except ValueError:
            return value
    return value
