# core/models/schedule.py
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Location:
    name: str
    point: Tuple[float, float]  # (lat, lon), см. http://www.geocoding.jp


def _whole_number(raw: dict, field: str) -> int:
    value = raw[field]
    # bool — подкласс int, но true/false часом не являются
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} должно быть целым числом, получено {value!r}")
    return value


@dataclass(frozen=True)
class ScheduleEntry:
    hours: int
    minutes: int
    location: Location
    screen_name: str = ""

    @classmethod
    def from_dict(cls, raw: dict) -> "ScheduleEntry":
        """
        Собирает запись из JSON-объекта вида
        {"hours": 7, "minutes": 30, "location": {"name": ..., "point": [lat, lon]}, "screenName": ...}.

        hours и minutes должны быть целыми числами JSON: 7.9 или true не
        совпадут ни с одной минутой, поэтому такие записи отвергаются.

        Raises:
            KeyError, TypeError, ValueError: если объект не похож на расписание
        """
        location = raw["location"]
        lat, lon = location["point"]
        return cls(
            hours=_whole_number(raw, "hours"),
            minutes=_whole_number(raw, "minutes"),
            location=Location(name=str(location["name"]), point=(float(lat), float(lon))),
            screen_name=str(raw.get("screenName", "")),
        )
