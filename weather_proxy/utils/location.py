# weather_proxy/utils/location.py

from typing import NamedTuple, Optional


class Location(NamedTuple):
    """기상청 격자 좌표(nx, ny)를 가진 조회 대상 지역"""
    name: str
    nx: int
    ny: int


# 광역 지자체 10곳. 프로세스 시작 시 한 번 로드되고 이후 변경되지 않음
LOCATIONS: tuple[Location, ...] = (
    Location("서울특별시", 60, 127),
    Location("경기도", 60, 120),
    Location("강원도", 73, 134),
    Location("충청북도", 69, 107),
    Location("충청남도", 68, 100),
    Location("전라북도", 63, 89),
    Location("경상북도", 89, 91),
    Location("전라남도", 51, 67),
    Location("경상남도", 91, 77),
    Location("제주특별자치도", 52, 38),
)

_BY_NAME = {loc.name: loc for loc in LOCATIONS}


def get_location(name: str) -> Optional[Location]:
    return _BY_NAME.get(name)
