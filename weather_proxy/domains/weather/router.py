# weather_proxy/domains/weather/router.py

from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, Query
from weather_proxy.domains.weather.schemas import RegionWeather
from weather_proxy.domains.weather.service import WeatherService, weather_service

router = APIRouter()

def get_weather_service() -> WeatherService:
    return weather_service

@router.get("/all", response_model=Dict[str, RegionWeather], response_model_by_alias=True)
async def get_all_weather(
    hour: Optional[int] = Query(default=None, ge=0, le=23, description="조회할 시각 (0-23), 없으면 현재"),
    service: WeatherService = Depends(get_weather_service),
):
    """전 지역 날씨. DB 에 없으면 기상청 API 를 호출하여 채운다"""
    return await service.get_weather(hour)

@router.get("/available-hours", response_model=List[int])
async def get_available_hours(service: WeatherService = Depends(get_weather_service)):
    """오늘 DB 에 저장된 예보 시각 목록"""
    return await service.get_available_hours()
