# weather_proxy/domains/weather/client.py

import asyncio
import logging
from datetime import datetime
from urllib.parse import unquote # 키 디코딩용

import requests

from weather_proxy.core.config import settings
from weather_proxy.core.exceptions import NetworkError, ParseError
from weather_proxy.domains.weather.schemas import CATEGORY_MAP, ForecastResult, ObservationAttributes
from weather_proxy.utils.location import Location

logger = logging.getLogger(__name__)

SUCCESS_CODE = "00"


class ForecastClient:
    """기상청 초단기예보 API 1회 호출 + 응답 파싱. DB 와는 무관함"""

    def __init__(self, api_key: str = None, base_url: str = None, timeout: float = None,
                 num_of_rows: int = None, session=None):
        # .env에서 가져온 키가 인코딩된 상태라면 디코딩해서 사용해야 requests에서 안전함
        self.api_key = unquote(api_key if api_key is not None else settings.DATA_API_KEY)
        self.base_url = base_url or settings.FORECAST_BASE_URL
        self.timeout = timeout or settings.FORECAST_TIMEOUT
        self.num_of_rows = num_of_rows or settings.FORECAST_NUM_OF_ROWS
        # None 이면 호출마다 requests.get (스레드 간 Session 공유 안 함)
        self.session = session

    def build_params(self, location: Location, base_date: str, base_time: str) -> dict:
        return {
            'serviceKey': self.api_key,
            'pageNo': '1',
            'numOfRows': str(self.num_of_rows),
            'dataType': 'JSON',
            'base_date': base_date,
            'base_time': base_time,
            'nx': str(location.nx),
            'ny': str(location.ny),
        }

    async def fetch(self, location: Location, base_date: str, base_time: str) -> dict:
        """
        발표일자(yyyyMMdd)/발표시각(HHmm) 기준 원본 응답(JSON dict)을 반환.
        연결 실패는 NetworkError, JSON 이 아닌 응답은 ParseError.
        """
        params = self.build_params(location, base_date, base_time)
        logger.debug(f"기상청 API 요청: {location.name} {base_date} {base_time} (nx={location.nx}, ny={location.ny})")

        try:
            # requests는 동기 라이브러리이므로 스레드에서 실행
            http = self.session or requests
            response = await asyncio.to_thread(
                http.get, self.base_url, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"API 호출 실패 ({location.name}): {e}") from e

        if response.status_code != 200:
            raise NetworkError(f"API 상태 코드 에러 ({location.name}): {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            # 인증키 오류 등은 200 + XML 본문으로 오는 경우가 있음
            raise ParseError(f"JSON 응답이 아님 ({location.name})") from e

    @staticmethod
    def extract(payload: dict, target_hour: str) -> ForecastResult:
        """
        fcstTime == target_hour ("1400") 인 항목만 골라 속성으로 매핑.
        같은 카테고리가 여러 번 나오면 마지막 값이 남는다.
        """
        if not isinstance(payload, dict) or not isinstance(payload.get('response'), dict):
            raise ParseError("response 필드 없음")

        response = payload['response']
        header = response.get('header')
        if not isinstance(header, dict):
            raise ParseError("header 필드 없음")
        result_code = header.get('resultCode')
        if result_code != SUCCESS_CODE:
            raise ParseError(f"API 결과 에러: {result_code} {header.get('resultMsg')}")

        try:
            items = response['body']['items']['item']
        except (KeyError, TypeError) as e:
            raise ParseError("body.items.item 필드 없음") from e
        if not isinstance(items, list):
            raise ParseError("item 이 리스트가 아님")

        values = {}
        fcst_date = fcst_time = None
        for item in items:
            if not isinstance(item, dict):
                raise ParseError(f"item 항목이 객체가 아님: {item!r}")
            if item.get('fcstTime') != target_hour:
                continue
            attr = CATEGORY_MAP.get(item.get('category'))
            if attr is None:
                continue
            if item.get('fcstValue') is None or not item.get('fcstDate'):
                raise ParseError(f"{item.get('category')} 항목에 fcstValue/fcstDate 없음")
            values[attr] = str(item['fcstValue'])
            fcst_date, fcst_time = item.get('fcstDate'), item.get('fcstTime')

        return ForecastResult(
            attributes=ObservationAttributes(**values),
            fcst_date=fcst_date,
            fcst_time=fcst_time,
        )

    async def fetch_forecast(self, location: Location, issued_at: datetime, target_hour: str) -> ForecastResult:
        payload = await self.fetch(
            location,
            issued_at.strftime("%Y%m%d"),
            issued_at.strftime("%H%M"),
        )
        return self.extract(payload, target_hour)
