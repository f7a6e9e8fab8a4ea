# weather_proxy/core/exceptions.py


class WeatherProxyError(Exception):
    """서비스 공통 예외"""


class ForecastError(WeatherProxyError):
    """예보 API 한 번의 호출이 실패한 경우 (fallback 대상)"""


class NetworkError(ForecastError):
    """API 서버 연결 실패, 타임아웃, 200 이외의 상태 코드"""


class ParseError(ForecastError):
    """resultCode 가 '00' 이 아니거나 응답 구조가 예상과 다른 경우"""


class PersistenceConflict(WeatherProxyError):
    """같은 (지역, 예보시각) 레코드가 이미 저장되어 있음"""

    def __init__(self, region: str, observed_at):
        super().__init__(f"이미 저장된 예보: {region} @ {observed_at}")
        self.region = region
        self.observed_at = observed_at
