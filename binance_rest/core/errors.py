"""
예외 정의

파이프라인은 실패를 결과 값(binance_rest.core.results)으로 반환하고
예외를 던지지 않음. 아래 예외는 결과를 예외로 바꾸고 싶은 호출자를 위한
Result.unwrap() / to_exception() 과 설정 파일 로더에서만 사용.
"""


class BinanceApiError(Exception):
    """Binance API 에러

    API 응답에서 에러 코드를 받았을 때 발생.
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Binance API Error [{code}]: {message}")


class TransportFailureError(Exception):
    """네트워크 계층 실패 (DNS, 연결 거부, TLS, 타임아웃)"""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Transport failure: {cause!r}")


class ResponseDecodeError(Exception):
    """응답 본문을 JSON으로 해석할 수 없음"""

    def __init__(self, cause: BaseException, body: str = ""):
        self.cause = cause
        self.body = body
        super().__init__(f"Response decode failure: {cause}")


class ConfigMissingError(Exception):
    """API 키 또는 시크릿 누락"""

    def __init__(self, message: str = "Secret or API key missing"):
        self.message = message
        super().__init__(message)


class SignatureError(Exception):
    """서명 생성 실패 (잘못된 개인키 형식 등)"""
    pass
