"""설정 오류"""


class ConfigurationError(ValueError):
    """잘못된 설정 - 초기화 시점에 즉시 실패"""
