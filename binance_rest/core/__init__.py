"""
핵심 모듈

타입, 상수, 설정(자격 증명) 로더, 로깅 설정.
"""
