"""
서명 요청 파이프라인

canonical(정규화) -> signer(서명) -> dispatcher(전송) -> normalizer(결과 분류)
"""

from binance_rest.pipeline.canonical import canonicalize
from binance_rest.pipeline.client import BinanceRestClient, PipelineConfig
from binance_rest.pipeline.dispatcher import (
    HttpResponse,
    PreparedRequest,
    RawOutcome,
    TransportFailure,
    dispatch,
    prepare_request,
)
from binance_rest.pipeline.normalizer import (
    normalize,
    remap_embedded_error,
    remap_reject_reason,
)
from binance_rest.pipeline.signer import append_signature, sign

__all__ = [
    "BinanceRestClient",
    "PipelineConfig",
    "HttpResponse",
    "PreparedRequest",
    "RawOutcome",
    "TransportFailure",
    "append_signature",
    "canonicalize",
    "dispatch",
    "normalize",
    "prepare_request",
    "remap_embedded_error",
    "remap_reject_reason",
    "sign",
]
