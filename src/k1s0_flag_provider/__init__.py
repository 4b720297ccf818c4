"""k1s0 remote flag provider library."""

from .client import EvaluationClient
from .config import ProviderOptions, load_options
from .decoder import decode_response
from .exceptions import (
    ErrorCode,
    FlagResolutionError,
    ProviderConfigError,
    ProviderConfigErrorCodes,
)
from .http_client import HttpEvaluationClient
from .memory import InMemoryEvaluationClient
from .models import (
    SDK_DEFAULT_VARIANT,
    EvaluationContext,
    EvaluationResponse,
    FlagType,
    Reason,
    ResolutionDetails,
)
from .provider import PROVIDER_NAME, RemoteFlagProvider
from .reconciler import ValueKind, kind_of, reconcile
from .transport import HttpTransport, create_transport

__all__ = [
    "EvaluationClient",
    "EvaluationContext",
    "EvaluationResponse",
    "ErrorCode",
    "FlagResolutionError",
    "FlagType",
    "HttpEvaluationClient",
    "HttpTransport",
    "InMemoryEvaluationClient",
    "PROVIDER_NAME",
    "ProviderConfigError",
    "ProviderConfigErrorCodes",
    "ProviderOptions",
    "Reason",
    "RemoteFlagProvider",
    "ResolutionDetails",
    "SDK_DEFAULT_VARIANT",
    "ValueKind",
    "create_transport",
    "decode_response",
    "kind_of",
    "load_options",
    "reconcile",
]
