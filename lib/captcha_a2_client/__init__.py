from .client import CaptchaA2Client
from .config_types import ClientConfig
from .errors import CaptchaA2Error, ClientError, UnexpectedResponseError
from .models import CaptchaChallenge, ServiceResponse

__all__ = [
    "CaptchaA2Client",
    "ClientConfig",
    "CaptchaA2Error",
    "ClientError",
    "UnexpectedResponseError",
    "CaptchaChallenge",
    "ServiceResponse",
]
