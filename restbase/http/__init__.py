"""HTTP client and interceptor pipeline."""

from restbase.http.client import ApiClient
from restbase.http.interceptors import (
    AuthInterceptor,
    ErrorInterceptor,
    Interceptor,
    InterceptorChain,
    LanguageInterceptor,
    LoggingInterceptor,
    default_interceptors,
)

__all__ = [
    "ApiClient",
    "AuthInterceptor",
    "ErrorInterceptor",
    "Interceptor",
    "InterceptorChain",
    "LanguageInterceptor",
    "LoggingInterceptor",
    "default_interceptors",
]
