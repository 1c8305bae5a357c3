from .client import HttpClient
from .models import RequestParams, UploadFileParams, ResponseType, Cookie, RequestFailure, RequestResult

__all__ = ["HttpClient", "RequestParams", "UploadFileParams", "ResponseType", "Cookie", "RequestFailure", "RequestResult"]
