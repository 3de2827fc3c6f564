"""
Core modules for getpro.
"""
from .body import RequestBody
from .client import HttpClient
from .dispatcher import RedirectBudget, RequestDispatcher, Target
from .request import Request
from .response import Response

__all__ = [
    "HttpClient",
    "RedirectBudget",
    "Request",
    "RequestBody",
    "RequestDispatcher",
    "Response",
    "Target",
]
