"""
Infrastructure module: builds relay services from configuration.
"""

from .bootstrap import RelayServices, create_llm_backend, get_services

__all__ = [
    "RelayServices",
    "create_llm_backend",
    "get_services",
]
