# Routers package
from . import appointments_router
from . import customers_router

__all__ = [
    "appointments_router",
    "customers_router",
]
