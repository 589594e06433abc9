# Routes package __init__.py - re-exports routers for main.py convenience
from .trainer import router as trainer_router

__all__ = ['trainer_router']
