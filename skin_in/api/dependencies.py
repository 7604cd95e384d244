# skin_in/api/dependencies.py
"""
Request-scoped accessors for the objects created by the application factory.
"""

from fastapi import Request

from skin_in.classifier import ModelRegistry, SkinAnalyzer
from skin_in.config import Settings
from skin_in.contacts import ContactStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> ModelRegistry:
    return request.app.state.registry


def get_analyzer(request: Request) -> SkinAnalyzer:
    return request.app.state.analyzer


def get_contact_store(request: Request) -> ContactStore:
    return request.app.state.contacts
