"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest
from factories import NOW
from rest_framework.test import APIClient

from festival.domain import AttendeeInfo
from festival.stores.memory_store import MemoryFestivalStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def store() -> MemoryFestivalStore:
    return MemoryFestivalStore()


@pytest.fixture
def leader_info() -> AttendeeInfo:
    return AttendeeInfo(
        first_name="Ana",
        last_name="Ruiz",
        email="ana@example.com",
        phone="+971500000001",
        country="AE",
        level="advanced",
    )


@pytest.fixture
def follower_info() -> AttendeeInfo:
    return AttendeeInfo(
        first_name="Sam",
        last_name="Okafor",
        email="sam@example.com",
        phone="+971500000002",
        country="AE",
        level="intermediate",
    )
