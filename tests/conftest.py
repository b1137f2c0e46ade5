"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import datetime, timezone

import pytest
from asgiref.sync import async_to_sync

from core.security.crypto import generate_key_pair
from heartbeats.infrastructure.repositories.django_heartbeat_repository import (
    DjangoHeartbeatRepository,
)
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from requestlogs.infrastructure.repositories.django_request_log_repository import (
    DjangoRequestLogRepository,
)
from teams.domain.team import KeyPair, Team, TeamSettings
from teams.infrastructure.repositories.django_team_repository import DjangoTeamRepository


@pytest.fixture(scope="session")
def key_pair():
    """RSA key pair shared by the whole session: (public PEM, private PEM)."""
    return generate_key_pair()


@pytest.fixture
def now():
    """Fixed reference time."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def team_entity(key_pair):
    """Fixture for a Team domain entity with default settings."""
    public_key, private_key = key_pair
    return Team(
        id=uuid.uuid4(),
        name="Acme",
        settings=TeamSettings(),
        key_pair=KeyPair(public_key=public_key, private_key=private_key),
    )


@pytest.fixture
def team_repository():
    """Fixture for TeamRepository."""
    return DjangoTeamRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def heartbeat_repository():
    """Fixture for HeartbeatRepository."""
    return DjangoHeartbeatRepository()


@pytest.fixture
def request_log_repository():
    """Fixture for RequestLogRepository."""
    return DjangoRequestLogRepository()


@pytest.fixture
def db_team(db, key_pair):
    """Fixture for a Team saved in database, with settings and a key pair."""
    from teams.infrastructure.models import KeyPair as KeyPairModel
    from teams.infrastructure.models import Team as TeamModel
    from teams.infrastructure.models import TeamSettings as TeamSettingsModel

    public_key, private_key = key_pair
    team = TeamModel.objects.create(name=f"Team {uuid.uuid4().hex[:8]}")
    TeamSettingsModel.objects.create(team=team)
    KeyPairModel.objects.create(team=team, public_key=public_key, private_key=private_key)
    return team


@pytest.fixture
def update_team_settings(db_team):
    """Fixture returning a function that updates the team settings row."""
    from teams.infrastructure.models import TeamSettings as TeamSettingsModel

    def update(**fields):
        TeamSettingsModel.objects.filter(team=db_team).update(**fields)

    return update


@pytest.fixture
def db_customer(db_team):
    """Fixture for a Customer of the team."""
    from teams.infrastructure.models import Customer

    return Customer.objects.create(team=db_team, full_name="Jane Doe", email="jane@example.com")


@pytest.fixture
def db_product(db_team):
    """Fixture for a Product of the team."""
    from teams.infrastructure.models import Product

    return Product.objects.create(team=db_team, name="Pro Plugin")


@pytest.fixture
def db_api_key(db_team):
    """Fixture for an API key of the team: (model, raw key)."""
    from teams.infrastructure.models import ApiKey

    api_key = ApiKey(team=db_team, name="tests")
    api_key.save()
    return api_key, api_key._raw_key  # pylint: disable=protected-access


@pytest.fixture
def issue_license(db_team, team_repository, license_repository):
    """Fixture returning a function that issues a license for the team."""
    handler = IssueLicenseHandler(
        team_repository=team_repository,
        license_repository=license_repository,
    )

    def issue(**kwargs):
        kwargs.setdefault("team_id", db_team.id)
        return async_to_sync(handler.handle)(IssueLicenseCommand(**kwargs))

    return issue


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
