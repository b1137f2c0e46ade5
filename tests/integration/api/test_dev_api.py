"""
Integration tests for the developer license issuance API.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import PlaintextLicenseKey
from core.security.crypto import decrypt_license_key, derive_lookup_key


def issue_url(team_id):
    return f"/api/v1/dev/teams/{team_id}/licenses"


@pytest.fixture
def auth_client(api_client, db_api_key):
    """API client authenticated with the team API key."""
    _, raw_key = db_api_key
    api_client.credentials(HTTP_X_API_KEY=raw_key)
    return api_client


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicenseAPI:
    """Tests for the issue license endpoint."""

    def test_issue_license(self, auth_client, db_team, db_customer, db_product):
        """Test issuing a license with bindings and limits."""
        response = auth_client.post(
            issue_url(db_team.id),
            {
                "customerIds": [str(db_customer.id)],
                "productIds": [str(db_product.id)],
                "expirationType": "NONE",
                "seats": 3,
                "ipLimit": 5,
                "metadata": [{"key": "plan", "value": "pro"}],
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        PlaintextLicenseKey(data["licenseKey"])
        assert data["teamId"] == str(db_team.id)
        assert data["seats"] == 3
        assert data["ipLimit"] == 5
        assert data["customerIds"] == [str(db_customer.id)]
        assert data["productIds"] == [str(db_product.id)]
        assert data["suspended"] is False

        from licenses.infrastructure.models import License

        stored = License.objects.get(id=data["id"])  # pylint: disable=no-member
        assert stored.license_key != data["licenseKey"]
        assert decrypt_license_key(stored.license_key) == data["licenseKey"]
        assert stored.license_key_lookup == derive_lookup_key(data["licenseKey"], db_team.id)

    def test_issue_with_bearer_token(self, api_client, db_team, db_api_key):
        """Test the API key may be sent as a bearer token."""
        _, raw_key = db_api_key
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {raw_key}")

        response = api_client.post(
            issue_url(db_team.id), {"expirationType": "NONE"}, format="json"
        )

        assert response.status_code == 201

    def test_issued_key_validates(self, auth_client, db_team):
        """Test an issued key is accepted by the heartbeat endpoint."""
        issued = auth_client.post(
            issue_url(db_team.id), {"expirationType": "NONE"}, format="json"
        ).json()

        response = auth_client.post(
            f"/api/v1/license/{db_team.id}/heartbeat",
            {"licenseKey": issued["licenseKey"], "clientIdentifier": "device-x-0001"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["result"]["code"] == "VALID"

    def test_supplied_key(self, auth_client, db_team):
        """Test issuing with a caller supplied key."""
        key = "ABCDE-12345-FGHIJ-67890-KLMNO"

        response = auth_client.post(
            issue_url(db_team.id), {"licenseKey": key, "expirationType": "NONE"}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["licenseKey"] == key

    def test_duplicate_key_conflicts(self, auth_client, db_team):
        """Test a supplied key already issued in the team."""
        body = {"licenseKey": "ABCDE-12345-FGHIJ-67890-KLMNO", "expirationType": "NONE"}

        first = auth_client.post(issue_url(db_team.id), body, format="json")
        second = auth_client.post(issue_url(db_team.id), body, format="json")

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "CONFLICT"

    def test_duration_from_creation(self, auth_client, db_team):
        """Test a DURATION license starting at creation gets its date immediately."""
        response = auth_client.post(
            issue_url(db_team.id),
            {"expirationType": "DURATION", "expirationDays": 7, "expirationStart": "CREATION"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["expirationDate"] is not None

    def test_duration_from_activation(self, auth_client, db_team):
        """Test a DURATION license starting at activation has no date yet."""
        response = auth_client.post(
            issue_url(db_team.id),
            {"expirationType": "DURATION", "expirationDays": 7, "expirationStart": "ACTIVATION"},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["expirationDate"] is None
        assert response.json()["expirationStart"] == "ACTIVATION"

    def test_date_in_past_rejected(self, auth_client, db_team):
        """Test a DATE license must expire in the future."""
        past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()

        response = auth_client.post(
            issue_url(db_team.id),
            {"expirationType": "DATE", "expirationDate": past},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_LICENSE_DATA"

    def test_unknown_customer(self, auth_client, db_team):
        """Test customer ids must belong to the team."""
        response = auth_client.post(
            issue_url(db_team.id),
            {"expirationType": "NONE", "customerIds": [str(uuid.uuid4())]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CUSTOMER_NOT_FOUND"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"expirationType": "SOMETIMES"},
            {"expirationType": "NONE", "seats": 0},
            {"expirationType": "NONE", "licenseKey": "bad-key"},
            {"expirationType": "NONE", "customerIds": ["not-a-uuid"]},
        ],
    )
    def test_invalid_body(self, auth_client, db_team, payload):
        """Test malformed bodies are rejected."""
        response = auth_client.post(issue_url(db_team.id), payload, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_missing_api_key(self, api_client, db_team):
        """Test the endpoint requires an API key."""
        response = api_client.post(issue_url(db_team.id), {"expirationType": "NONE"}, format="json")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "MISSING_API_KEY"

    def test_invalid_api_key(self, api_client, db_team):
        """Test an unknown API key is rejected."""
        api_client.credentials(HTTP_X_API_KEY="api_not_a_real_key")

        response = api_client.post(issue_url(db_team.id), {"expirationType": "NONE"}, format="json")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_API_KEY"

    def test_other_team(self, auth_client, db):
        """Test an API key cannot issue licenses for another team."""
        response = auth_client.post(
            issue_url(uuid.uuid4()), {"expirationType": "NONE"}, format="json"
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"
