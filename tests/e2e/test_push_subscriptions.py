"""End-to-end tests for push subscriptions."""

from fastapi.testclient import TestClient

from picket.domain.service import PushSender
from picket.domain.value import Role
from tests.harness import app_container, create_client_fixture, login_as

client = create_client_fixture()

SUBSCRIPTION = {
    "endpoint": "https://push.example/abc",
    "expirationTime": None,
    "keys": {"p256dh": "BNc...", "auth": "tBH..."},
}


async def _push_sender(container):
    return await container.get(PushSender)


class TestSubscriptionRoutes:
    def test_subscribe_notify_unsubscribe(self, client: TestClient):
        _, admin_headers = login_as(client, "admin@x.com", Role.ADMIN)
        _, headers = login_as(client, "anna@x.com")

        first = client.post("/subscriptions", json=SUBSCRIPTION, headers=headers)
        second = client.post("/subscriptions", json=SUBSCRIPTION, headers=headers)
        assert first.status_code == 201
        assert first.json()["subscription_id"] == second.json()["subscription_id"]

        notified = client.post(
            "/subscriptions/notify", json={"title": "Picket at noon"}, headers=admin_headers
        )
        assert notified.status_code == 200
        assert notified.json() == {"delivered": 1, "removed": 0}

        sender = client.portal.call(_push_sender, app_container(client))
        assert sender.sent == [("https://push.example/abc", {"title": "Picket at noon"})]

        removed = client.request(
            "DELETE",
            "/subscriptions",
            json={"endpoint": SUBSCRIPTION["endpoint"]},
            headers=headers,
        )
        assert removed.status_code == 204

        missing = client.request(
            "DELETE",
            "/subscriptions",
            json={"endpoint": SUBSCRIPTION["endpoint"]},
            headers=headers,
        )
        assert missing.status_code == 404

    def test_notify_is_admin_only(self, client: TestClient):
        _, headers = login_as(client, "p@x.com", Role.PICKETER)

        response = client.post(
            "/subscriptions/notify", json={"title": "Hi"}, headers=headers
        )

        assert response.status_code == 403

    def test_malformed_subscription(self, client: TestClient):
        _, headers = login_as(client, "anna@x.com")

        response = client.post(
            "/subscriptions", json={"endpoint": "https://push/x"}, headers=headers
        )

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["keys"]
