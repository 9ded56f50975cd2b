import json
from unittest.mock import MagicMock

import pytest

from thankbot import create_app
from thankbot.store import StoreError

from conftest import my_thanks_payload, thank_payload


def test_ping_returns_pong(post_interaction):
    response = post_interaction({"type": 1})
    assert response.status_code == 200
    assert json.loads(response.get_data()) == {"type": 1}
    assert response.mimetype != "application/json"


def test_thank_scenario(post_interaction, store):
    response = post_interaction(thank_payload("U1", "U2"))

    assert response.status_code == 200
    assert response.mimetype == "application/json"
    assert response.get_json() == {
        "type": 4,
        "data": {"content": "<@U2> -- you received thanks from <@U1>!"},
    }
    assert store.get("U2") == "1"


def test_my_thanks_after_thank(post_interaction):
    post_interaction(thank_payload("U1", "U2"))
    response = post_interaction(my_thanks_payload("U2"))
    assert response.get_json()["data"]["content"] == "You've received 1 thanks :tada:"


def test_my_thanks_without_thanks(post_interaction):
    response = post_interaction(my_thanks_payload("U3"))
    assert response.get_json() == {"type": 4, "data": {"content": "You don't have any thanks yet!"}}


def test_unknown_command_is_ephemeral_error(post_interaction):
    response = post_interaction({"type": 2, "member": {"user": {"id": "U1"}}, "data": {"name": "foo", "type": 1}})
    assert response.status_code == 200
    assert response.get_json() == {
        "type": 4,
        "data": {"content": "Something went wrong. Please try again.", "flags": 64},
    }


def test_invalid_json_after_valid_signature(client, signing_key):
    body = b"not json"
    signature = signing_key.sign(b"1" + body).signature.hex()
    response = client.post("/", data=body, headers={"X-Signature-Ed25519": signature, "X-Signature-Timestamp": "1"})
    assert response.status_code == 400


def test_store_failure_becomes_ephemeral_error(signing_key):
    store = MagicMock()
    store.increment.side_effect = StoreError("connection refused")
    app = create_app(store=store, public_key=signing_key.verify_key.encode().hex())

    body = b'{"type": 2, "member": {"user": {"id": "U1"}}, "data": {"name": "thank", "type": 1, "options": [{"value": "U2"}]}}'
    signature = signing_key.sign(b"1" + body).signature.hex()
    response = app.test_client().post(
        "/", data=body, headers={"X-Signature-Ed25519": signature, "X-Signature-Timestamp": "1"}
    )

    assert response.status_code == 200
    assert response.get_json()["data"] == {"content": "Something went wrong. Please try again.", "flags": 64}


def test_health_check(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "OK"


@pytest.mark.parametrize("payload", [
    {"type": 2, "member": {"user": {"id": "U1"}}, "data": {"name": "thank", "type": 1, "options": ["U2"]}},
    {"type": 2, "member": {"user": {"id": "U1"}}, "data": {"name": "thank", "type": 1, "options": {"value": "U2"}}},
    {"type": 2, "member": {"user": {"id": "U1"}},
     "data": {"name": "Thank", "type": 3, "resolved": {"messages": ["m"]}}},
    {"type": 2, "member": "U1", "data": {"name": "thank", "type": 1, "options": [{"value": "U2"}]}},
])
def test_malformed_command_is_ephemeral_error(post_interaction, store, payload):
    response = post_interaction(payload)
    assert response.status_code == 200
    assert response.get_json() == {
        "type": 4,
        "data": {"content": "Something went wrong. Please try again.", "flags": 64},
    }
    assert store.get("U2") is None


def test_corrupt_counter_is_ephemeral_error(post_interaction, store):
    store.put("U2", "abc")
    response = post_interaction(my_thanks_payload("U2"))
    assert response.status_code == 200
    assert response.get_json()["data"] == {"content": "Something went wrong. Please try again.", "flags": 64}
