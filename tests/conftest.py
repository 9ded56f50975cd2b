import json

import pytest
from nacl.signing import SigningKey

from thankbot import create_app
from thankbot.store import MemoryThanksStore


@pytest.fixture
def signing_key():
    return SigningKey.generate()


@pytest.fixture
def store():
    return MemoryThanksStore()


@pytest.fixture
def app(signing_key, store):
    public_key = signing_key.verify_key.encode().hex()
    return create_app(store=store, public_key=public_key)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def post_interaction(client, signing_key):
    """Posts a payload signed with the app's key."""
    def post(payload, timestamp="1700000000"):
        body = json.dumps(payload).encode()
        signature = signing_key.sign(timestamp.encode() + body).signature.hex()
        return client.post(
            "/",
            data=body,
            headers={
                "X-Signature-Ed25519": signature,
                "X-Signature-Timestamp": timestamp,
                "Content-Type": "application/json",
            },
        )
    return post


def thank_payload(invoking, target, name="thank"):
    return {
        "type": 2,
        "member": {"user": {"id": invoking}},
        "data": {"name": name, "type": 1, "options": [{"name": "user", "type": 6, "value": target}]},
    }


def my_thanks_payload(invoking):
    return {"type": 2, "member": {"user": {"id": invoking}}, "data": {"name": "my_thanks", "type": 1}}
