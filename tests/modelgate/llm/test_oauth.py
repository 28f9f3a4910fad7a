import pytest
import requests

from modelgate.llm.errors import CredentialError
from modelgate.llm.oauth import ClientCredentialsToken

TOKEN_URL = "https://auth.example.com/oauth/token"


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _token(session, clock=None):
    return ClientCredentialsToken(
        TOKEN_URL, "cid", "secret", session=session, clock=clock or Clock()
    )


def test_fetches_with_client_credentials(fake_session, fake_response):
    fake_session.add(
        "post", TOKEN_URL, fake_response(200, {"access_token": "t1", "expires_in": 3600})
    )

    assert _token(fake_session).get() == "t1"

    _, _, kwargs = fake_session.calls[0]
    assert kwargs["data"] == {"grant_type": "client_credentials"}
    assert kwargs["auth"] == ("cid", "secret")


def test_reuses_token_until_near_expiry(fake_session, fake_response):
    clock = Clock()
    fake_session.add(
        "post", TOKEN_URL, fake_response(200, {"access_token": "t1", "expires_in": 3600})
    )
    fake_session.add(
        "post", TOKEN_URL, fake_response(200, {"access_token": "t2", "expires_in": 3600})
    )
    token = _token(fake_session, clock)

    assert token.get() == "t1"
    clock.now += 3000
    assert token.get() == "t1"
    assert len(fake_session.calls) == 1

    clock.now += 600
    assert token.get() == "t2"
    assert len(fake_session.calls) == 2


@pytest.mark.parametrize(
    "response_args",
    [
        (401, {"error": "invalid_client"}),
        (200, {"token_type": "bearer"}),
        (200, None),
    ],
)
def test_bad_token_responses_are_credential_errors(
    fake_session, fake_response, response_args
):
    fake_session.add("post", TOKEN_URL, fake_response(*response_args))

    with pytest.raises(CredentialError):
        _token(fake_session).get()


def test_network_failure_is_credential_error(fake_session):
    fake_session.add("post", TOKEN_URL, requests.ConnectionError("refused"))

    with pytest.raises(CredentialError):
        _token(fake_session).get()
