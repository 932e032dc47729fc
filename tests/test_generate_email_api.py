import pytest
from fastapi.testclient import TestClient

from app import main
from app.main import HEALTH_MESSAGE, build_relay, create_app
from utility.config import Settings
from utility.email_relay import EmailRelay
from utility.exceptions import ConfigurationError, ProviderError
from utility.response_parser import EMAIL_SENTINEL, MAPPING_SENTINEL

LEAVE_REPLY = (
    "ENGLISH_EMAIL_START\nSubject: Leave Request\n\nDear Manager,\n\nI need leave today.\nENGLISH_EMAIL_END\n\n"
    "MAPPING_START\nमुझे आज छुट्टी चाहिए। -> I need a leave today.\nMAPPING_END"
)


class FakeGenerator:
    """Stands in for the Gemini client; records every prompt it receives."""

    def __init__(self, reply: str = LEAVE_REPLY, error: Exception = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def client(generator):
    app = create_app(relay=EmailRelay(generator), settings=Settings(gemini_api_key="test-key"))
    return TestClient(app)


def test_health_route(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == HEALTH_MESSAGE


def test_generate_email_success(client, generator):
    response = client.post("/generate-email", json={"hindiText": "मुझे आज छुट्टी चाहिए।"})

    assert response.status_code == 200
    assert response.json() == {
        "englishEmail": "Subject: Leave Request\n\nDear Manager,\n\nI need leave today.",
        "hindiEnglishMapping": ["मुझे आज छुट्टी चाहिए। -> I need a leave today."],
    }
    assert len(generator.prompts) == 1
    assert "मुझे आज छुट्टी चाहिए।" in generator.prompts[0]


@pytest.mark.parametrize("body", [{}, {"hindiText": ""}, {"hindiText": "   "}, {"hindiText": None}, {"hindiText": 42}])
def test_missing_or_empty_text_is_400(client, generator, body):
    response = client.post("/generate-email", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Hindi text is required."}
    assert generator.prompts == []


def test_malformed_json_is_400(client, generator):
    response = client.post(
        "/generate-email",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
    assert generator.prompts == []


def test_unparseable_reply_is_still_200_with_sentinels(client, generator):
    generator.reply = "Dear Manager, I need leave today."

    response = client.post("/generate-email", json={"hindiText": "छुट्टी"})

    assert response.status_code == 200
    assert response.json() == {
        "englishEmail": EMAIL_SENTINEL,
        "hindiEnglishMapping": [MAPPING_SENTINEL],
    }


@pytest.mark.parametrize("provider_message, user_message", [
    ("API key not valid. Please pass a valid API key.",
     "API key error. Please check your GEMINI_API_KEY in the .env file."),
    ("Resource has been exhausted (e.g. check quota).",
     "API quota exceeded or rate limited. Please try again later."),
    ("Prompt was blocked by safety filters (SAFETY)",
     "Content potentially violates safety guidelines. Please rephrase your request."),
    ("socket closed",
     "Failed to generate email. Please try again."),
])
def test_provider_errors_are_classified_500(client, generator, provider_message, user_message):
    generator.error = ProviderError(provider_message)

    response = client.post("/generate-email", json={"hindiText": "छुट्टी"})

    assert response.status_code == 500
    assert response.json() == {"error": user_message}
    # exactly one attempt, no retry
    assert len(generator.prompts) == 1


def test_unexpected_generator_exception_is_generic_500(client, generator):
    generator.error = RuntimeError("boom")

    response = client.post("/generate-email", json={"hindiText": "छुट्टी"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate email. Please try again."}


def test_missing_api_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_relay(Settings(gemini_api_key=None))


def test_run_without_api_key_exits_before_serving(monkeypatch):
    def fail_if_called(*args, **kwargs):
        raise AssertionError("server should not start")

    monkeypatch.setattr(main.uvicorn, "run", fail_if_called)
    monkeypatch.setattr(main.app.state, "settings", Settings(gemini_api_key=None))

    with pytest.raises(SystemExit) as excinfo:
        main.run()

    assert excinfo.value.code == 1


def test_startup_builds_relay_from_settings():
    app = create_app(settings=Settings(gemini_api_key="test-key"))

    with TestClient(app) as client:
        assert isinstance(client.app.state.relay, EmailRelay)
        assert client.get("/").status_code == 200
