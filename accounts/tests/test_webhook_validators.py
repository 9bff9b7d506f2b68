import pytest

from accounts.exceptions import WebhookVerificationError
from accounts.webhook_validators import SvixWebhookValidator


SECRET = "whsec_dGVzdC13ZWJob29rLXNlY3JldA=="
BODY = b'{"type": "user.created"}'
NOW = 1_700_000_000


@pytest.fixture
def validator():
    return SvixWebhookValidator(SECRET, tolerance_seconds=300)


def signed_headers(validator, message_id="msg_1", timestamp=NOW, body=BODY):
    return {
        "Svix-Id": message_id,
        "Svix-Timestamp": str(timestamp),
        "Svix-Signature": f"v1,{validator.sign(message_id, timestamp, body)}",
    }


class TestSvixWebhookValidator:
    def test_valid_signature(self, validator):
        assert validator.validate(signed_headers(validator), BODY, now=NOW) is True

    def test_any_listed_signature_is_accepted(self, validator):
        headers = signed_headers(validator)
        headers["Svix-Signature"] = f"v1,b2xkLXNpZ25hdHVyZQ== {headers['Svix-Signature']}"

        assert validator.validate(headers, BODY, now=NOW) is True

    def test_secret_without_prefix(self, validator):
        bare = SvixWebhookValidator("dGVzdC13ZWJob29rLXNlY3JldA==")

        assert bare.sign("msg_1", NOW, BODY) == validator.sign("msg_1", NOW, BODY)

    def test_tampered_body(self, validator):
        with pytest.raises(WebhookVerificationError):
            validator.validate(signed_headers(validator), b'{"type": "user.deleted"}', now=NOW)

    def test_wrong_version(self, validator):
        headers = signed_headers(validator)
        headers["Svix-Signature"] = headers["Svix-Signature"].replace("v1,", "v2,")

        with pytest.raises(WebhookVerificationError):
            validator.validate(headers, BODY, now=NOW)

    @pytest.mark.parametrize("missing", ["Svix-Id", "Svix-Timestamp", "Svix-Signature"])
    def test_missing_header(self, validator, missing):
        headers = signed_headers(validator)
        del headers[missing]

        with pytest.raises(WebhookVerificationError):
            validator.validate(headers, BODY, now=NOW)

    def test_invalid_timestamp(self, validator):
        headers = signed_headers(validator)
        headers["Svix-Timestamp"] = "yesterday"

        with pytest.raises(WebhookVerificationError):
            validator.validate(headers, BODY, now=NOW)

    def test_timestamp_outside_tolerance(self, validator):
        headers = signed_headers(validator)

        with pytest.raises(WebhookVerificationError):
            validator.validate(headers, BODY, now=NOW + 301)
        assert validator.validate(headers, BODY, now=NOW + 300) is True

    def test_missing_secret(self):
        validator = SvixWebhookValidator("")

        with pytest.raises(WebhookVerificationError):
            validator.sign("msg_1", NOW, BODY)
