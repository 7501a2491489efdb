"""
LINE Schema Tests

Parsing of webhook payloads as LINE sends them.
"""

from transport.line.schemas import LineWebhookPayload, PushMessageRequest


class TestWebhookParsing:
    """Webhook payload parsing."""

    def test_parse_text_message_event(self):
        payload = LineWebhookPayload.model_validate({
            "destination": "Ubot",
            "events": [{
                "type": "message",
                "message": {"type": "text", "id": "1", "text": "Hello"},
                "source": {"type": "user", "userId": "U123"},
                "replyToken": "abc",
                "timestamp": 1707500000000,
            }],
        })

        event = payload.events[0]
        assert event.user_id == "U123"
        assert event.text == "Hello"
        assert event.reply_token == "abc"

    def test_verification_request_has_no_events(self):
        payload = LineWebhookPayload.model_validate({"destination": "Ubot", "events": []})
        assert payload.events == []

    def test_missing_events_defaults_to_empty(self):
        assert LineWebhookPayload.model_validate({}).events == []

    def test_sticker_event_has_no_text(self):
        payload = LineWebhookPayload.model_validate({
            "events": [{
                "type": "message",
                "message": {"type": "sticker", "id": "1", "packageId": "446", "stickerId": "1988"},
                "source": {"type": "user", "userId": "U123"},
            }],
        })
        assert payload.events[0].text is None

    def test_follow_event_has_user_but_no_text(self):
        payload = LineWebhookPayload.model_validate({
            "events": [{"type": "follow", "source": {"type": "user", "userId": "U123"}}],
        })
        event = payload.events[0]
        assert event.user_id == "U123"
        assert event.text is None

    def test_group_source_without_user_id(self):
        payload = LineWebhookPayload.model_validate({
            "events": [{
                "type": "message",
                "message": {"type": "text", "text": "hi"},
                "source": {"type": "group", "groupId": "C1"},
            }],
        })
        assert payload.events[0].user_id is None


class TestPushMessageRequest:
    def test_text_builder(self):
        body = PushMessageRequest.text("U123", "Hello").model_dump()
        assert body == {"to": "U123", "messages": [{"type": "text", "text": "Hello"}]}
