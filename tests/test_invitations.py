"""Tests for the invitation link codec."""

import base64
import json
from urllib.parse import quote

import pytest

from agentbot.errors import MalformedPayloadError
from agentbot.models import CONNECTION_INVITATION_TYPE, ConnectionInvitation
from agentbot.services import (
    decode_connection_invitation,
    decode_invitation,
    encode_invitation,
    is_absolute_uri,
    parse_label,
)

ENDPOINT = "http://agents.test/agents/abc123"


def _uri_with(raw_value: str) -> str:
    return f"{ENDPOINT}?c_i={raw_value}"


def _b64(payload) -> str:
    return quote(base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii"), safe="")


class TestIsAbsoluteUri:
    """Tests for URI detection."""

    @pytest.mark.parametrize(
        "text",
        ["http://example.com", "https://x.org/path?c_i=abc", "  http://padded.io  "],
    )
    def test_absolute(self, text):
        """Test accepted URIs."""
        assert is_absolute_uri(text)

    @pytest.mark.parametrize(
        "text",
        [None, "", "hello there", "example.com/path", "/relative", "http://a b.com"],
    )
    def test_not_absolute(self, text):
        """Test rejected text."""
        assert not is_absolute_uri(text)


class TestEncodeDecode:
    """Tests for encode/decode."""

    def test_encoded_invitation_decodes_back(self):
        """Test that an encoded invitation carries its fields through."""
        invitation = ConnectionInvitation(
            label="Alice", recipient_keys=["key1"], service_endpoint=ENDPOINT
        )

        uri = encode_invitation(ENDPOINT, invitation.to_dict())

        assert uri.startswith(ENDPOINT + "?c_i=")
        assert decode_connection_invitation(uri) == invitation

    def test_existing_query_is_kept(self):
        """Test that c_i is appended to an endpoint that has a query."""
        uri = encode_invitation("http://h.test/a?x=1", {"@type": "t"})

        assert uri.startswith("http://h.test/a?x=1&c_i=")
        assert decode_invitation(uri) == {"@type": "t"}

    def test_plus_and_slash_survive_unescaped(self):
        """Test Base64 characters that a form decoder would mangle."""
        payload = {"@type": "t", "label": "??>>~~"}
        raw = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
        assert "+" in raw or "/" in raw

        assert decode_invitation(_uri_with(raw)) == payload

    def test_utf8_label(self):
        """Test non-ASCII labels."""
        uri = _uri_with(_b64({"@type": CONNECTION_INVITATION_TYPE, "label": "Zoë"}))

        assert parse_label(uri) == "Zoë"


class TestParseLabel:
    """Tests for label extraction."""

    def test_missing_label_is_unspecified(self):
        """Test the placeholder when the invitation has no label."""
        uri = _uri_with(_b64({"@type": CONNECTION_INVITATION_TYPE}))

        assert parse_label(uri) == "[unspecified]"

    def test_other_type_is_unspecified(self):
        """Test the placeholder for non-connection payloads."""
        uri = _uri_with(_b64({"@type": "something/else", "label": "Bob"}))

        assert parse_label(uri) == "[unspecified]"


class TestMalformedPayloads:
    """Tests for decode failures."""

    @pytest.mark.parametrize(
        "uri",
        [
            ENDPOINT,
            ENDPOINT + "?other=1",
            _uri_with("not*base64*at*all"),
            _uri_with(quote(base64.b64encode(b"\xff\xfe\xfd").decode("ascii"), safe="")),
            _uri_with(quote(base64.b64encode(b"{not json").decode("ascii"), safe="")),
            _uri_with(_b64(["a", "list"])),
            _uri_with(_b64({"label": "no type"})),
        ],
    )
    def test_raises_malformed(self, uri):
        """Test that every failure surfaces as MalformedPayloadError."""
        with pytest.raises(MalformedPayloadError):
            decode_invitation(uri)

    def test_connection_decode_requires_invitation_type(self):
        """Test the @type discriminator check."""
        uri = _uri_with(_b64({"@type": "something/else"}))

        with pytest.raises(MalformedPayloadError):
            decode_connection_invitation(uri)
