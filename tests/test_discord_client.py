from unittest.mock import Mock, patch
import json
import os
import sys

import pytest
import requests

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ingest.discord_client import (
    Destination,
    WebhookDispatcher,
    build_payload,
    chunked,
    parse_webhooks,
)
from ingest.errors import DispatchError
from ingest.schemas import Author, Embed


def make_embeds(count):
    return [
        Embed(
            title=f"CTF {i}",
            description="desc",
            url=f"https://ctf{i}.example.com/",
            color=7506394,
            author=Author(name="Org"),
        )
        for i in range(count)
    ]


def ok_response(*args, **kwargs):  # pylint: disable=unused-argument
    resp = Mock()
    resp.raise_for_status = lambda: None
    resp.text = ""
    return resp


def test_parse_webhooks_drops_non_numeric_id():
    assert parse_webhooks("abc:tok,123:tok2") == [Destination(123, "tok2")]


def test_parse_webhooks_keeps_listed_order():
    destinations = parse_webhooks("2:b,1:a, 3:c ")
    assert [(d.id, d.token) for d in destinations] == [(2, "b"), (1, "a"), (3, "c")]


def test_parse_webhooks_drops_malformed_entries():
    assert parse_webhooks("123,:tok,456:,-1:neg,,789:ok") == [Destination(789, "ok")]


def test_parse_webhooks_ignores_extra_colon_fields():
    assert parse_webhooks("5:token:extra") == [Destination(5, "token")]


def test_destination_url_and_repr():
    dest = Destination(123, "secret")
    assert dest.url == "https://discord.com/api/webhooks/123/secret"
    assert "secret" not in repr(dest)


def test_chunked_sizes():
    assert [len(c) for c in chunked(list(range(23)), 10)] == [10, 10, 3]
    assert list(chunked([], 10)) == []
    with pytest.raises(ValueError):
        list(chunked([1], 0))


def test_build_payload_is_json_serializable():
    payload = build_payload(make_embeds(1))
    decoded = json.loads(json.dumps(payload))
    assert decoded == {
        "embeds": [
            {
                "title": "CTF 0",
                "description": "desc",
                "url": "https://ctf0.example.com/",
                "color": 7506394,
                "author": {"name": "Org", "icon_url": None},
            }
        ]
    }


def test_dispatch_batches_to_every_destination():
    destinations = [Destination(1, "a"), Destination(2, "b")]
    with patch("ingest.discord_client.requests.post", side_effect=ok_response) as mock_post:
        sent = WebhookDispatcher(destinations).dispatch(make_embeds(23))

    assert sent == 6
    calls = mock_post.call_args_list
    assert [c.args[0] for c in calls] == [d.url for d in destinations] * 3
    assert [len(c.kwargs["json"]["embeds"]) for c in calls] == [10, 10, 10, 10, 3, 3]
    assert calls[0].kwargs["json"]["embeds"][0]["title"] == "CTF 0"
    assert calls[-1].kwargs["json"]["embeds"][-1]["title"] == "CTF 22"


def test_dispatch_nothing_to_send():
    with patch("ingest.discord_client.requests.post") as mock_post:
        assert WebhookDispatcher([Destination(1, "a")]).dispatch([]) == 0
    mock_post.assert_not_called()


def test_dispatch_aborts_on_network_error():
    destinations = [Destination(1, "a"), Destination(2, "b")]
    with patch(
        "ingest.discord_client.requests.post",
        side_effect=requests.ConnectionError("reset"),
    ) as mock_post:
        with pytest.raises(DispatchError):
            WebhookDispatcher(destinations).dispatch(make_embeds(15))
    assert mock_post.call_count == 1


def test_dispatch_continues_after_error_status(caplog):
    def gone_first(url, **kwargs):
        resp = ok_response()
        if url.endswith("/1/gone"):
            resp.ok = False
            resp.status_code = 404
            resp.text = '{"message": "Unknown Webhook"}'
        return resp

    destinations = [Destination(1, "gone"), Destination(2, "ok")]
    with patch("ingest.discord_client.requests.post", side_effect=gone_first) as mock_post:
        sent = WebhookDispatcher(destinations).dispatch(make_embeds(12))

    assert sent == 4
    assert [c.args[0] for c in mock_post.call_args_list] == [d.url for d in destinations] * 2
    assert "Webhook 1 answered 404" in caplog.text
