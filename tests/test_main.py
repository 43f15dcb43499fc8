import pytest

from instagram_basic_display import InstagramBasicDisplay
from instagram_basic_display.main import build_parser, main, run, serialize_response, split_fields


def test_split_fields():
    assert split_fields("id, caption ,media_url", ("id",)) == ("id", "caption", "media_url")
    assert split_fields(None, ("id", "username")) == ("id", "username")


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_long_lived_token_needs_one_source():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["long-lived-token"])


def test_run_media_with_limit(api, ig):
    api.reply(json={"data": [], "paging": {"previous": "https://graph.instagram.com/me/media?before=B"}})
    args = build_parser().parse_args(["media", "--limit", "3", "--fields", "id,caption"])

    response = run(args, ig)

    request = api.last_request
    assert request.url.params["limit"] == "3"
    assert request.url.params["fields"] == "id,caption"
    assert serialize_response(response) == {
        "success": True,
        "status": "200",
        "payload": {"data": [], "paging": {"previous": "https://graph.instagram.com/me/media?before=B"}},
        "error": None,
        "next_page_link": None,
        "previous_page_link": "https://graph.instagram.com/me/media?before=B",
    }


def test_run_media_node_with_token(api, ig):
    api.reply(json={"id": "7"})
    args = build_parser().parse_args(["media-node", "7", "--token", "cli_token"])

    run(args, ig)

    assert api.last_request.url.path == "/7"
    assert api.last_request.url.params["access_token"] == "cli_token"


def test_run_exchange_code_serializes_error(api, ig):
    api.reply(400, json={"error_type": "OAuthException", "code": 400, "error_message": "Invalid authorization code"})
    args = build_parser().parse_args(["exchange-code", "used_code"])

    result = serialize_response(run(args, ig))

    assert result["success"] is False
    assert result["error"] == {"type": "OAuthException", "message": "Invalid authorization code", "code": 400}


def test_main_reports_unreadable_response(api, ig, caplog):
    api.reply(200, content=b"<html>Service Unavailable</html>")

    with pytest.raises(SystemExit) as exc_info:
        main(["profile"], client=ig)

    assert exc_info.value.code == 1
    assert len(api.requests) == 1
    assert "Unexpected response from Instagram" in caplog.text
    assert "Request not sent" not in caplog.text


def test_main_reports_missing_token_before_request(api, caplog):
    with pytest.raises(SystemExit):
        main(["profile"], client=InstagramBasicDisplay(http_client=api.client()))

    assert api.requests == []
    assert "Request not sent" in caplog.text


def test_main_prints_response(api, ig, capsys):
    api.reply(json={"id": "1", "username": "someone"})

    main(["profile"], client=ig)

    assert '"username": "someone"' in capsys.readouterr().out
