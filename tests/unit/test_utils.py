import json
import threading

import pytest

from utils.error_handling import EmptyBodyError, ForbiddenChannelError, to_response
from utils.html_body import html_to_text, is_blank, looks_like_html, text_to_html
from utils.locks import TicketLocks
from utils.placeholders import render
from utils.settings import Settings
from utils.validators import ensure_present, parse_addresses


class TestValidators:
    def test_ensure_present(self):
        with pytest.raises(ValueError):
            ensure_present("", "ticket id")
        ensure_present("t-1", "ticket id")

    def test_optional_empty(self):
        assert parse_addresses(None, "cc") == []

    @pytest.mark.parametrize("value", ["plain", "a@", "@b.com", "a@b@c"])
    def test_invalid(self, value):
        from utils.error_handling import InvalidAddressError

        with pytest.raises(InvalidAddressError):
            parse_addresses(value, "to")


class TestHtmlBody:
    def test_text_to_html(self):
        assert text_to_html("This is a note") == "<p>This is a note</p>"
        assert text_to_html("a\r\nb") == "<p>a</p><p>b</p>"

    def test_html_to_text(self):
        assert html_to_text("<p>Hi &amp; bye</p><p>next<br>line</p>") == "Hi & bye\nnext\nline"

    def test_detection(self):
        assert looks_like_html("  <p>x</p>")
        assert not looks_like_html("1 < 2")
        assert is_blank("<p><br></p>")
        assert not is_blank('<img src="x">')


class TestPlaceholders:
    def test_dict_and_attribute_paths(self, ticket):
        context = {"ticket": ticket, "extra": {"name": "X"}}
        assert render("#{ticket.customer.lastname}/#{extra.name}", context) == "Doe/X"

    def test_missing_renders_dash(self):
        assert render("#{nothing.here}", {}) == "-"

    def test_unescaped(self):
        assert render("#{v}", {"v": "<b>"}, escape=False) == "<b>"


def test_to_response_carries_code():
    resp = to_response(ForbiddenChannelError("customer", "email"), "cid-1")
    body = json.loads(resp["body"])
    assert resp["statusCode"] == 403
    assert body == {
        "message": "A customer cannot create 'email' articles",
        "code": "forbidden_channel",
        "status": "error",
        "correlation_id": "cid-1",
    }
    assert to_response(EmptyBodyError())["statusCode"] == 422


def test_ticket_locks_are_per_ticket():
    locks = TicketLocks()
    assert locks.for_ticket("a") is locks.for_ticket("a")
    assert locks.for_ticket("a") is not locks.for_ticket("b")

    with locks.for_ticket("a"):
        acquired = []
        worker = threading.Thread(target=lambda: acquired.append(locks.for_ticket("b").acquire(timeout=1)))
        worker.start()
        worker.join()
    assert acquired == [True]
    assert len(locks) == 2


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "AWS")
    monkeypatch.setenv("ARTICLES_TABLE", "articles-prod")
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = Settings.from_environment()

    assert settings.uses_aws is True
    assert settings.articles_table == "articles-prod"
    assert settings.database_url is None


class TestAddressLists:
    def test_quoted_display_name_with_comma_is_one_recipient(self):
        addresses = parse_addresses('"Braun, Nicole" <nicole@example.com>, jane@example.com', "to")
        assert addresses == ['"Braun, Nicole" <nicole@example.com>', "jane@example.com"]

    def test_display_name_kept(self):
        assert parse_addresses("Jane <jane@example.com>", "to") == ["Jane <jane@example.com>"]

    def test_blank_list(self):
        assert parse_addresses(" , ", "to") == []


class TestSanitizing:
    def test_script_and_handlers_removed(self):
        from utils.html_body import sanitize_html

        cleaned = sanitize_html('<p>hi</p><script>alert(1)</script><img src=x onerror=alert(2)>')
        assert cleaned.startswith("<p>hi</p>")
        assert "<script" not in cleaned
        assert "alert" not in cleaned
        assert "<img" in cleaned

    def test_signature_block_survives(self):
        from utils.html_body import sanitize_html

        block = '<div data-signature="true" data-signature-id="sig-1"><p>Nicole</p></div>'
        assert sanitize_html(block) == block

    def test_angle_text_is_not_markup(self):
        assert not looks_like_html("<Ok> see you at 5")

    def test_unknown_tags_keep_their_text(self):
        assert html_to_text("<p><b>bold</b> and <x-custom>odd</x-custom></p>") == "bold and odd"
