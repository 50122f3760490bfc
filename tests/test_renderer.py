"""Tests for Jinja2 transcript rendering."""

import pytest
from jinja2 import UndefinedError
from jinja2.exceptions import SecurityError

from notification_chain.renderer import header_value, render_template


class TestRenderTemplate:
    def test_plain_substitution(self) -> None:
        body = render_template("To: {{ recipient }}", {"recipient": "user@example.com"})
        assert body == "To: user@example.com"

    def test_values_converted_to_strings(self) -> None:
        body = render_template("Server: {{ server }}:{{ port }}", {"server": "smtp", "port": 587})
        assert body == "Server: smtp:587"

    def test_no_html_escaping(self) -> None:
        body = render_template("{{ body }}", {"body": "Tom & Jerry <ops>"})
        assert body == "Tom & Jerry <ops>"

    def test_strict_undefined_raises_on_missing_variable(self) -> None:
        with pytest.raises(UndefinedError):
            render_template("Hello {{ missing_var }}", {})

    def test_sandbox_blocks_internals(self) -> None:
        with pytest.raises(SecurityError):
            render_template("{{ body.__class__ }}", {"body": "x"})


class TestHeaderFilter:
    def test_line_breaks_collapsed(self) -> None:
        body = render_template("Subject: {{ subject | header }}", {"subject": "Alert\r\nBcc: x@evil.com"})
        assert body == "Subject: Alert Bcc: x@evil.com"

    def test_surrounding_whitespace_stripped(self) -> None:
        assert header_value("\n Outage \n") == "Outage"

    def test_plain_value_unchanged(self) -> None:
        assert header_value("Payment Confirmation") == "Payment Confirmation"
