"""Unit tests for shield/policies/scheme.py: URL scheme allow-list."""

from __future__ import annotations

import pytest

from shield.policies import SchemePolicy


class TestSchemePolicy:
    @pytest.mark.parametrize("allow", [[], ()])
    def test_empty_allow_list_blocks_everything(self, make_request, allow) -> None:
        policy = SchemePolicy(allow)
        assert policy.block(make_request("GET", "http://localhost/")) is True
        assert policy.block(make_request("GET", "https://localhost/")) is True

    @pytest.mark.parametrize(
        "allow, scheme, should_block",
        [
            (["https"], "http", True),
            (["HTTPS"], "http", True),
            (["http"], "http", False),
            (["https"], "https", False),
            (["http"], "https", True),
            (["HTTP"], "https", True),
            (["http", "https"], "https", False),
            (["HTTPS"], "https", False),
        ],
    )
    def test_membership(self, make_request, allow, scheme, should_block) -> None:
        policy = SchemePolicy(allow)
        request = make_request("GET", f"{scheme}://localhost/")
        assert policy.block(request) is should_block

    def test_https_only_blocks_plain_http(self, make_request) -> None:
        policy = SchemePolicy(["https"])
        assert policy(make_request("GET", "http://localhost:8080/")) is True

    def test_schemes_property_preserves_configuration(self) -> None:
        assert SchemePolicy(["HTTPS", "http"]).schemes == ("HTTPS", "http")
