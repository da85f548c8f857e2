from ipaddress import IPv4Address, IPv6Address

import pytest

from resolvconf import (
    Config,
    ExtraData,
    Family,
    InvalidDirective,
    InvalidIp,
    InvalidOption,
    InvalidOptionValue,
    InvalidUtf8,
    InvalidValue,
    Lookup,
    Network,
    parse,
)
from resolvconf.errors import AddrParseError
from resolvconf.grammar import iter_lines

SAMPLE = b"""
options ndots:8 timeout:8 attempts:8

domain example.com
search example.com sub.example.com

nameserver 2001:4860:4860::8888
nameserver 2001:4860:4860::8844
nameserver 8.8.8.8
nameserver 8.8.4.4

options rotate
options inet6 no-tld-query

sortlist 130.155.160.0/255.255.240.0 130.155.0.0"""


class TestSampleFile:
    def test_full_config(self):
        expected = Config(
            nameservers=[
                IPv6Address("2001:4860:4860::8888"),
                IPv6Address("2001:4860:4860::8844"),
                IPv4Address("8.8.8.8"),
                IPv4Address("8.8.4.4"),
            ],
            search=["example.com", "sub.example.com"],
            sortlist=[
                Network(IPv4Address("130.155.160.0"), IPv4Address("255.255.240.0")),
                Network(IPv4Address("130.155.0.0"), IPv4Address("255.255.0.0")),
            ],
            ndots=8,
            timeout=8,
            attempts=8,
            rotate=True,
            inet6=True,
            no_tld_query=True,
        )
        assert parse(SAMPLE) == expected

    def test_str_input_matches_bytes(self):
        assert parse(SAMPLE.decode()) == parse(SAMPLE)

    def test_parsing_is_deterministic(self):
        assert parse(SAMPLE) == parse(SAMPLE)

    def test_config_parse_alias(self):
        assert Config.parse(SAMPLE) == parse(SAMPLE)

    def test_empty_input_gives_defaults(self):
        assert parse(b"") == Config()


class TestTokenizer:
    def test_lines_are_indexed_from_zero(self):
        lines = list(iter_lines(b"\nnameserver 1.1.1.1\n\n  search a b  \n"))
        assert lines == [
            (1, ["nameserver", "1.1.1.1"]),
            (3, ["search", "a", "b"]),
        ]

    def test_full_comment_lines_are_skipped(self):
        data = b"# first\n  ; second\n\t# third\nnameserver 1.1.1.1\n"
        assert list(iter_lines(data)) == [(3, ["nameserver", "1.1.1.1"])]

    def test_inline_comments_are_stripped(self):
        data = b"nameserver 1.1.1.1 # primary\nsearch a;b c\n"
        assert list(iter_lines(data)) == [
            (0, ["nameserver", "1.1.1.1"]),
            (1, ["search", "a"]),
        ]

    def test_invalid_utf8_allowed_in_full_comment(self):
        data = b"# caf\xe9\n  ;\xff\xfe\nnameserver 8.8.8.8\n"
        assert parse(data).nameservers == [IPv4Address("8.8.8.8")]

    def test_invalid_utf8_in_directive_line(self):
        with pytest.raises(InvalidUtf8) as excinfo:
            parse(b"nameserver 8.8.8.8\nsearch caf\xe9\n")
        assert excinfo.value.line == 1
        assert isinstance(excinfo.value.cause, UnicodeDecodeError)

    def test_invalid_utf8_in_inline_comment_still_fails(self):
        with pytest.raises(InvalidUtf8) as excinfo:
            parse(b"nameserver 8.8.8.8 # \xff\n")
        assert excinfo.value.line == 0

    def test_crlf_line_endings(self):
        cfg = parse(b"nameserver 8.8.8.8\r\ndomain example.com\r\n")
        assert cfg.nameservers == [IPv4Address("8.8.8.8")]
        assert cfg.domain == "example.com"

    def test_information_separators_do_not_split_tokens(self):
        with pytest.raises(InvalidDirective) as excinfo:
            parse(b"nameserver\x1c8.8.8.8\n")
        assert excinfo.value.line == 0
        assert list(iter_lines(b"search a\x1fb\n")) == [(0, ["search", "a\x1fb"])]

    def test_unicode_whitespace_splits_tokens(self):
        cfg = parse("nameserver 8.8.8.8\nsearch a\u3000b\n")
        assert cfg.nameservers == [IPv4Address("8.8.8.8")]
        assert cfg.search == ["a", "b"]

    def test_comment_and_blank_lines_do_not_change_config(self):
        plain = b"nameserver 1.1.1.1\nsearch a b\n"
        noisy = b"# header\n\nnameserver 1.1.1.1 ; x\n   \n; note\nsearch a b\n#\n"
        assert parse(plain) == parse(noisy)


class TestDirectives:
    def test_unknown_directive(self):
        with pytest.raises(InvalidDirective) as excinfo:
            parse(b"nameserver 1.1.1.1\nfrobnicate x\n")
        assert excinfo.value.line == 1

    def test_directives_are_case_sensitive(self):
        with pytest.raises(InvalidDirective):
            parse(b"Nameserver 1.1.1.1\n")

    def test_nameservers_keep_order_and_duplicates(self):
        cfg = parse(b"nameserver 1.1.1.1\nnameserver 9.9.9.9\nnameserver 1.1.1.1\n")
        assert cfg.nameservers == [
            IPv4Address("1.1.1.1"),
            IPv4Address("9.9.9.9"),
            IPv4Address("1.1.1.1"),
        ]

    def test_nameserver_with_scope(self):
        cfg = parse(b"nameserver fe80::1%eth0\n")
        assert cfg.nameservers == [IPv6Address("fe80::1%eth0")]
        assert cfg.nameservers[0].scope_id == "eth0"

    def test_nameserver_missing_value(self):
        with pytest.raises(InvalidValue) as excinfo:
            parse(b"nameserver\n")
        assert excinfo.value.line == 0

    def test_nameserver_bad_address(self):
        with pytest.raises(InvalidIp) as excinfo:
            parse(b"nameserver 8.8.8\n")
        assert isinstance(excinfo.value.cause, AddrParseError)

    def test_nameserver_scope_on_ipv4_rejected(self):
        with pytest.raises(InvalidIp):
            parse(b"nameserver 10.0.0.1%eth0\n")

    def test_nameserver_extra_data(self):
        with pytest.raises(ExtraData) as excinfo:
            parse(b"nameserver 8.8.8.8 extra\n")
        assert excinfo.value.line == 0

    def test_domain_overwrites(self):
        cfg = parse(b"domain one.example\ndomain two.example\n")
        assert cfg.domain == "two.example"

    def test_domain_missing_value(self):
        with pytest.raises(InvalidValue):
            parse(b"domain\n")

    def test_domain_invalid_name(self):
        with pytest.raises(InvalidValue):
            parse(b"domain bad..example\n")
        with pytest.raises(InvalidValue):
            parse(b"domain " + b"a" * 64 + b".example\n")

    def test_domain_extra_data(self):
        with pytest.raises(ExtraData):
            parse(b"domain example.com example.org\n")

    def test_search_replaces_whole_list(self):
        cfg = parse(b"search a b\nsearch c\n")
        assert cfg.search == ["c"]

    def test_bare_search_clears_list(self):
        cfg = parse(b"search a b\nsearch\n")
        assert cfg.search == []

    def test_last_of_domain_and_search_wins(self):
        cfg = parse(b"search a b\ndomain example.com\n")
        assert cfg.domain == "example.com"
        assert cfg.search is None

        cfg = parse(b"domain example.com\nsearch a b\n")
        assert cfg.domain is None
        assert cfg.search == ["a", "b"]

    def test_sortlist_is_rebuilt(self):
        cfg = parse(b"sortlist 10.0.0.0 192.168.1.0\nsortlist 172.16.0.0\n")
        assert cfg.sortlist == [
            Network(IPv4Address("172.16.0.0"), IPv4Address("255.255.0.0")),
        ]

    def test_bare_sortlist_clears_list(self):
        cfg = parse(b"sortlist 10.0.0.0\nsortlist\n")
        assert cfg.sortlist == []

    def test_sortlist_mixed_families(self):
        cfg = parse(b"sortlist 10.1.2.3 2001:db8::/ffff:ffff::\n")
        assert cfg.sortlist == [
            Network(IPv4Address("10.1.2.3"), IPv4Address("255.255.255.255")),
            Network(IPv6Address("2001:db8::"), IPv6Address("ffff:ffff::")),
        ]

    @pytest.mark.parametrize(
        "line",
        [
            b"sortlist 0.0.0.0",
            b"sortlist 0.0.0.0/255.0.0.0",
            b"sortlist 10.0.0.0/255.0.255.0",
            b"sortlist 10.0.0.0/0.0.0.0",
            b"sortlist 10.0.0.0/",
            b"sortlist not-an-ip",
        ],
    )
    def test_sortlist_invalid(self, line):
        with pytest.raises(InvalidIp) as excinfo:
            parse(b"nameserver 1.1.1.1\n" + line + b"\n")
        assert excinfo.value.line == 1

    def test_lookup_is_permissive_and_appends(self):
        cfg = parse(b"lookup file bind\nlookup anything\n")
        assert cfg.lookup == [Lookup.file(), Lookup.bind(), Lookup.extra("anything")]

    def test_family_appends(self):
        cfg = parse(b"family inet6\nfamily inet4\n")
        assert cfg.family == [Family.INET6, Family.INET4]

    def test_family_rejects_unknown(self):
        with pytest.raises(InvalidValue) as excinfo:
            parse(b"family inet4 anything\n")
        assert excinfo.value.line == 0


class TestOptions:
    def test_all_flags(self):
        cfg = parse(
            b"options debug rotate no-check-names inet6 ip6-bytestring ip6-dotint "
            b"edns0 single-request single-request-reopen no-reload trust-ad "
            b"no-tld-query use-vc\n"
        )
        for attr in (
            "debug",
            "rotate",
            "no_check_names",
            "inet6",
            "ip6_bytestring",
            "ip6_dotint",
            "edns0",
            "single_request",
            "single_request_reopen",
            "no_reload",
            "trust_ad",
            "no_tld_query",
            "use_vc",
        ):
            assert getattr(cfg, attr) is True, attr

    def test_no_ip6_dotint_clears_flag(self):
        cfg = parse(b"options ip6-dotint\noptions no-ip6-dotint\n")
        assert cfg.ip6_dotint is False

    def test_flag_value_is_ignored(self):
        assert parse(b"options edns0:whatever\n").edns0 is True

    def test_numeric_options(self):
        cfg = parse(b"options ndots:3 timeout:1 attempts:4\noptions ndots:+2\n")
        assert (cfg.ndots, cfg.timeout, cfg.attempts) == (2, 1, 4)

    def test_numeric_defaults(self):
        cfg = parse(b"options rotate\n")
        assert (cfg.ndots, cfg.timeout, cfg.attempts) == (1, 5, 2)

    @pytest.mark.parametrize(
        "token",
        [b"ndots:abc", b"ndots", b"timeout:", b"attempts:-1", b"ndots:4294967296", b"ndots:1_0"],
    )
    def test_bad_numeric_value(self, token):
        with pytest.raises(InvalidOptionValue) as excinfo:
            parse(b"\noptions " + token + b"\n")
        assert excinfo.value.line == 1

    def test_unknown_option(self):
        with pytest.raises(InvalidOption):
            parse(b"options bogus\n")

    def test_second_colon_is_extra_data(self):
        with pytest.raises(ExtraData):
            parse(b"options ndots:1:2\n")

    def test_error_stops_parse(self):
        with pytest.raises(InvalidOption) as excinfo:
            parse(b"options rotate\noptions nope\nfrobnicate\n")
        assert excinfo.value.line == 1


class TestErrorMessages:
    def test_message_mentions_line(self):
        with pytest.raises(InvalidDirective) as excinfo:
            parse(b"\n\nfoo\n")
        assert str(excinfo.value) == "directive at line 2 is not recognized"
        assert repr(excinfo.value) == "InvalidDirective(line=2)"

    def test_invalid_ip_message_includes_cause(self):
        with pytest.raises(InvalidIp) as excinfo:
            parse(b"sortlist 0.0.0.0\n")
        assert "0.0.0.0" in str(excinfo.value)
