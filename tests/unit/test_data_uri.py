"""Tests for the inline data URI resolver."""

from __future__ import annotations

import pytest

from license_fetch.errors import ParseFailure
from license_fetch.utils.data_uri import (
    DataUri,
    decode_data_uri,
    is_data_uri,
    parse_data_uri,
)


@pytest.mark.parametrize(
    "address",
    [
        "data:text/plain;base64,SGVsbG8sIGRhdGEh",
        "data:base64,SGVsbG8sIGRhdGEh",
        "data:Hello%2C%20data!",
        "data:text/plain;Hello%2C%20data!",
    ],
)
def test_decodes_supported_data_uri_forms(address):
    assert decode_data_uri(address) == b"Hello, data!"


def test_parse_extracts_mime_type_and_encoding_flag():
    parsed = parse_data_uri("data:text/plain;base64,SGVsbG8sIGRhdGEh")

    assert parsed == DataUri(
        mime_type="text/plain", is_base64=True, raw_payload="SGVsbG8sIGRhdGEh"
    )


def test_parse_without_metadata_has_no_mime_type():
    parsed = parse_data_uri("data:Hello%2C%20data!")

    assert parsed.mime_type is None
    assert parsed.is_base64 is False
    assert parsed.raw_payload == "Hello%2C%20data!"


def test_parse_ignores_unknown_parameters():
    parsed = parse_data_uri("data:application/json;charset=utf-8,%7B%7D")

    assert parsed.mime_type == "application/json"
    assert parsed.is_base64 is False
    assert parsed.decode() == b"{}"


def test_empty_metadata_segment_is_legal():
    assert decode_data_uri("data:,plain%20text") == b"plain text"


def test_payload_may_contain_literal_commas_after_separator():
    assert decode_data_uri("data:text/csv,a,b,c") == b"a,b,c"


def test_percent_decoding_yields_raw_bytes():
    payload = decode_data_uri("data:application/octet-stream;,%00%FF%10")
    assert payload == b"\x00\xff\x10"


def test_percent_escaped_base64_alphabet_is_accepted():
    # "+/8=" encodes the bytes 0xfb 0xff.
    assert decode_data_uri("data:;base64,%2B%2F8%3D") == b"\xfb\xff"


def test_scheme_match_is_case_insensitive():
    assert is_data_uri("DATA:,x")
    assert decode_data_uri("Data:,x") == b"x"


def test_network_addresses_are_not_data_uris():
    assert not is_data_uri("https://license.example.com/widevine")
    assert not is_data_uri("")


def test_base64_flag_without_separator_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        decode_data_uri("data:text/plain;base64")


def test_invalid_base64_payload_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        decode_data_uri("data:base64,not*base64!")


def test_parse_rejects_non_data_address():
    with pytest.raises(ParseFailure):
        parse_data_uri("https://license.example.com")


def test_parse_failure_is_a_value_error_without_status():
    with pytest.raises(ValueError) as excinfo:
        decode_data_uri("data:base64,%%%")

    assert excinfo.value.status is None


@pytest.mark.parametrize(
    "address",
    [
        "data:%ZZ",
        "data:text/plain;,abc%2",
        "data:,100%",
        "data:;base64,SGVs%G0=",
    ],
)
def test_malformed_percent_escape_is_a_parse_failure(address):
    with pytest.raises(ParseFailure):
        decode_data_uri(address)
