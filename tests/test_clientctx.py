import pytest

from tflsp.clientctx import (
    ClientContextError,
    client_capabilities,
    client_name,
    set_client_capabilities,
    set_client_name,
    with_client_capabilities,
    with_client_name,
)


def test_capabilities_missing_raises():
    with pytest.raises(ClientContextError):
        client_capabilities()


def test_set_capabilities_missing_raises():
    with pytest.raises(ClientContextError):
        set_client_capabilities({"hover": True})


def test_capabilities_round_trip():
    initial = {"hover": False}
    with with_client_capabilities(initial):
        assert client_capabilities() == initial
        replacement = {"hover": True}
        set_client_capabilities(replacement)
        assert client_capabilities() == replacement
    with pytest.raises(ClientContextError):
        client_capabilities()


def test_nested_capabilities_restore_outer():
    with with_client_capabilities("outer"):
        with with_client_capabilities("inner"):
            assert client_capabilities() == "inner"
        assert client_capabilities() == "outer"


def test_client_name_missing():
    assert client_name() is None
    with pytest.raises(ClientContextError):
        set_client_name("editor")


def test_client_name_round_trip():
    with with_client_name():
        assert client_name() == ""
        set_client_name("editor")
        assert client_name() == "editor"
    assert client_name() is None


def test_client_name_initial_value():
    with with_client_name("first"):
        assert client_name() == "first"