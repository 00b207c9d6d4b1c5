# topmark:header:start
#
#   project      : CodeServer
#   file         : test_args.py
#   file_relpath : tests/config/test_args.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the immutable `Args` record and `merge_args()`."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from codeserver.config.args import Args, merge_args
from codeserver.config.keys import Opt
from codeserver.config.parser import parse
from codeserver.config.types import OptionalString


def test_args_is_a_read_only_mapping() -> None:
    """Records expose the mapping protocol but cannot be assigned to."""
    args = Args({Opt.AUTH: "none"}, ["a"])
    assert dict(args) == {Opt.AUTH: "none"}
    assert Opt.AUTH in args
    assert args.get(Opt.PORT) is None
    with pytest.raises(TypeError):
        args[Opt.AUTH] = "password"  # type: ignore[index]


def test_args_rejects_unknown_keys() -> None:
    """Only schema option names can be stored."""
    with pytest.raises(KeyError):
        Args({"no-such-option": 1})


def test_args_lists_become_tuples() -> None:
    """List values are frozen into tuples."""
    args = Args({Opt.PROXY_DOMAIN: ["a", "b"]})
    assert args[Opt.PROXY_DOMAIN] == ("a", "b")


def test_is_set_distinguishes_absent_from_falsy() -> None:
    """An empty payload is set; a missing key is not."""
    args = Args({Opt.LINK: OptionalString("")})
    assert args.is_set(Opt.LINK)
    assert not args.is_set(Opt.CERT)


def test_with_values_and_without_return_new_records() -> None:
    """Derivation helpers never mutate the original."""
    args = Args({Opt.VERBOSE: True}, ["p"])
    changed = args.with_values({Opt.LOG: "trace"})
    removed = changed.without(Opt.VERBOSE, Opt.CERT)

    assert dict(args) == {Opt.VERBOSE: True}
    assert dict(changed) == {Opt.VERBOSE: True, Opt.LOG: "trace"}
    assert dict(removed) == {Opt.LOG: "trace"}
    assert removed.positional == ("p",)


def test_equality_includes_positional() -> None:
    """Two records are equal only if their positional arguments match too."""
    assert Args({Opt.OPEN: True}, ["a"]) == Args({Opt.OPEN: True}, ["a"])
    assert Args({Opt.OPEN: True}, ["a"]) != Args({Opt.OPEN: True}, ["b"])
    assert hash(Args({}, ["a"])) == hash(Args({}, ["a"]))


def test_repr_redacts_password() -> None:
    """The password never shows up in a record's repr."""
    args = Args({Opt.PASSWORD: "hunter2"})
    assert "hunter2" not in repr(args)
    assert "<redacted>" in repr(args)


def test_merge_args_command_line_wins() -> None:
    """Command line values override config values key by key."""
    config = Args({Opt.AUTH: "password", Opt.CERT_HOST: "cfg"}, ["ignored"])
    cli = Args({Opt.AUTH: "none"}, ["folder"])
    merged = merge_args(config, cli)
    assert merged[Opt.AUTH] == "none"
    assert merged[Opt.CERT_HOST] == "cfg"
    assert merged.positional == ("folder",)


def test_to_argv_shapes() -> None:
    """Each value kind is rendered the way the parser reads it back."""
    args = Args(
        {
            Opt.VERBOSE: True,
            Opt.PROXY_DOMAIN: ["a", "b"],
            Opt.LINK: OptionalString(),
            Opt.PORT: 9000,
        },
        ["x"],
    )
    assert args.to_argv() == [
        "--verbose",
        "--proxy-domain=a",
        "--proxy-domain=b",
        "--link",
        "--port=9000",
        "--",
        "x",
    ]


# Non-path options only: path options are made absolute on the way back in.
_values = st.fixed_dictionaries(
    {},
    optional={
        Opt.AUTH: st.sampled_from(["password", "none"]),
        Opt.BIND_ADDR: st.text(),
        Opt.PORT: st.integers(min_value=-(2**31), max_value=2**31),
        Opt.PROXY_DOMAIN: st.lists(st.text(), min_size=1, max_size=4).map(tuple),
        Opt.LINK: st.one_of(
            st.just(OptionalString()),
            st.text().filter(lambda s: s != "false").map(OptionalString),
        ),
        Opt.VERBOSE: st.just(True),
    },
)


@given(values=_values, positional=st.lists(st.text(), max_size=4))
def test_to_argv_parses_back_to_equal_record(values: dict[str, Any], positional: list[str]) -> None:
    """``parse(args.to_argv())`` reproduces the record."""
    args = Args(values, positional)
    assert parse(args.to_argv()) == args
