"""Tests for domain/bundle.py: pure Python, no network."""

import json

import pytest

from enso.domain.bundle import (
    NO_PREVIOUS_OUTPUT,
    Bundle,
    output_of_call_at,
    resolve_param,
)
from enso.domain.models import (
    ACTION_CALL,
    ENSO_PROTOCOL,
    ActionSchema,
    IndexedOutput,
    Literal,
    PreviousOutput,
    Protocol,
    ValueList,
)

ACTION_ROUTE = ActionSchema(
    name="route",
    parameters=(
        ("amountIn", "Raw amount to sell"),
        ("slippage", "Amount of slippage"),
        ("tokenIn", "Address of token to sell"),
        ("tokenOut", "Address of token to buy"),
    ),
)

EXPECTED = [
    {
        "protocol": "enso",
        "action": "route",
        "args": {
            "tokenIn": "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee",
            "tokenOut": "0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84",
            "amountIn": "100000000000",
            "slippage": "300",
        },
    },
    {
        "protocol": "enso",
        "action": "call",
        "args": {
            "address": "0xCc9EE9483f662091a1de4795249E24aC0aC2630f",
            "method": "transfer",
            "abi": "function transfer(address,uint256) external",
            "args": [
                "0x93621DCA56fE26Cdee86e4F6B18E116e9758Ff11",
                {"useOutputOfCallAt": 1},
            ],
        },
    },
]


def create_bundle(chain_id=1):
    bundle = Bundle(chain_id)
    bundle.add_enso_action(
        ACTION_ROUTE,
        [
            Literal("100000000000"),
            Literal("300"),
            Literal("0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"),
            Literal("0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84"),
        ],
    )
    bundle.add_call(
        [
            Literal("0xCc9EE9483f662091a1de4795249E24aC0aC2630f"),
            Literal("transfer"),
            Literal("function transfer(address,uint256) external"),
        ],
        [
            Literal("0x93621DCA56fE26Cdee86e4F6B18E116e9758Ff11"),
            IndexedOutput(1),
        ],
    )
    return bundle


def _noop(name="noop"):
    return ActionSchema(name=name, parameters=(("value", ""),))


class TestSerialize:
    def test_route_then_transfer(self):
        assert create_bundle().serialize() == EXPECTED

    def test_to_json_matches_serialize(self):
        bundle = create_bundle()
        assert json.loads(bundle.to_json()) == EXPECTED

    def test_args_follow_schema_order(self):
        record = create_bundle().serialize()[0]
        assert list(record["args"]) == ["amountIn", "slippage", "tokenIn", "tokenOut"]

    def test_repeat_serialization_is_identical(self):
        bundle = create_bundle()
        assert bundle.serialize() == bundle.serialize()
        assert bundle.to_json() == bundle.to_json()

    def test_empty_bundle(self):
        assert Bundle(1).serialize() == []

    def test_fewer_args_than_parameters(self):
        bundle = Bundle(1)
        bundle.add_enso_action(ACTION_ROUTE, [Literal("1"), Literal("2")])
        assert bundle.serialize()[0]["args"] == {"amountIn": "1", "slippage": "2"}

    def test_more_args_than_parameters(self):
        bundle = Bundle(1)
        bundle.add_enso_action(_noop(), [Literal("a"), Literal("b")])
        assert bundle.serialize()[0]["args"] == {"value": "a"}

    def test_zero_parameter_schema(self):
        bundle = Bundle(1)
        bundle.add_enso_action(ActionSchema(name="harvest"), [Literal("ignored")])
        assert bundle.serialize()[0]["args"] == {}

    def test_protocol_slug_from_transaction(self):
        bundle = Bundle(1)
        bundle.add_action(Protocol("aave-v3"), _noop("deposit"), [Literal("1")])
        assert bundle.serialize()[0]["protocol"] == "aave-v3"
        assert bundle.serialize()[0]["action"] == "deposit"


class TestPreviousOutput:
    @pytest.mark.parametrize("size", [1, 2, 5])
    def test_every_position(self, size):
        bundle = Bundle(1)
        for _ in range(size):
            bundle.add_enso_action(_noop(), [PreviousOutput()])
        records = bundle.serialize()
        assert records[0]["args"]["value"] == NO_PREVIOUS_OUTPUT
        for i in range(1, size):
            assert records[i]["args"]["value"] == {"useOutputOfCallAt": i - 1}

    def test_first_position_sentinel(self):
        assert resolve_param(PreviousOutput(), 0) == "0"

    def test_nested_uses_enclosing_position(self):
        value = ValueList([ValueList([PreviousOutput(), Literal("x")])])
        assert resolve_param(value, 3) == [[{"useOutputOfCallAt": 2}, "x"]]


class TestIndexedOutput:
    def test_reference(self):
        assert resolve_param(IndexedOutput(4), 0) == output_of_call_at(4)

    def test_forward_and_out_of_range_pass_through(self):
        bundle = Bundle(1)
        bundle.add_enso_action(_noop(), [IndexedOutput(1)])
        bundle.add_enso_action(_noop(), [IndexedOutput(99)])
        records = bundle.serialize()
        assert records[0]["args"]["value"] == {"useOutputOfCallAt": 1}
        assert records[1]["args"]["value"] == {"useOutputOfCallAt": 99}

    def test_negative_index_pass_through(self):
        assert resolve_param(IndexedOutput(-1), 2) == {"useOutputOfCallAt": -1}


class TestResolveParam:
    def test_literal(self):
        assert resolve_param(Literal("abc"), 7) == "abc"

    def test_empty_list(self):
        assert resolve_param(ValueList(), 0) == []

    def test_unknown_value(self):
        with pytest.raises(TypeError):
            resolve_param("raw string", 0)


class TestMutation:
    def test_add_returns_position(self):
        bundle = Bundle(1)
        assert bundle.add_enso_action(_noop(), []) == 0
        assert bundle.add_call([], []) == 1
        assert len(bundle) == 2

    def test_add_call_wraps_abi_args(self):
        bundle = Bundle(1)
        bundle.add_call([Literal("0xA"), Literal("m"), Literal("abi")], [Literal("x")])
        tx = bundle[0]
        assert tx.schema is ACTION_CALL
        assert tx.protocol == ENSO_PROTOCOL
        assert tx.args[-1] == ValueList([Literal("x")])

    def test_remove_recomputes_positions(self):
        bundle = Bundle(1)
        bundle.add_enso_action(_noop("a"), [Literal("a")])
        bundle.add_enso_action(_noop("b"), [Literal("b")])
        bundle.add_enso_action(_noop("c"), [PreviousOutput()])
        assert bundle.serialize()[2]["args"]["value"] == {"useOutputOfCallAt": 1}

        removed = bundle.remove(0)
        assert removed.schema.name == "a"
        records = bundle.serialize()
        assert [r["action"] for r in records] == ["b", "c"]
        assert records[1]["args"]["value"] == {"useOutputOfCallAt": 0}

    def test_insert_recomputes_positions(self):
        bundle = Bundle(1)
        bundle.add_enso_action(_noop("b"), [PreviousOutput()])
        assert bundle.serialize()[0]["args"]["value"] == "0"

        bundle.insert_action(0, ENSO_PROTOCOL, _noop("a"), [Literal("a")])
        records = bundle.serialize()
        assert [r["action"] for r in records] == ["a", "b"]
        assert records[1]["args"]["value"] == {"useOutputOfCallAt": 0}

    def test_record_count_tracks_mutations(self):
        bundle = create_bundle()
        bundle.add_enso_action(_noop(), [])
        bundle.remove(1)
        bundle.add_call([], [])
        assert len(bundle.serialize()) == len(bundle) == 3
        bundle.clear()
        assert bundle.serialize() == []

    def test_args_copied_on_add(self):
        args = [Literal("a")]
        bundle = Bundle(1)
        bundle.add_enso_action(_noop(), args)
        args.append(Literal("b"))
        assert bundle[0].args == [Literal("a")]

    def test_iteration_order(self):
        bundle = create_bundle()
        assert [tx.schema.name for tx in bundle] == ["route", "call"]
        assert [tx.schema.name for tx in bundle.transactions] == ["route", "call"]
