"""Bundle composition and serialization.

Pure Python, no framework dependencies.
"""

import json
from typing import Any, Dict, Iterator, List, Sequence

from enso.domain.models import (
    ACTION_CALL,
    ENSO_PROTOCOL,
    ActionSchema,
    IndexedOutput,
    Literal,
    ParamValue,
    PreviousOutput,
    Protocol,
    Transaction,
    ValueList,
)

OUTPUT_REF_KEY = "useOutputOfCallAt"

# Emitted for PreviousOutput on the first transaction
NO_PREVIOUS_OUTPUT = "0"


def output_of_call_at(index: int) -> Dict[str, int]:
    """Reference to the output of the transaction at `index`."""
    return {OUTPUT_REF_KEY: index}


def resolve_param(value: ParamValue, current_tx: int) -> Any:
    """Resolve one argument for the transaction at position ``current_tx``.

    Nested list items resolve against the same position as the enclosing
    transaction. Indexed references are passed through without bounds checks.
    """
    if isinstance(value, Literal):
        return value.value
    if isinstance(value, PreviousOutput):
        if current_tx > 0:
            return output_of_call_at(current_tx - 1)
        return NO_PREVIOUS_OUTPUT
    if isinstance(value, IndexedOutput):
        return output_of_call_at(value.index)
    if isinstance(value, ValueList):
        return [resolve_param(item, current_tx) for item in value.items]
    raise TypeError(f"Unsupported parameter value: {value!r}")


def serialize_transaction(transaction: Transaction, current_tx: int) -> Dict[str, Any]:
    # zip: surplus values or surplus parameters are dropped silently
    args = {
        name: resolve_param(value, current_tx)
        for (name, _), value in zip(transaction.schema.parameters, transaction.args)
    }
    return {
        "protocol": transaction.protocol_slug,
        "action": transaction.schema.name,
        "args": args,
    }


class Bundle:
    """Ordered batch of transactions submitted together on one chain."""

    def __init__(self, chain_id: int):
        self.chain_id = chain_id
        self._transactions: List[Transaction] = []

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __getitem__(self, index: int) -> Transaction:
        return self._transactions[index]

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    def add_action(
        self, protocol: Protocol, schema: ActionSchema, args: Sequence[ParamValue]
    ) -> int:
        """Append a transaction and return its position."""
        self._transactions.append(Transaction(protocol, schema, list(args)))
        return len(self._transactions) - 1

    def add_enso_action(self, schema: ActionSchema, args: Sequence[ParamValue]) -> int:
        return self.add_action(ENSO_PROTOCOL, schema, args)

    def add_call(
        self, head_args: Sequence[ParamValue], abi_args: Sequence[ParamValue]
    ) -> int:
        """Append a direct contract call.

        Args:
            head_args: target address, method name and ABI signature.
            abi_args: arguments forwarded to the method.
        """
        args = list(head_args) + [ValueList(abi_args)]
        return self.add_action(ENSO_PROTOCOL, ACTION_CALL, args)

    def insert_action(
        self,
        index: int,
        protocol: Protocol,
        schema: ActionSchema,
        args: Sequence[ParamValue],
    ) -> None:
        """Insert a transaction at `index`; later positions shift up."""
        self._transactions.insert(index, Transaction(protocol, schema, list(args)))

    def remove(self, index: int) -> Transaction:
        """Remove and return the transaction at `index`."""
        return self._transactions.pop(index)

    def clear(self) -> None:
        self._transactions.clear()

    def serialize(self) -> List[Dict[str, Any]]:
        """Wire records, one per transaction, in bundle order."""
        return [
            serialize_transaction(transaction, current_tx)
            for current_tx, transaction in enumerate(self._transactions)
        ]

    def to_json(self) -> str:
        """The serialized bundle as a JSON request body."""
        return json.dumps(self.serialize())
