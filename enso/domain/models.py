"""Domain data models: pure Python dataclasses."""

from dataclasses import dataclass, field
from typing import List, Tuple, Union


@dataclass(frozen=True)
class Protocol:
    """A protocol actions are routed through."""

    slug: str
    url: str = ""


@dataclass(frozen=True)
class Network:
    """A chain the API serves, keyed by chain id."""

    id: int
    name: str


@dataclass(frozen=True)
class ActionSchema:
    """Named remote operation with its ordered parameter list.

    Parameters bind by position, not by name: the i-th argument of a
    transaction fills the i-th entry here.
    """

    name: str
    parameters: Tuple[Tuple[str, str], ...] = ()

    @property
    def parameter_names(self) -> List[str]:
        return [name for name, _ in self.parameters]


# ── Parameter values ────────────────────────────────────────


@dataclass(frozen=True)
class Literal:
    value: str


@dataclass(frozen=True)
class PreviousOutput:
    """Output of the transaction right before this one."""


@dataclass(frozen=True)
class IndexedOutput:
    """Output of the transaction at an absolute bundle position."""

    index: int


@dataclass(frozen=True)
class ValueList:
    """Array argument; items may themselves be references."""

    items: Tuple["ParamValue", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


ParamValue = Union[Literal, PreviousOutput, IndexedOutput, ValueList]


@dataclass
class Transaction:
    """One action bound to concrete argument values."""

    protocol: Protocol
    schema: ActionSchema
    args: List[ParamValue] = field(default_factory=list)

    @property
    def protocol_slug(self) -> str:
        return self.protocol.slug


ENSO_PROTOCOL = Protocol(slug="enso", url="https://api.enso.finance")

# Direct contract call; always available without fetching the catalog
ACTION_CALL = ActionSchema(
    name="call",
    parameters=(
        ("address", ""),
        ("method", ""),
        ("abi", ""),
        ("args", ""),
    ),
)
