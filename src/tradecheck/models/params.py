"""Trade parameter schema.

Defines the 15 yes/no questions a trader answers for each setup,
grouped into 5 categories of 3. Labels and descriptions are display
metadata only; matching and grouping use the keys p1..p15.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class TriState(Enum):
    """Answer to a single parameter question.

    Values mirror the JSON wire format: null, true, false.
    """

    UNSET = None
    YES = True
    NO = False


ParameterVector = dict[str, TriState]


@dataclass(frozen=True)
class ParameterDef:
    """A single parameter question."""

    key: str
    label: str
    description: str


@dataclass(frozen=True)
class ParameterGroup:
    """A titled group of three parameters."""

    title: str
    parameters: tuple[ParameterDef, ...]


PARAMETER_GROUPS: tuple[ParameterGroup, ...] = (
    ParameterGroup(
        title="SROOT Analysis (P1-P3)",
        parameters=(
            ParameterDef(
                "p1",
                "P1: .50 touch after SROOT?",
                "Did price touch .50 level after SROOT was established?",
            ),
            ParameterDef(
                "p2",
                "P2: Venus Touch before SROOT(+.50)",
                "Did Venus indicator touch before SROOT plus .50?",
            ),
            ParameterDef(
                "p3",
                "P3: Mercury Touch before SROOT(+.50)",
                "Did Mercury indicator touch before SROOT plus .50?",
            ),
        ),
    ),
    ParameterGroup(
        title="Post-SROOT Touches (P4-P6)",
        parameters=(
            ParameterDef(
                "p4",
                "P4: Venus touch AFTER SROOT?",
                "Did Venus indicator touch after SROOT was established?",
            ),
            ParameterDef(
                "p5",
                "P5: Mercury touch AFTER SROOT?",
                "Did Mercury indicator touch after SROOT was established?",
            ),
            ParameterDef(
                "p6",
                "P6: R Venus touch right after -1.0?",
                "Did reverse Venus touch right after -1.0 level?",
            ),
        ),
    ),
    ParameterGroup(
        title="Reverse Analysis (P7-P9)",
        parameters=(
            ParameterDef(
                "p7",
                "P7: R Mercury touch right after -1.0?",
                "Did reverse Mercury touch right after -1.0 level?",
            ),
            ParameterDef(
                "p8",
                "P8: R Venus Touch after -.50",
                "Did reverse Venus touch after -.50 level?",
            ),
            ParameterDef(
                "p9",
                "P9: R Mercury touch after -.50",
                "Did reverse Mercury touch after -.50 level?",
            ),
        ),
    ),
    ParameterGroup(
        title="Salt & Trigger Analysis (P10-P12)",
        parameters=(
            ParameterDef(
                "p10",
                "P10: -.50 touch after Salt Achieved &(before Trigger)?",
                "Did price touch -.50 after Salt was achieved but before Trigger?",
            ),
            ParameterDef(
                "p11",
                "P11: -1.0 Reswept?",
                "Was the -1.0 level reswept during the trade?",
            ),
            ParameterDef(
                "p12",
                "P12: Reverse Highest C Candle redefined?",
                "Was the reverse highest close candle redefined?",
            ),
        ),
    ),
    ParameterGroup(
        title="VL & EB Levels (P13-P15)",
        parameters=(
            ParameterDef(
                "p13",
                "P13: VL under .114?",
                "Was the VL (Volume Level) under .114?",
            ),
            ParameterDef(
                "p14",
                "P14: VL above .836?",
                "Was the VL (Volume Level) above .836?",
            ),
            ParameterDef(
                "p15",
                "P15: EB above .836",
                "Was the EB (Entry Block) above .836?",
            ),
        ),
    ),
)

# Fixed key order p1..p15, used for matching and grouping keys
PARAMETER_KEYS: tuple[str, ...] = tuple(
    param.key for group in PARAMETER_GROUPS for param in group.parameters
)

_DISPLAY = {
    TriState.UNSET: "Not Set",
    TriState.YES: "Yes",
    TriState.NO: "No",
}

_KEY_TOKENS = {
    TriState.UNSET: "null",
    TriState.YES: "true",
    TriState.NO: "false",
}


def to_tristate(value: object) -> TriState | None:
    """Interpret a raw answer as a TriState.

    Accepts TriState members, True/False and None. Anything else
    (including 0/1 and strings) is not an answer and returns None.
    """
    if isinstance(value, TriState):
        return value
    if value is None:
        return TriState.UNSET
    if value is True:
        return TriState.YES
    if value is False:
        return TriState.NO
    return None


def initialize_parameters() -> ParameterVector:
    """Return a vector with every parameter unset."""
    return {key: TriState.UNSET for key in PARAMETER_KEYS}


def validate_parameters(parameters: Mapping[str, object]) -> bool:
    """Check that all 15 parameters are answered yes or no.

    Args:
        parameters: Mapping of parameter key to answer.

    Returns:
        True iff every key p1..p15 is present and set to YES or NO.
    """
    for key in PARAMETER_KEYS:
        if key not in parameters:
            return False
        if to_tristate(parameters[key]) not in (TriState.YES, TriState.NO):
            return False
    return True


def display_value(value: object) -> str:
    """Map an answer to its display text: Not Set, Yes or No."""
    state = to_tristate(value)
    if state is None:
        state = TriState.UNSET
    return _DISPLAY[state]


def coerce_parameters(raw: Mapping[str, object]) -> ParameterVector:
    """Convert a wire mapping of bool/None into a full TriState vector.

    Missing keys become UNSET.

    Raises:
        ValueError: If a value is not a bool, None or TriState.
    """
    vector: ParameterVector = {}
    for key in PARAMETER_KEYS:
        state = to_tristate(raw.get(key))
        if state is None:
            raise ValueError(f"Invalid value for parameter {key}: {raw.get(key)!r}")
        vector[key] = state
    return vector


def parameters_match(left: Mapping[str, object], right: Mapping[str, object]) -> bool:
    """Exact key-by-key equality over p1..p15. UNSET matches UNSET.

    Either side may hold TriState members or raw True/False/None.
    A value that is not an answer never matches.
    """
    for key in PARAMETER_KEYS:
        left_value = to_tristate(left.get(key))
        if left_value is None or left_value is not to_tristate(right.get(key)):
            return False
    return True


def parameter_key(parameters: Mapping[str, TriState]) -> str:
    """Build the exact-match grouping key, e.g. ``p1:true|p2:false|...``."""
    return "|".join(
        f"{key}:{_KEY_TOKENS[parameters.get(key, TriState.UNSET)]}" for key in PARAMETER_KEYS
    )


def parameter_summary(parameters: Mapping[str, TriState]) -> str:
    """One-line readable summary of a vector, group by group."""
    parts = []
    for group in PARAMETER_GROUPS:
        values = ", ".join(
            display_value(parameters.get(param.key, TriState.UNSET))
            for param in group.parameters
        )
        parts.append(f"{group.title}: {values}")
    return " | ".join(parts)
