"""
Component 5: Goal Formula

Goal formulas in disjunctive normal form:
- Literal: relation name with one or two object arguments
- Conjunction: literals that must all hold
- DNFFormula: conjunctions of which at least one must hold

Textual notation (as printed by the interpreter):
    ontop(a,floor) & holding(b) | inside(c,d)

'&' binds tighter than '|'. Formulas are read-only values; they are
produced upstream and never modified by the planner.

Author: Stack Planner Team
Date: 2026-10-19
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from common.constants import BINARY_RELATIONS, FLOOR_ID, UNARY_RELATIONS
from component_1_world_model import WorldState
from planner_exceptions import (
    InvalidGoalFormulaError,
    UnknownObjectError,
    UnknownRelationError,
)

_LITERAL_PATTERN = re.compile(r"^\s*([A-Za-z_]\w*)\s*\(\s*([^()]*?)\s*\)\s*$")


# ============================================================================
# Formula Types
# ============================================================================


@dataclass(frozen=True)
class Literal:
    """
    Atomic relation claim.

    Examples:
        Literal("holding", ("a",))
        Literal("ontop", ("a", "floor"))
    """

    relation: str
    args: Tuple[str, ...]

    def __post_init__(self):
        if self.relation in UNARY_RELATIONS:
            expected = 1
        elif self.relation in BINARY_RELATIONS:
            expected = 2
        else:
            raise UnknownRelationError(
                f"Unknown relation '{self.relation}'", relation=self.relation
            )
        if len(self.args) != expected:
            raise InvalidGoalFormulaError(
                f"Relation '{self.relation}' takes {expected} argument(s), "
                f"got {len(self.args)}",
                context={"args": self.args},
            )

    @property
    def is_unary(self) -> bool:
        return len(self.args) == 1

    def __str__(self) -> str:
        return f"{self.relation}({','.join(self.args)})"


@dataclass(frozen=True)
class Conjunction:
    """Literals that must all hold simultaneously."""

    literals: Tuple[Literal, ...]

    def __post_init__(self):
        if not self.literals:
            raise InvalidGoalFormulaError("Empty conjunction")

    def __str__(self) -> str:
        return " & ".join(str(lit) for lit in self.literals)


@dataclass(frozen=True)
class DNFFormula:
    """Disjunction of conjunctions; satisfied if any conjunction holds."""

    conjuncts: Tuple[Conjunction, ...]

    def __post_init__(self):
        if not self.conjuncts:
            raise InvalidGoalFormulaError("Empty disjunction")

    def __str__(self) -> str:
        return " | ".join(str(conj) for conj in self.conjuncts)

    def literals(self) -> Iterable[Literal]:
        for conj in self.conjuncts:
            yield from conj.literals

    def object_ids(self) -> set:
        """Objects referenced by the formula (excluding the floor)."""
        return {arg for lit in self.literals() for arg in lit.args if arg != FLOOR_ID}

    def validate_against(self, world: WorldState) -> None:
        """
        Check that the formula only refers to objects of the world.

        Raises:
            UnknownObjectError: For an object identifier not present in the world
            InvalidGoalFormulaError: If 'floor' is used where an object is required
        """
        present = set(world.all_object_ids())
        for lit in self.literals():
            if lit.args[0] == FLOOR_ID:
                raise InvalidGoalFormulaError(
                    f"'floor' cannot be the subject of '{lit}'",
                    context={"literal": str(lit)},
                )
            for arg in lit.args:
                if arg != FLOOR_ID and arg not in present:
                    raise UnknownObjectError(
                        f"Literal '{lit}' refers to unknown object '{arg}'",
                        object_id=arg,
                    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DNFFormula":
        """
        Parse the upstream dict shape:

            {"conjuncts": [{"literals": [{"relation": "ontop",
                                          "args": ["a", "floor"],
                                          "polarity": true}]}]}

        Raises:
            InvalidGoalFormulaError: If the structure is malformed or a literal is negated
        """
        try:
            conjuncts = []
            for raw_conj in data["conjuncts"]:
                literals = []
                for raw_lit in raw_conj["literals"]:
                    if raw_lit.get("polarity", True) is False:
                        raise InvalidGoalFormulaError(
                            "Negated literals are not supported",
                            context={"literal": raw_lit},
                        )
                    literals.append(
                        Literal(
                            relation=str(raw_lit["relation"]),
                            args=tuple(str(arg) for arg in raw_lit["args"]),
                        )
                    )
                conjuncts.append(Conjunction(tuple(literals)))
        except (KeyError, TypeError, AttributeError) as e:
            raise InvalidGoalFormulaError(
                "Malformed goal formula", original_exception=e
            ) from e
        return cls(tuple(conjuncts))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conjuncts": [
                {
                    "literals": [
                        {"relation": lit.relation, "args": list(lit.args), "polarity": True}
                        for lit in conj.literals
                    ]
                }
                for conj in self.conjuncts
            ]
        }


# ============================================================================
# Parsing
# ============================================================================


def parse_literal(text: str) -> Literal:
    """Parse 'ontop(a,b)' into a Literal."""
    match = _LITERAL_PATTERN.match(text)
    if not match:
        raise InvalidGoalFormulaError(
            f"Cannot parse literal '{text.strip()}'", context={"text": text}
        )
    relation, raw_args = match.groups()
    args = tuple(arg.strip() for arg in raw_args.split(",")) if raw_args else ()
    if any(not arg for arg in args):
        raise InvalidGoalFormulaError(
            f"Empty argument in literal '{text.strip()}'", context={"text": text}
        )
    return Literal(relation=relation, args=args)


def parse_formula(text: str) -> DNFFormula:
    """
    Parse the textual DNF notation.

    Example:
        >>> str(parse_formula("ontop(a, floor) & holding(b) | inside(c,d)"))
        'ontop(a,floor) & holding(b) | inside(c,d)'

    Raises:
        InvalidGoalFormulaError: On syntax errors or wrong arities
        UnknownRelationError: For unknown relation names
    """
    if not text or not text.strip():
        raise InvalidGoalFormulaError("Empty goal formula")

    conjuncts = []
    for raw_conj in text.split("|"):
        literals = tuple(parse_literal(raw_lit) for raw_lit in raw_conj.split("&"))
        conjuncts.append(Conjunction(literals))
    return DNFFormula(tuple(conjuncts))
