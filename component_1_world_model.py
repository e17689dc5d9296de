"""
Component 1: World Model

Representation of the stack world the planner operates on:
- ObjectForm / ObjectSize: Physical vocabulary of objects
- ObjectDescriptor: Form, size and color of one object
- WorldState: Arm position, held object and left-to-right stacks

Invariant: every object identifier appears in exactly one place, either in
exactly one stack or as the held object.

Author: Stack Planner Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from common.constants import FLOOR_ID
from planner_exceptions import InvalidWorldStateError, wrap_exception

# ============================================================================
# Object Vocabulary
# ============================================================================


class ObjectForm(Enum):
    """Physical forms an object can have."""

    BRICK = "brick"
    PLANK = "plank"
    BALL = "ball"
    PYRAMID = "pyramid"
    BOX = "box"
    TABLE = "table"
    FLOOR = "floor"


class ObjectSize(Enum):
    """Object sizes."""

    LARGE = "large"
    SMALL = "small"


@dataclass(frozen=True)
class ObjectDescriptor:
    """
    Physical description of one object.

    The synthetic floor object has no size and no color.
    """

    form: ObjectForm
    size: Optional[ObjectSize] = None
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectDescriptor":
        """Parse {"form": "ball", "size": "small", "color": "white"}."""
        try:
            form = ObjectForm(data["form"])
            size = ObjectSize(data["size"]) if data.get("size") else None
        except (KeyError, ValueError, TypeError) as e:
            raise wrap_exception(
                e, InvalidWorldStateError, "Invalid object descriptor", descriptor=data
            )
        if size is None and form != ObjectForm.FLOOR:
            raise InvalidWorldStateError(
                "Object descriptor without size", context={"descriptor": data}
            )
        return cls(form=form, size=size, color=data.get("color"))

    def __str__(self) -> str:
        parts = [p for p in (self.size and self.size.value, self.color) if p]
        return " ".join(parts + [self.form.value])


FLOOR = ObjectDescriptor(form=ObjectForm.FLOOR)
"""The synthetic object under every stack."""


# ============================================================================
# World State
# ============================================================================


@dataclass
class WorldState:
    """
    Snapshot of the stack world.

    Attributes:
        arm: Index of the stack under the arm (0 <= arm < len(stacks))
        holding: Identifier of the held object, or None
        stacks: Left-to-right stacks, each listed bottom-to-top
        objects: Object identifier -> physical descriptor (read-only)
    """

    arm: int
    holding: Optional[str]
    stacks: List[List[str]]
    objects: Dict[str, ObjectDescriptor] = field(default_factory=dict)

    def copy(self) -> "WorldState":
        """
        Copy with independent stacks.

        The objects mapping is shared; it is never mutated after construction.
        """
        return WorldState(
            arm=self.arm,
            holding=self.holding,
            stacks=[list(stack) for stack in self.stacks],
            objects=self.objects,
        )

    @property
    def stack_count(self) -> int:
        return len(self.stacks)

    def descriptor(self, object_id: str) -> ObjectDescriptor:
        """Descriptor of an object; 'floor' maps to the synthetic floor."""
        if object_id == FLOOR_ID:
            return FLOOR
        try:
            return self.objects[object_id]
        except KeyError as e:
            raise wrap_exception(
                e, InvalidWorldStateError, "Unknown object", object_id=object_id
            )

    def locate(self, object_id: str) -> Optional[Tuple[int, int]]:
        """
        (column, height) of a stacked object.

        Returns None when the object is held or not in the world.
        """
        for column, stack in enumerate(self.stacks):
            if object_id in stack:
                return column, stack.index(object_id)
        return None

    def top_of(self, column: int) -> str:
        """Identifier on top of a stack, or 'floor' when the stack is empty."""
        stack = self.stacks[column]
        return stack[-1] if stack else FLOOR_ID

    def all_object_ids(self) -> List[str]:
        """Identifiers present in the world (stacked or held)."""
        ids = [obj for stack in self.stacks for obj in stack]
        if self.holding is not None:
            ids.append(self.holding)
        return ids

    def validate(self) -> None:
        """
        Check the structural invariants.

        Raises:
            InvalidWorldStateError: On the first violation found
        """
        if not self.stacks:
            raise InvalidWorldStateError("World has no stacks")

        if not 0 <= self.arm < len(self.stacks):
            raise InvalidWorldStateError(
                "Arm position outside the stacks",
                context={"arm": self.arm, "stacks": len(self.stacks)},
            )

        seen = set()
        for object_id in self.all_object_ids():
            if object_id == FLOOR_ID:
                raise InvalidWorldStateError(
                    "'floor' is reserved and cannot be placed or held"
                )
            if object_id in seen:
                raise InvalidWorldStateError(
                    "Object appears more than once", context={"object_id": object_id}
                )
            if object_id not in self.objects:
                raise InvalidWorldStateError(
                    "Object has no descriptor", context={"object_id": object_id}
                )
            seen.add(object_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorldState":
        """
        Parse the upstream world description.

        Expected shape:
            {
                "arm": 0,
                "holding": null,
                "stacks": [["e"], ["a", "l"], []],
                "objects": {"e": {"form": "ball", "size": "large", "color": "white"}, ...}
            }

        Additional keys (e.g. "examples") are ignored.

        Raises:
            InvalidWorldStateError: If the description is malformed or inconsistent
        """
        try:
            arm = int(data["arm"])
            holding = data.get("holding") or None
            stacks = [[str(obj) for obj in stack] for stack in data["stacks"]]
            raw_objects = data["objects"]
            objects = {
                str(obj_id): ObjectDescriptor.from_dict(desc)
                for obj_id, desc in raw_objects.items()
            }
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise wrap_exception(
                e, InvalidWorldStateError, "Malformed world description"
            )

        world = cls(arm=arm, holding=holding, stacks=stacks, objects=objects)
        world.validate()
        return world

    def to_dict(self) -> Dict[str, Any]:
        return {
            "arm": self.arm,
            "holding": self.holding,
            "stacks": [list(stack) for stack in self.stacks],
            "objects": {
                obj_id: {
                    "form": desc.form.value,
                    "size": desc.size.value if desc.size else None,
                    "color": desc.color,
                }
                for obj_id, desc in self.objects.items()
            },
        }

    def to_string(self) -> str:
        """Human-readable rendering, one stack per line."""
        lines = []
        for column, stack in enumerate(self.stacks):
            marker = "*" if column == self.arm else " "
            lines.append(f"{marker}{column}: {' '.join(stack) if stack else '-'}")
        lines.append(f"holding: {self.holding or '-'}")
        return "\n".join(lines)
