"""Protocol for application objects that persist themselves as S-expressions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from typedsexpr.nodes import SExpr

T = TypeVar("T")

if TYPE_CHECKING:
    from uuid import UUID


class Serializable(ABC):
    """Base for objects that can write their fields into a list node.

    The base carries no state, so it can be mixed into any class hierarchy.
    Subclasses implement ``serialize``.
    """

    __slots__ = ()

    @abstractmethod
    def serialize(self, root: SExpr) -> None:
        """Append this object's fields as children of ``root``."""
        ...

    def serialize_to_root(self, name: str) -> SExpr:
        """Serialize this object into a new list named ``name``."""
        root = SExpr.create_list(name)
        self.serialize(root)
        return root

    @staticmethod
    def serialize_object_container(
        root: SExpr,
        container: Iterable[Serializable],
        item_name: str,
    ) -> None:
        """Append each object as ``(item_name ...)`` on its own line.

        A closing line break follows the group when it spans multiple lines.
        """
        for obj in container:
            root.ensure_line_break()
            root.append_child(obj.serialize_to_root(item_name))
        root.ensure_line_break_if_multi_line()

    @staticmethod
    def serialize_pointer_container(
        root: SExpr,
        container: Iterable[Callable[[], Serializable | None]],
        item_name: str,
    ) -> None:
        """Like ``serialize_object_container`` for references to objects.

        Each element is called to obtain its object, so ``weakref.ref``
        instances can be passed directly.

        Raises:
            ReferenceError: If a reference no longer points to an object

        """
        objects = [_dereference(ref) for ref in container]
        Serializable.serialize_object_container(root, objects, item_name)

    @staticmethod
    def serialize_object_container_uuid_sorted(
        root: SExpr,
        container: Iterable[Serializable] | Mapping[object, Serializable],
        item_name: str,
    ) -> None:
        """Serialize objects in ascending order of their ``uuid``.

        Output is independent of the container's iteration order, and the
        container itself is left untouched. A mapping contributes its values.
        Each object must expose a ``uuid`` attribute.
        """
        snapshot = _snapshot(container)
        snapshot.sort(key=_uuid_of)
        Serializable.serialize_object_container(root, snapshot, item_name)

    @staticmethod
    def serialize_pointer_container_uuid_sorted(
        root: SExpr,
        container: Iterable[Callable[[], Serializable | None]]
        | Mapping[object, Callable[[], Serializable | None]],
        item_name: str,
    ) -> None:
        """Serialize referenced objects in ascending order of their ``uuid``.

        Raises:
            ReferenceError: If a reference no longer points to an object

        """
        snapshot = [_dereference(ref) for ref in _snapshot(container)]
        snapshot.sort(key=_uuid_of)
        Serializable.serialize_object_container(root, snapshot, item_name)


def _snapshot(container: Iterable[T] | Mapping[object, T]) -> list[T]:
    if isinstance(container, Mapping):
        return list(container.values())
    return list(container)


def _dereference(ref: Callable[[], Serializable | None]) -> Serializable:
    obj = ref()
    if obj is None:
        msg = "Cannot serialize a reference to an object that no longer exists"
        raise ReferenceError(msg)
    return obj


def _uuid_of(obj: Any) -> UUID:
    return obj.uuid
