"""
Name List Document Example
==========================

A small application object persisted as a ``.bms`` S-expression file:
- Implementing the Serializable protocol
- Writing fields with append_field
- Reading them back with get_children, get_child and deserialize

Run it with a file path to save the document, load it again and print the
values that were read:

    python examples/name_list_document.py names.bms
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from typedsexpr import SExpr, Serializable, deserialize, parse

logger = logging.getLogger(__name__)

ROOT_NAME = "bmserialize"


class NameListDocument(Serializable):
    """A list of names and a list of ids."""

    def __init__(
        self,
        names: list[str] | None = None,
        ids: list[int] | None = None,
    ) -> None:
        self.names = names if names is not None else []
        self.ids = ids if ids is not None else []

    def serialize(self, root: SExpr) -> None:
        root.ensure_line_break()
        for name in self.names:
            root.append_field("name", name)
        root.ensure_line_break()
        for id_ in self.ids:
            root.append_field("id", id_)
        root.ensure_line_break()

    @classmethod
    def from_sexpr(cls, root: SExpr) -> NameListDocument:
        names = [deserialize(n.get_child("@0"), str) for n in root.get_children("name")]
        ids = [deserialize(n.get_child("@0"), int) for n in root.get_children("id")]
        return cls(names, ids)

    def to_bytes(self) -> bytes:
        return self.serialize_to_root(ROOT_NAME).to_bytes()

    @classmethod
    def from_bytes(cls, content: bytes) -> NameListDocument:
        return cls.from_sexpr(parse(content))


def save(document: NameListDocument, path: Path) -> None:
    path.write_bytes(document.to_bytes())
    logger.info(f"Saved {len(document.names)} names, {len(document.ids)} ids to {path}")


def load(path: Path) -> NameListDocument:
    document = NameListDocument.from_bytes(path.read_bytes())
    logger.info(f"Loaded {len(document.names)} names, {len(document.ids)} ids")
    return document


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if len(argv) != 1:
        print("usage: name_list_document.py FILE.bms", file=sys.stderr)
        return 2

    path = Path(argv[0])
    document = NameListDocument(
        names=["name1", "name2", "name3", "name4", "name5"],
        ids=[1, 2, 3, 4, 5],
    )
    save(document, path)

    loaded = load(path)
    for name in loaded.names:
        print(name)
    print(path.read_bytes().decode())
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
