"""
conceal._core.extractor
=======================
Depth-first discovery of role-annotated fields.

Walks a record in member declaration order and classifies every member:

  role ""/None  → skipped, never inspected or recursed into
  role "id"     → the record tree's single identifier (must be a str)
  role "data"   → str        → text location
                  bytes      → binary location
                  list/tuple → every element is a nested record, recursed
                  record     → recursed
                  None       → skipped
                  other      → skipped with a warning, or an error in strict mode
  anything else → BadTagValueError

One Classification accumulates across the whole call tree, so nested
records share the outer identifier and a second identifier anywhere in
the tree is a DuplicateIDsError. The input value is never mutated.
"""

from __future__ import annotations

from typing import Any, Optional

from conceal.core.data_types import Classification, FieldHandle, FieldKind, FieldRole
from conceal.core.exceptions import (
    BadTagValueError,
    DuplicateIDsError,
    ExtractionError,
    IDNotStringError,
    MaxDepthExceededError,
    NilValueError,
    NotPointerError,
    UnsupportedFieldError,
)
from conceal.core.logger import StructuredLogger
from conceal._core.annotations import DEFAULT_TAG_KEY, describe_fields, is_frozen, is_record


class Extractor:
    """
    Builds a Classification for a record.

    Parameters
    ----------
    tag_key : str
        Dataclass metadata key holding the role declaration.
    on_unsupported : "skip" or "fail"
        What to do with a data member of a kind that cannot be transformed.
    max_depth : int
        Maximum record nesting below the root.
    logger : StructuredLogger or None
        Receives "extract" and "skip_unsupported" events.
    """

    def __init__(
        self,
        tag_key: str = DEFAULT_TAG_KEY,
        on_unsupported: str = "skip",
        max_depth: int = 64,
        logger: Optional[StructuredLogger] = None,
    ):
        self.tag_key        = tag_key
        self.on_unsupported = on_unsupported
        self.max_depth      = max_depth
        self._logger        = logger or StructuredLogger(name="extractor")

    @classmethod
    def from_config(cls, config, logger: Optional[StructuredLogger] = None) -> "Extractor":
        return cls(
            tag_key        = config.tag_key,
            on_unsupported = config.on_unsupported,
            max_depth      = config.max_depth,
            logger         = logger,
        )

    def extract(self, root: Any) -> Classification:
        """
        Classify every role-annotated field reachable from ``root``.

        Raises
        ------
        NilValueError, NotPointerError, DuplicateIDsError, IDNotStringError,
        BadTagValueError, UnsupportedFieldError, MaxDepthExceededError
        """
        result = Classification()
        root_path = type(root).__name__ if root is not None else ""
        self._extract(root, result, root_path, 0)

        self._logger.log(
            "extract",
            root          = root_path,
            text_fields   = len(result.text_locations),
            binary_fields = len(result.binary_locations),
            skipped       = len(result.skipped),
            identifier    = result.identifier,
        )
        return result

    # ── Traversal ─────────────────────────────────────────────────────────────

    def _extract(self, obj: Any, result: Classification, path: str, depth: int) -> None:
        if obj is None:
            raise NilValueError("value is None", details={"path": path})

        specs = describe_fields(obj, self.tag_key)
        if specs is None:
            raise NotPointerError(
                f"value is not a record: {type(obj).__name__}",
                details={"path": path},
            )
        if is_frozen(obj):
            raise NotPointerError(
                f"record is frozen and cannot be modified: {type(obj).__name__}",
                details={"path": path},
            )

        # A record reachable through two paths is collected once
        if id(obj) in result.visited:
            return
        if depth > self.max_depth:
            raise MaxDepthExceededError(
                f"record nesting exceeds max_depth={self.max_depth}",
                details={"path": path},
            )
        result.visited.add(id(obj))

        for spec in specs:
            member_path = f"{path}.{spec.name}"

            if spec.role is None or spec.role == FieldRole.NONE:
                continue

            if spec.role == FieldRole.ID:
                self._read_identifier(obj, spec.name, result, member_path)

            elif spec.role == FieldRole.DATA:
                self._collect(obj, spec.name, result, member_path, depth)

            else:
                raise BadTagValueError(
                    f"got wrong value in tag field: {spec.role!r}",
                    details={"path": member_path, "valid": [FieldRole.ID, FieldRole.DATA]},
                )

    def _read_identifier(self, obj: Any, name: str, result: Classification, path: str) -> None:
        if result.has_identifier:
            raise DuplicateIDsError("duplicate id tag", details={"path": path})

        value = _read_member(obj, name, path)
        if not isinstance(value, str):
            raise IDNotStringError(
                f"id not string: got {type(value).__name__}",
                details={"path": path},
            )
        result.identifier     = value
        result.has_identifier = True

    def _collect(self, obj: Any, name: str, result: Classification, path: str, depth: int) -> None:
        value = _read_member(obj, name, path)

        if isinstance(value, str):
            result.text_locations.append(FieldHandle(obj, name, FieldKind.TEXT, path))

        elif isinstance(value, (bytes, bytearray)):
            result.binary_locations.append(FieldHandle(obj, name, FieldKind.BINARY, path))

        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                self._extract(item, result, f"{path}[{index}]", depth + 1)

        elif value is None:
            return

        elif is_record(value, self.tag_key):
            self._extract(value, result, path, depth + 1)

        else:
            self._unsupported(value, result, path)

    def _unsupported(self, value: Any, result: Classification, path: str) -> None:
        kind = type(value).__name__
        if self.on_unsupported == "fail":
            raise UnsupportedFieldError(
                f"data field holds an unsupported kind: {kind}",
                details={"path": path, "kind": kind},
            )
        result.skipped.append(path)
        self._logger.warn("skip_unsupported", path=path, kind=kind)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _read_member(obj: Any, name: str, path: str) -> Any:
    try:
        return getattr(obj, name)
    except AttributeError as exc:
        raise ExtractionError(
            f"declared field is missing on {type(obj).__name__}: {name!r}",
            details={"path": path},
        ) from exc
