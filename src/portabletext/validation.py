"""Structural validation of Portable Text documents.

Validation never raises and never stops at the first finding: every problem
in the document is reported as a ``Diagnostic``. Unknown node types are
always legal. An empty result means none of the implemented checks fired,
not that the document conforms to every Portable Text rule.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from portabletext.config import Settings, settings
from portabletext.models import SPAN_TYPE, Document, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOptions:
    """Optional checks; the defaults are the most permissive."""

    require_keys: bool = False  # every node needs a non-empty _key
    check_mark_def_refs: bool = False  # span marks must resolve to a markDef key
    allow_empty_text: bool = True  # "" is acceptable span text

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ValidationOptions":
        """Build options from environment-backed settings."""
        config = config or settings
        return cls(
            require_keys=config.require_keys,
            check_mark_def_refs=config.check_mark_def_refs,
            allow_empty_text=config.allow_empty_text,
        )


@dataclass
class Diagnostic:
    """A validation finding with its location."""

    path: str
    message: str
    node: Optional[Node] = None  # node that owns the problem

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def validate(doc: Document, options: Optional[ValidationOptions] = None) -> list[Diagnostic]:
    """Validate a document.

    Args:
        doc: Document to check.
        options: Optional checks to enable. Defaults to ValidationOptions().

    Returns:
        All findings in document order; empty when nothing was found.
    """
    return validate_with_options(doc, options or ValidationOptions())


def validate_with_options(doc: Document, options: ValidationOptions) -> list[Diagnostic]:
    """Validate a document with explicit options."""
    diagnostics: list[Diagnostic] = []
    for index, node in enumerate(doc):
        path = f"[{index}]"

        if not node.type:
            diagnostics.append(Diagnostic(path, "missing _type", node))
            continue

        if options.require_keys and not node.key:
            diagnostics.append(Diagnostic(path, "missing _key", node))

        if node.is_block:
            diagnostics.extend(_check_block(node, path, options))

    logger.debug("Validated %d nodes: %d findings", len(doc), len(diagnostics))
    return diagnostics


def _check_block(node: Node, path: str, options: ValidationOptions) -> list[Diagnostic]:
    found: list[Diagnostic] = []
    mark_def_keys = {md.key for md in node.mark_defs or () if md.key is not None}

    for j, child in enumerate(node.children or ()):
        child_path = f"{path}.children[{j}]"
        if not child.type:
            found.append(Diagnostic(child_path, "missing _type", node))
            continue
        if child.type != SPAN_TYPE:
            continue

        if child.text is None:
            found.append(Diagnostic(child_path, "span missing text", node))
        elif not options.allow_empty_text and child.text == "":
            found.append(Diagnostic(child_path, "span has empty text", node))

        if options.check_mark_def_refs:
            for mark in child.marks or ():
                if mark not in mark_def_keys:
                    found.append(
                        Diagnostic(child_path, f"mark '{mark}' not found in markDefs", node)
                    )

    for j, mark_def in enumerate(node.mark_defs or ()):
        md_path = f"{path}.markDefs[{j}]"
        if not mark_def.type:
            found.append(Diagnostic(md_path, "markDef missing _type", node))
        if not mark_def.key:
            found.append(Diagnostic(md_path, "markDef missing _key", node))

    return found
