"""Describe a chain of event targets in an INI file.

Each target is a ``[target:<name>]`` section::

    [target:window]
    handlers = load
    capture = click

    [target:button]
    parent = window
    handlers = click
    capture = click
    bubble = click

``parent`` names a target declared earlier in the file. ``handlers`` lists the
handler slots of the target; ``capture`` and ``bubble`` list the event types
for which a recording listener is installed when the chain is built with a
DispatchTracer.
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import NamedTuple

from domevent.lib.event_target import EventTarget
from domevent.lib.tracer import BUBBLE, CAPTURE, HANDLER, DispatchTracer

logger = logging.getLogger(__name__)

SECTION_PREFIX = "target:"
KNOWN_KEYS = {"parent", "handlers", "capture", "bubble"}


class TreeConfigError(ValueError):
    """The INI description of a target chain is malformed."""


class TargetDecl(NamedTuple):
    name: str
    parent: str | None
    handlers: tuple[str, ...]
    capture: tuple[str, ...]
    bubble: tuple[str, ...]


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


class TreeConfig:
    """Parsed target chain, in declaration order."""

    def __init__(self, declared: list[TargetDecl]) -> None:
        self.declared: dict[str, TargetDecl] = {}
        for decl in declared:
            if decl.name in self.declared:
                raise TreeConfigError(f"Target declared twice: {decl.name}")
            if decl.parent is not None and decl.parent not in self.declared:
                raise TreeConfigError(
                    f"Target {decl.name} has parent {decl.parent}, which is not declared before it"
                )
            self.declared[decl.name] = decl

    @classmethod
    def from_string(cls, text: str, source: str = "<string>") -> TreeConfig:
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read_string(text, source=source)
        except configparser.Error as e:
            raise TreeConfigError(f"Could not parse {source}: {e}") from e
        return cls._from_parser(parser, source)

    @classmethod
    def from_file(cls, path: str | Path) -> TreeConfig:
        path = Path(path)
        logger.debug(f"Reading target chain from {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TreeConfigError(f"Could not read {path}: {e}") from e
        return cls.from_string(text, source=str(path))

    @classmethod
    def _from_parser(cls, parser: configparser.ConfigParser, source: str) -> TreeConfig:
        declared = []
        for section in parser.sections():
            if not section.startswith(SECTION_PREFIX):
                logger.warning(f"Ignoring section [{section}] in {source}")
                continue
            name = section[len(SECTION_PREFIX) :].strip()
            if not name:
                raise TreeConfigError(f"Section [{section}] in {source} has no target name")

            options = parser[section]
            unknown = set(options) - KNOWN_KEYS
            if unknown:
                raise TreeConfigError(
                    f"Unknown keys in [{section}]: {', '.join(sorted(unknown))}"
                )
            declared.append(
                TargetDecl(
                    name=name,
                    parent=options.get("parent", "").strip() or None,
                    handlers=_split_list(options.get("handlers", "")),
                    capture=_split_list(options.get("capture", "")),
                    bubble=_split_list(options.get("bubble", "")),
                )
            )

        if not declared:
            raise TreeConfigError(f"No [{SECTION_PREFIX}<name>] sections found in {source}")
        return cls(declared)

    def depth(self, name: str) -> int:
        depth = 0
        parent = self.declared[name].parent
        while parent is not None:
            depth += 1
            parent = self.declared[parent].parent
        return depth

    def deepest(self) -> str:
        """Name of the first declared target with the longest ancestor chain."""
        return max(self.declared, key=self.depth)

    def build(self, tracer: DispatchTracer | None = None) -> dict[str, EventTarget]:
        """Create the EventTargets, installing recording callbacks when ``tracer`` is given."""
        targets: dict[str, EventTarget] = {}
        for decl in self.declared.values():
            parent = targets[decl.parent] if decl.parent is not None else None
            target = EventTarget(parent, decl.handlers)
            targets[decl.name] = target

            if tracer is None:
                continue
            for event_type in decl.capture:
                target.add_event_listener(event_type, tracer.recorder(decl.name, CAPTURE), True)
            for event_type in decl.handlers:
                target.set_handler(event_type, tracer.recorder(decl.name, HANDLER))
            for event_type in decl.bubble:
                target.add_event_listener(event_type, tracer.recorder(decl.name, BUBBLE))

        logger.debug(f"Built {len(targets)} event targets")
        return targets
