"""Podfile Domain Model - The manifest describing a project's dependencies.

A Podfile can be written in two forms, selected by file name:

* ``CocoaPods.podfile.yaml`` - a YAML mapping::

      platform:
        ios: '6.0'
      sources:
        - https://github.com/CocoaPods/Specs.git
      dependencies:
        - AFNetworking (~> 1.0)
        - JSONKit

* ``CocoaPods.podfile`` / ``Podfile`` - the declarative DSL. Only the
  statements that describe dependencies are read (``platform``, ``source``,
  ``pod``, ``target ... do`` / ``end``); hook blocks and other statements
  are skipped.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from loguru import logger

from .core.exceptions import ParsingError


_DEPENDENCY_STRING = re.compile(r"^\s*(?P<name>[^\s(]+)\s*(?:\((?P<requirements>[^)]*)\))?\s*$")
_QUOTED = re.compile(r"""'([^']*)'|"([^"]*)\"""")
_SYMBOL_OR_QUOTED = re.compile(r"""^\s*(?::(?P<symbol>\w+)|'(?P<single>[^']*)'|"(?P<double>[^"]*)")""")
_OPTION = re.compile(r"""(?::(?P<sym>\w+)\s*=>|\b(?P<key>\w+):)\s*(['"])(?P<value>.*?)\3""")
_OPTION_START = re.compile(r""":\w+\s*=>|\b\w+:\s""")
_BLOCK_OPEN = re.compile(r"\bdo(\s*\|[^|]*\|)?\s*$")
_KEYWORD_BLOCK = re.compile(r"^(if|unless|case|def|begin|while|until|class|module)\b")
_ONE_LINE_BLOCK = re.compile(r";\s*end\s*$")
_TARGET_KEYWORDS = ("target", "abstract_target")


@dataclass(frozen=True)
class Dependency:
    """A single ``pod`` requirement.

    Attributes:
        name: Pod name, possibly with a subspec (``RestKit/Core``)
        requirements: Version requirements such as ``~> 1.0``
        options: External source options (``git``, ``path``, ...)
    """

    name: str
    requirements: Tuple[str, ...] = ()
    options: Dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def from_string(cls, value: str) -> "Dependency":
        """Parse the ``Name (req, req)`` notation used in YAML Podfiles and lockfiles."""
        match = _DEPENDENCY_STRING.match(value or "")
        if not match:
            raise ValueError(f"Invalid dependency string: {value!r}")
        requirements = match.group("requirements") or ""
        return cls(
            name=match.group("name"),
            requirements=tuple(r.strip() for r in requirements.split(",") if r.strip()),
        )

    def __str__(self) -> str:
        if self.requirements:
            return f"{self.name} ({', '.join(self.requirements)})"
        return self.name


@dataclass(frozen=True)
class Platform:
    """Target platform and optional deployment target."""

    name: str
    deployment_target: Optional[str] = None

    def __str__(self) -> str:
        if self.deployment_target:
            return f"{self.name} {self.deployment_target}"
        return self.name


@dataclass(frozen=True)
class Podfile:
    """Parsed Podfile.

    Attributes:
        path: File the Podfile was read from
        platform: Declared platform, if any
        sources: Spec repository URLs, in declaration order
        dependencies: Every ``pod`` requirement, in declaration order
        targets: Names of the declared targets
    """

    path: Path
    platform: Optional[Platform] = None
    sources: Tuple[str, ...] = ()
    dependencies: Tuple[Dependency, ...] = ()
    targets: Tuple[str, ...] = ()

    @classmethod
    def from_file(cls, path: Path) -> "Podfile":
        """Read and parse a Podfile.

        Args:
            path: Podfile location; the format is chosen by its suffix

        Returns:
            Parsed Podfile

        Raises:
            ParsingError: If the file cannot be read or is malformed
        """
        path = Path(path)
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ParsingError(str(path), "load_podfile", f"Cannot read file: {e}", cause=e) from e

        if path.suffix in (".yaml", ".yml"):
            podfile = cls._from_yaml(path, contents)
        else:
            podfile = cls._from_dsl(path, contents)

        logger.debug(f"Loaded Podfile {path} with {len(podfile.dependencies)} dependencies")
        return podfile

    def dependency_names(self) -> List[str]:
        return [dependency.name for dependency in self.dependencies]

    @classmethod
    def _from_yaml(cls, path: Path, contents: str) -> "Podfile":
        try:
            data = yaml.safe_load(contents)
        except yaml.YAMLError as e:
            raise ParsingError(str(path), "load_podfile", str(e), cause=e) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ParsingError(str(path), "load_podfile", "Top level must be a mapping")

        return cls(
            path=path,
            platform=_yaml_platform(path, data.get("platform")),
            sources=tuple(str(source) for source in data.get("sources") or ()),
            dependencies=tuple(_yaml_dependencies(path, data.get("dependencies") or ())),
            targets=tuple(str(target) for target in data.get("targets") or ()),
        )

    @classmethod
    def _from_dsl(cls, path: Path, contents: str) -> "Podfile":
        platform = None
        sources: List[str] = []
        dependencies: List[Dependency] = []
        targets: List[str] = []
        # One entry per open block: the target name, or None for hooks
        blocks: List[Optional[str]] = []

        for lineno, raw_line in enumerate(contents.splitlines(), start=1):
            line = _strip_comment(raw_line).strip()
            if not line:
                continue

            if line == "end":
                if not blocks:
                    raise ParsingError(str(path), "load_podfile", f"Unexpected 'end' on line {lineno}")
                blocks.pop()
                continue

            keyword, _, rest = line.partition(" ")
            in_hook = any(block is None for block in blocks)

            if keyword in _TARGET_KEYWORDS and _BLOCK_OPEN.search(line) and not in_hook:
                name = _first_token(rest)
                if name is None:
                    raise ParsingError(str(path), "load_podfile", f"Target without a name on line {lineno}")
                targets.append(name)
                blocks.append(name)
            elif (_BLOCK_OPEN.search(line) or _KEYWORD_BLOCK.match(line)) and not _ONE_LINE_BLOCK.search(line):
                blocks.append(None)
            elif in_hook:
                continue
            elif keyword == "platform":
                platform = _dsl_platform(path, lineno, rest)
            elif keyword == "source":
                source = _first_token(rest)
                if source is None:
                    raise ParsingError(str(path), "load_podfile", f"Source without a URL on line {lineno}")
                sources.append(source)
            elif keyword == "pod":
                dependencies.append(_dsl_dependency(path, lineno, rest))

        if blocks:
            raise ParsingError(str(path), "load_podfile", f"Missing 'end' for {len(blocks)} open block(s)")

        return cls(
            path=path,
            platform=platform,
            sources=tuple(sources),
            dependencies=tuple(dependencies),
            targets=tuple(targets),
        )


def _strip_comment(line: str) -> str:
    """Drop a trailing ``# comment``, leaving ``#`` inside quoted strings alone."""
    quote = None
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif quote is not None:
            if char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "#":
            return line[:index]
    return line


def _first_token(text: str) -> Optional[str]:
    match = _SYMBOL_OR_QUOTED.match(text)
    if not match:
        return None
    return next(group for group in match.group("symbol", "single", "double") if group is not None)


def _dsl_platform(path: Path, lineno: int, rest: str) -> Platform:
    name = _first_token(rest)
    if name is None:
        raise ParsingError(str(path), "load_podfile", f"Platform without a name on line {lineno}")
    versions = [a or b for a, b in _QUOTED.findall(rest)]
    # A quoted platform name is itself the first quoted match
    if not rest.lstrip().startswith(":") and versions:
        versions = versions[1:]
    return Platform(name=name, deployment_target=versions[0] if versions else None)


def _dsl_dependency(path: Path, lineno: int, rest: str) -> Dependency:
    option_start = _OPTION_START.search(rest)
    positional = rest[:option_start.start()] if option_start else rest
    options_text = rest[option_start.start():] if option_start else ""

    arguments = [a or b for a, b in _QUOTED.findall(positional)]
    if not arguments or not arguments[0].strip():
        raise ParsingError(str(path), "load_podfile", f"Invalid pod declaration on line {lineno}: {rest!r}")

    options = {
        (match.group("sym") or match.group("key")): match.group("value")
        for match in _OPTION.finditer(options_text)
    }
    return Dependency(name=arguments[0], requirements=tuple(arguments[1:]), options=options)


def _yaml_platform(path: Path, value: Any) -> Optional[Platform]:
    if value is None:
        return None
    if isinstance(value, str):
        return Platform(name=value)
    if isinstance(value, dict) and len(value) == 1:
        name, target = next(iter(value.items()))
        return Platform(name=str(name), deployment_target=str(target) if target is not None else None)
    raise ParsingError(str(path), "load_podfile", f"Invalid platform: {value!r}")


def _yaml_dependencies(path: Path, values: Any) -> List[Dependency]:
    if not isinstance(values, (list, tuple)):
        raise ParsingError(str(path), "load_podfile", "'dependencies' must be a list")

    dependencies = []
    for value in values:
        if isinstance(value, str):
            try:
                dependencies.append(Dependency.from_string(value))
            except ValueError as e:
                raise ParsingError(str(path), "load_podfile", str(e), cause=e) from e
        elif isinstance(value, dict) and len(value) == 1:
            name, requirements = next(iter(value.items()))
            if isinstance(requirements, str):
                requirements = [requirements]
            dependencies.append(Dependency(name=str(name), requirements=tuple(str(r) for r in requirements or ())))
        else:
            raise ParsingError(str(path), "load_podfile", f"Invalid dependency: {value!r}")
    return dependencies
