# topmark:header:start
#
#   project      : EmbedFmt
#   file         : model.py
#   file_relpath : src/embedfmt/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `IndentStyle`: the indentation parameters threaded through reconstruction.
    - `Config`: an immutable, runtime snapshot used by processing steps.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Layering (lowest to highest precedence):
    1. packaged defaults (``embedfmt-default.toml``),
    2. project files discovered from the working directory upwards
       (``pyproject.toml`` ``[tool.embedfmt]``, then ``embedfmt.toml``),
    3. explicit ``--config`` files,
    4. CLI overrides.

Glob lists are *appended* layer over layer, unless a layer sets
``ignore_default_globs = true``, in which case its own lists replace
everything below it. The ``[style]`` table is merged key-wise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from embedfmt.config.loaders import TomlTable, load_defaults_dict, load_toml_dict
from embedfmt.config.logging import get_logger
from embedfmt.constants import (
    DEFAULT_LANGUAGE,
    PROJECT_TOML_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
)
from embedfmt.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from embedfmt.config.logging import EmbedfmtLogger

logger: EmbedfmtLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class IndentStyle:
    """Indentation parameters for re-inserted script blocks.

    Attributes:
        tab_unit (str): The literal string repeated once per indentation level.
        tab_width (int): Character width of ``tab_unit``; used to derive the
            nesting depth from a tag's source column.
        literal_kinds (tuple[str, ...]): Tokenizer token kinds (e.g. ``"Template"``,
            ``"String"``) whose interior lines are never re-indented.
    """

    tab_unit: str = "  "
    tab_width: int = 2
    literal_kinds: tuple[str, ...] = ("Template",)

    def validate(self) -> None:
        """Raise `ConfigError` if the style cannot be applied."""
        if not self.tab_unit:
            raise ConfigError("indent.tab_unit must be a non-empty string")
        if self.tab_width < 1:
            raise ConfigError(f"indent.tab_width must be >= 1 (got {self.tab_width})")


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for EmbedFmt.

    Attributes:
        config_files (tuple[Path | str, ...]): Config sources that contributed, in merge order.
        include_patterns (tuple[str, ...]): Git-wildmatch patterns selecting candidate files.
        exclude_patterns (tuple[str, ...]): Git-wildmatch patterns removing candidate files.
        indent (IndentStyle): Indentation parameters for embedded blocks.
        formatter_command (str): Formatter executable, optionally with arguments.
        language (str): Language hint passed to the formatter for embedded blocks.
        style (Mapping[str, Any]): Formatter style options (clang-format ``-style`` JSON).
        apply_changes (bool): ``True`` to overwrite files; ``False`` for a dry run.
    """

    config_files: tuple[Path | str, ...]
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]
    indent: IndentStyle
    formatter_command: str
    language: str
    style: Mapping[str, Any]
    apply_changes: bool

    def to_toml_dict(self) -> TomlTable:
        """Convert this Config into a TOML-serializable dict (same shape as the defaults)."""
        return {
            "files": {
                "include": list(self.include_patterns),
                "exclude": list(self.exclude_patterns),
            },
            "indent": {
                "tab_unit": self.indent.tab_unit,
                "tab_width": self.indent.tab_width,
                "literal_kinds": list(self.indent.literal_kinds),
            },
            "formatter": {
                "command": self.formatter_command,
                "language": self.language,
            },
            "style": dict(self.style),
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this config."""
        return MutableConfig(
            config_files=list(self.config_files),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            tab_unit=self.indent.tab_unit,
            tab_width=self.indent.tab_width,
            literal_kinds=list(self.indent.literal_kinds),
            formatter_command=self.formatter_command,
            language=self.language,
            style=dict(self.style),
            apply_changes=self.apply_changes,
        )


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Scalar fields use ``None`` for "not set by this layer" so that merging can
    tell an explicit value from an inherited one.
    """

    config_files: list[Path | str] = field(default_factory=lambda: [])
    include_patterns: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    ignore_default_globs: bool | None = None
    tab_unit: str | None = None
    tab_width: int | None = None
    literal_kinds: list[str] | None = None
    formatter_command: str | None = None
    language: str | None = None
    style: dict[str, Any] = field(default_factory=lambda: {})
    apply_changes: bool | None = None

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`.

        Raises:
            ConfigError: If the resulting indentation style is invalid.
        """
        defaults = IndentStyle()
        indent = IndentStyle(
            tab_unit=self.tab_unit if self.tab_unit is not None else defaults.tab_unit,
            tab_width=self.tab_width if self.tab_width is not None else defaults.tab_width,
            literal_kinds=tuple(self.literal_kinds)
            if self.literal_kinds is not None
            else defaults.literal_kinds,
        )
        indent.validate()
        return Config(
            config_files=tuple(self.config_files),
            include_patterns=tuple(_dedupe(self.include_patterns)),
            exclude_patterns=tuple(_dedupe(self.exclude_patterns)),
            indent=indent,
            formatter_command=self.formatter_command or "clang-format",
            language=self.language or DEFAULT_LANGUAGE,
            style=MappingProxyType(dict(self.style)),
            apply_changes=True if self.apply_changes is None else self.apply_changes,
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the default configuration from the bundled TOML resource."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict())
        draft.config_files = ["<defaults>"]
        # Defaults are the base layer: nothing below them to ignore
        draft.ignore_default_globs = None
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, origin: str = "<dict>") -> MutableConfig:
        """Build a draft from a parsed TOML table.

        Args:
            data (TomlTable): Top-level table with optional ``files``, ``indent``,
                ``formatter`` and ``style`` sub-tables.
            origin (str): Source name used in error messages.

        Raises:
            ConfigError: If a value has the wrong type.
        """

        def _table(key: str) -> dict[str, Any]:
            value: Any = data.get(key, {})
            if not isinstance(value, dict):
                raise ConfigError(f"{origin}: [{key}] must be a table")
            return value

        def _str_list(table: dict[str, Any], key: str, section: str) -> list[str] | None:
            value: Any = table.get(key)
            if value is None:
                return None
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{origin}: {section}.{key} must be a list of strings")
            return list(value)

        def _typed(table: dict[str, Any], key: str, section: str, kind: type) -> Any:
            value: Any = table.get(key)
            # bool is an int subclass; reject it where an int is expected
            if value is not None and (
                not isinstance(value, kind) or (kind is int and isinstance(value, bool))
            ):
                raise ConfigError(f"{origin}: {section}.{key} must be of type {kind.__name__}")
            return value

        files_t: dict[str, Any] = _table("files")
        indent_t: dict[str, Any] = _table("indent")
        formatter_t: dict[str, Any] = _table("formatter")
        style_t: dict[str, Any] = _table("style")

        return cls(
            include_patterns=_str_list(files_t, "include", "files") or [],
            exclude_patterns=_str_list(files_t, "exclude", "files") or [],
            ignore_default_globs=_typed(files_t, "ignore_default_globs", "files", bool),
            tab_unit=_typed(indent_t, "tab_unit", "indent", str),
            tab_width=_typed(indent_t, "tab_width", "indent", int),
            literal_kinds=_str_list(indent_t, "literal_kinds", "indent"),
            formatter_command=_typed(formatter_t, "command", "formatter", str),
            language=_typed(formatter_t, "language", "formatter", str),
            style=dict(style_t),
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load a draft from ``embedfmt.toml`` or the ``[tool.embedfmt]`` table of ``pyproject.toml``.

        Returns:
            MutableConfig | None: The draft, or ``None`` for a ``pyproject.toml``
            without an ``[tool.embedfmt]`` table.
        """
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_TOML_NAME:
            section: Any = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
            if not section:
                logger.debug("No [tool.%s] section in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            data = section
        draft: MutableConfig = cls.from_toml_dict(data, origin=str(path))
        draft.config_files = [path]
        logger.debug("Generated MutableConfig from %s: %s", path, draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return project config files from ``start`` upwards, root-most first.

        In each directory ``pyproject.toml`` precedes ``embedfmt.toml`` so the
        latter wins a same-directory merge. Traversal stops at a directory
        containing ``.git``.
        """
        found: list[Path] = []
        current: Path = start.resolve()
        for directory in (current, *current.parents):
            layer: list[Path] = [
                candidate
                for candidate in (directory / PYPROJECT_TOML_NAME, directory / PROJECT_TOML_NAME)
                if candidate.is_file()
            ]
            found[0:0] = layer
            if (directory / ".git").exists():
                break
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: Iterable[Path] = (),
        use_project_config: bool = True,
    ) -> MutableConfig:
        """Return defaults merged with discovered and explicit config files."""
        draft: MutableConfig = cls.from_defaults()
        if use_project_config:
            for path in cls.discover_local_config_files(start or Path.cwd()):
                layer: MutableConfig | None = cls.from_toml_file(path)
                if layer is not None:
                    draft = draft.merge_with(layer)
        for path in extra_config_files:
            layer = cls.from_toml_file(Path(path))
            if layer is None:
                raise ConfigError(f"{path}: no [tool.{PYPROJECT_TOOL_SECTION}] section")
            draft = draft.merge_with(layer)
        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values from ``other`` override this draft.

        Glob lists are concatenated unless ``other.ignore_default_globs`` is set,
        in which case ``other``'s lists replace ours. Style tables merge key-wise.
        """
        if other.ignore_default_globs:
            include: list[str] = list(other.include_patterns)
            exclude: list[str] = list(other.exclude_patterns)
        else:
            include = _dedupe([*self.include_patterns, *other.include_patterns])
            exclude = _dedupe([*self.exclude_patterns, *other.exclude_patterns])

        return MutableConfig(
            config_files=[*self.config_files, *other.config_files],
            include_patterns=include,
            exclude_patterns=exclude,
            ignore_default_globs=other.ignore_default_globs
            if other.ignore_default_globs is not None
            else self.ignore_default_globs,
            tab_unit=other.tab_unit if other.tab_unit is not None else self.tab_unit,
            tab_width=other.tab_width if other.tab_width is not None else self.tab_width,
            literal_kinds=other.literal_kinds
            if other.literal_kinds is not None
            else self.literal_kinds,
            formatter_command=other.formatter_command or self.formatter_command,
            language=other.language or self.language,
            style={**self.style, **other.style},
            apply_changes=other.apply_changes
            if other.apply_changes is not None
            else self.apply_changes,
        )
