# code_connect/records.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
File Record models.

A FileRecord is the per-file extraction result handed to the graph builder:
the functions, imports, exports and call sites found in one source file.
Records usually come from the parsers in code_connect.parsers, but any
producer may supply plain dicts; FileRecord.coerce() normalizes them.

Malformed input degrades instead of failing: a missing or non-list field
becomes an empty list and an invalid entry is dropped on its own, so one bad
function or import never blanks out the rest of the file.
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


FunctionType = Literal["function", "variable", "method"]

SUPPORTED_LANGUAGES: tuple[str, ...] = ("javascript", "typescript", "python")


class FunctionInfo(BaseModel):
    """A function definition found in a file.

    Lines are 0-based. end_line may equal line for single-line bodies or
    when the extractor could not find the end of the body.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: FunctionType = "function"
    line: int = 0
    end_line: int = Field(default=0, alias="endLine")
    params: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _default_end_line(cls, data: Any) -> Any:
        if isinstance(data, dict) and "endLine" not in data and "end_line" not in data:
            data = {**data, "endLine": data.get("line", 0)}
        return data

    @field_validator("params", mode="before")
    @classmethod
    def _params_list(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @model_validator(mode="after")
    def _clamp_end_line(self) -> "FunctionInfo":
        if self.end_line < self.line:
            self.end_line = self.line
        return self

    def contains_line(self, line: int) -> bool:
        """True when line falls inside [line, end_line], both ends inclusive."""
        return self.line <= line <= self.end_line


class ImportInfo(BaseModel):
    """An imported symbol.

    source is an absolute path (relative imports, already resolved against
    the importing file) or a raw module specifier (bare imports).
    imported is the symbol name, or "*" for namespace/wildcard imports.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    imported: str = "*"
    local: Optional[str] = None
    line: int = 0


class ExportInfo(BaseModel):
    """An exported symbol. Carried through to file stats only."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "named"
    line: int = 0


class CallInfo(BaseModel):
    """A call site, not yet attributed to an enclosing function."""

    model_config = ConfigDict(frozen=True)

    name: str
    line: int = 0


_ENTRY_ADAPTERS: dict[str, TypeAdapter] = {
    "functions": TypeAdapter(FunctionInfo),
    "imports": TypeAdapter(ImportInfo),
    "exports": TypeAdapter(ExportInfo),
    "calls": TypeAdapter(CallInfo),
}


class FileRecord(BaseModel):
    """Extraction result for one source file."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    language: Optional[str] = None
    functions: list[FunctionInfo] = Field(default_factory=list)
    imports: list[ImportInfo] = Field(default_factory=list)
    exports: list[ExportInfo] = Field(default_factory=list)
    calls: list[CallInfo] = Field(default_factory=list)

    @field_validator("functions", "imports", "exports", "calls", mode="before")
    @classmethod
    def _salvage_entries(cls, value: Any, info: ValidationInfo) -> list:
        """Keep every valid entry, drop the rest."""
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            logger.debug(f"Ignoring non-list {info.field_name}: {type(value).__name__}")
            return []

        adapter = _ENTRY_ADAPTERS[info.field_name]
        entries = []
        for raw in value:
            try:
                entries.append(adapter.validate_python(raw))
            except ValidationError as e:
                logger.debug(f"Dropping malformed {info.field_name} entry {raw!r}: {e}")
        return entries

    @classmethod
    def empty(cls, path: str, language: Optional[str] = None) -> "FileRecord":
        """Create a record with no extracted content."""
        return cls(path=path, language=language)

    @classmethod
    def coerce(cls, path: str, raw: Any) -> "FileRecord":
        """Build a FileRecord from whatever a producer handed over.

        Args:
            path: Map key the record was stored under. Used when the record
                  itself carries no usable path.
            raw: A FileRecord, a mapping in the File Record shape, or anything
                 else (which yields an empty record).

        Returns:
            A FileRecord. Never raises.
        """
        if isinstance(raw, FileRecord):
            return raw
        path = str(path)
        if not isinstance(raw, Mapping):
            logger.warning(f"Record for {path} is not a mapping, treating as empty")
            return cls.empty(path)

        data = dict(raw)
        if not isinstance(data.get("path"), str) or not data.get("path"):
            data["path"] = path
        if not isinstance(data.get("language"), str):
            data["language"] = None

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Record for {path} is malformed, treating as empty: {e}")
            return cls.empty(path, data["language"])

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase field names of the wire format."""
        return self.model_dump(by_alias=True)
