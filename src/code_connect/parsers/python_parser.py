# code_connect/parsers/python_parser.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Python parser using tree-sitter.

Extracts functions, imports, exports and call sites from Python source code.
"""

import os
import warnings
from typing import Iterator, Optional

from code_connect.records import CallInfo, ExportInfo, FunctionInfo, ImportInfo

from .base import BaseParser

try:
    import tree_sitter_python
    from tree_sitter import Language, Parser

    AVAILABLE = True
except ImportError:
    AVAILABLE = False


# Builtins that only add noise to a call graph
BUILTIN_CALLS = frozenset(
    (
        "print",
        "len",
        "str",
        "int",
        "float",
        "bool",
        "list",
        "dict",
        "set",
        "tuple",
        "range",
        "enumerate",
        "zip",
        "map",
        "filter",
        "sorted",
        "reversed",
        "type",
        "isinstance",
        "hasattr",
        "getattr",
        "setattr",
        "super",
    )
)

_IMPLICIT_PARAMS = ("self", "cls")


class PythonParser(BaseParser):
    """Parser for Python code."""

    languages = ("python",)

    def _load_parser(self) -> None:
        """Load Python tree-sitter parser."""
        if not AVAILABLE:
            warnings.warn("tree-sitter-python not available")
            return

        try:
            self.language = Language(tree_sitter_python.language())
            self.parser = Parser(self.language)
        except Exception as e:
            warnings.warn(f"Failed to load Python parser: {e}")

    def extract_functions(self, tree, file_path: str) -> list[FunctionInfo]:
        """Extract all def statements.

        Functions directly inside a class body are methods; everything else,
        nested functions included, is a function.
        """
        return list(self._extract_from_node(tree.root_node, in_class=False))

    def _extract_from_node(self, node, in_class: bool) -> Iterator[FunctionInfo]:
        """Recursively extract function definitions from AST nodes."""
        if node.type == "class_definition":
            body = node.child_by_field_name("body")
            if body:
                for child in body.children:
                    yield from self._extract_from_node(child, in_class=True)

        elif node.type == "decorated_definition":
            definition = node.child_by_field_name("definition")
            if definition:
                yield from self._extract_from_node(definition, in_class)

        elif node.type == "function_definition":
            name_node = node.child_by_field_name("name")
            if name_node:
                yield FunctionInfo(
                    name=self._get_node_text(name_node),
                    type="method" if in_class else "function",
                    line=self._get_node_line(node),
                    end_line=self._get_node_end_line(node),
                    params=self._extract_params(node),
                )

            body = node.child_by_field_name("body")
            if body:
                for child in body.children:
                    yield from self._extract_from_node(child, in_class=False)

        else:
            for child in node.children:
                yield from self._extract_from_node(child, in_class)

    def _extract_params(self, func_node) -> list[str]:
        """Parameter names, without self/cls, keeping * and ** markers."""
        params_node = func_node.child_by_field_name("parameters")
        if not params_node:
            return []

        params = []
        for param in params_node.named_children:
            name = self._param_name(param)
            if name and name not in _IMPLICIT_PARAMS:
                params.append(name)
        return params

    def _param_name(self, param) -> Optional[str]:
        if param.type == "identifier":
            return self._get_node_text(param)

        if param.type in ("default_parameter", "typed_default_parameter"):
            name_node = param.child_by_field_name("name")
            return self._get_node_text(name_node) if name_node else None

        if param.type == "typed_parameter":
            for child in param.named_children:
                if child.type in ("identifier", "list_splat_pattern", "dictionary_splat_pattern"):
                    return self._param_name(child)
            return None

        if param.type == "list_splat_pattern":
            return "*" + self._splat_name(param)

        if param.type == "dictionary_splat_pattern":
            return "**" + self._splat_name(param)

        # keyword_separator (*), positional_separator (/)
        return None

    def _splat_name(self, node) -> str:
        for child in node.named_children:
            if child.type == "identifier":
                return self._get_node_text(child)
        return ""

    def extract_imports(self, tree, file_path: str) -> list[ImportInfo]:
        """Extract import statements, one entry per imported name.

        - import a.b        -> source "a.b", imported "*"
        - from m import x   -> source "m", imported "x"
        - from .m import x  -> source "<dir>/m" (absolute, no extension)
        - from . import x   -> source "<dir>/x"
        """
        imports = []

        for node in self._walk_tree(tree.root_node):
            line = self._get_node_line(node)

            if node.type == "import_statement":
                for child in node.named_children:
                    module, alias = self._import_name(child)
                    if module:
                        imports.append(
                            ImportInfo(
                                source=module,
                                imported="*",
                                local=alias or module,
                                line=line,
                            )
                        )

            elif node.type == "import_from_statement":
                module_node = node.child_by_field_name("module_name")
                if module_node is None:
                    continue

                relative = module_node.type == "relative_import"
                module = self._get_node_text(module_node)

                if any(child.type == "wildcard_import" for child in node.children):
                    imports.append(
                        ImportInfo(
                            source=self._resolve_source(module, file_path, None) if relative else module,
                            imported="*",
                            line=line,
                        )
                    )
                    continue

                for child in node.children_by_field_name("name"):
                    name, alias = self._import_name(child)
                    if not name:
                        continue
                    source = (
                        self._resolve_source(module, file_path, name)
                        if relative
                        else module
                    )
                    imports.append(
                        ImportInfo(
                            source=source,
                            imported=name,
                            local=alias or name,
                            line=line,
                        )
                    )

        return imports

    def _import_name(self, node) -> tuple[Optional[str], Optional[str]]:
        """(name, alias) of a dotted_name or aliased_import node."""
        if node.type == "dotted_name":
            return self._get_node_text(node), None
        if node.type == "aliased_import":
            name_node = node.child_by_field_name("name")
            alias_node = node.child_by_field_name("alias")
            if name_node:
                return (
                    self._get_node_text(name_node),
                    self._get_node_text(alias_node) if alias_node else None,
                )
        return None, None

    @staticmethod
    def _resolve_source(module: str, file_path: str, name: Optional[str]) -> str:
        """Absolute path (without extension) for a relative module.

        One leading dot is the importing file's directory, each further dot
        one directory up. "from . import x" points at <dir>/x.
        """
        level = len(module) - len(module.lstrip("."))
        remainder = module[level:]

        base_dir = os.path.dirname(file_path)
        for _ in range(level - 1):
            base_dir = os.path.dirname(base_dir)

        if remainder:
            return os.path.join(base_dir, *remainder.split("."))
        if name:
            return os.path.join(base_dir, *name.split("."))
        return base_dir

    def extract_exports(self, tree, file_path: str) -> list[ExportInfo]:
        """Public top-level functions and classes.

        Python has no export statement; a module-level name without a leading
        underscore is what other modules are expected to import.
        """
        exports = []
        for child in tree.root_node.children:
            node = child
            if node.type == "decorated_definition":
                node = node.child_by_field_name("definition") or node

            if node.type not in ("function_definition", "class_definition"):
                continue
            name_node = node.child_by_field_name("name")
            if not name_node:
                continue
            name = self._get_node_text(name_node)
            if name.startswith("_"):
                continue
            exports.append(
                ExportInfo(
                    name=name,
                    type="function" if node.type == "function_definition" else "class",
                    line=self._get_node_line(node),
                )
            )
        return exports

    def extract_calls(self, tree, file_path: str) -> list[CallInfo]:
        """Every call site by simple name.

        foo() records "foo", obj.method() records "method". Calls on other
        expressions (foo()(), items[0]()) and common builtins are skipped.
        """
        calls = []
        for node in self._walk_tree(tree.root_node):
            if node.type != "call":
                continue
            func_node = node.child_by_field_name("function")
            if func_node is None:
                continue

            name = None
            if func_node.type == "identifier":
                name = self._get_node_text(func_node)
            elif func_node.type == "attribute":
                attr = func_node.child_by_field_name("attribute")
                if attr:
                    name = self._get_node_text(attr)

            if name and name not in BUILTIN_CALLS:
                calls.append(CallInfo(name=name, line=self._get_node_line(node)))
        return calls
