# code_connect/parsers/typescript_parser.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
TypeScript parser using tree-sitter.

Extracts functions, imports, exports and call sites from TypeScript and
JavaScript source code. Handles .ts, .js, .mjs and .cjs with the TypeScript
grammar, and .tsx/.jsx with the TSX grammar.
"""

import os
import warnings
from typing import Optional

from code_connect.records import CallInfo, ExportInfo, FunctionInfo, ImportInfo

from .base import BaseParser

try:
    import tree_sitter_typescript
    from tree_sitter import Language, Parser

    AVAILABLE = True
except ImportError:
    AVAILABLE = False


JSX_EXTENSIONS = (".tsx", ".jsx")
JAVASCRIPT_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs")

_FUNCTION_VALUES = ("arrow_function", "function_expression", "function", "generator_function")
_FUNCTION_DECLARATIONS = ("function_declaration", "generator_function_declaration")


class TypeScriptParser(BaseParser):
    """Parser for TypeScript/JavaScript code."""

    languages = ("typescript", "javascript")

    def __init__(self):
        self.tsx_parser = None
        super().__init__()

    def _load_parser(self) -> None:
        """Load TypeScript and TSX tree-sitter parsers."""
        if not AVAILABLE:
            warnings.warn("tree-sitter-typescript not available")
            return

        try:
            self.language = Language(tree_sitter_typescript.language_typescript())
            self.parser = Parser(self.language)
            self.tsx_parser = Parser(Language(tree_sitter_typescript.language_tsx()))
        except Exception as e:
            warnings.warn(f"Failed to load TypeScript parser: {e}")

    def detect_language(self, file_path: str) -> str:
        ext = os.path.splitext(file_path)[1].lower()
        return "javascript" if ext in JAVASCRIPT_EXTENSIONS else "typescript"

    def parse(self, content: str, file_path: str = ""):
        """Parse with the TSX grammar for .tsx/.jsx, TypeScript otherwise."""
        if not self.is_available():
            return None
        ext = os.path.splitext(file_path)[1].lower()
        parser = self.tsx_parser if ext in JSX_EXTENSIONS and self.tsx_parser else self.parser
        return parser.parse(content.encode())

    def extract_functions(self, tree, file_path: str) -> list[FunctionInfo]:
        """Extract declarations, function-valued variables and class methods.

        - function foo() {}            -> "function"
        - const foo = () => {}         -> "variable"
        - class A { foo() {} }         -> "method"
        """
        functions = []
        for node in self._walk_tree(tree.root_node):
            if node.type in _FUNCTION_DECLARATIONS:
                name_node = node.child_by_field_name("name")
                functions.append(
                    self._function_info(node, name_node, "function", node)
                )

            elif node.type == "variable_declarator":
                value = node.child_by_field_name("value")
                if value is not None and value.type in _FUNCTION_VALUES:
                    name_node = node.child_by_field_name("name")
                    functions.append(
                        self._function_info(node, name_node, "variable", value)
                    )

            elif node.type == "method_definition":
                if node.parent is not None and node.parent.type == "class_body":
                    name_node = node.child_by_field_name("name")
                    functions.append(
                        self._function_info(node, name_node, "method", node)
                    )

        return functions

    def _function_info(self, node, name_node, function_type: str, params_owner) -> FunctionInfo:
        name = "anonymous"
        if name_node is not None and name_node.type in (
            "identifier",
            "property_identifier",
            "private_property_identifier",
            "string",
        ):
            name = self._get_node_text(name_node).strip("\"'")
        return FunctionInfo(
            name=name,
            type=function_type,
            line=self._get_node_line(node),
            end_line=self._get_node_end_line(node),
            params=self._extract_params(params_owner),
        )

    def _extract_params(self, func_node) -> list[str]:
        """Parameter names; rest params as "...name", patterns as "unknown"."""
        single = func_node.child_by_field_name("parameter")
        if single is not None:
            # x => x
            return [self._get_node_text(single)]

        params_node = func_node.child_by_field_name("parameters")
        if params_node is None:
            return []

        params = []
        for param in params_node.named_children:
            if param.type == "comment":
                continue
            params.append(self._param_name(param))
        return params

    def _param_name(self, param) -> str:
        if param.type in ("required_parameter", "optional_parameter"):
            pattern = param.child_by_field_name("pattern")
            return self._param_name(pattern) if pattern is not None else "unknown"
        if param.type == "identifier":
            return self._get_node_text(param)
        if param.type == "rest_pattern":
            for child in param.named_children:
                if child.type == "identifier":
                    return "..." + self._get_node_text(child)
            return "unknown"
        if param.type == "assignment_pattern":
            left = param.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                return self._get_node_text(left)
        return "unknown"

    def extract_imports(self, tree, file_path: str) -> list[ImportInfo]:
        """Extract ES import declarations, one entry per specifier.

        Default imports record imported="default", namespace imports "*".
        Relative specifiers are resolved against the importing file's
        directory; bare specifiers ("react") stay as written. Side-effect
        imports without specifiers (import "./styles.css") are not recorded.
        """
        imports = []
        for node in self._walk_tree(tree.root_node):
            if node.type != "import_statement":
                continue
            source_node = node.child_by_field_name("source")
            if source_node is None:
                continue

            source = self._string_value(source_node)
            if source.startswith("."):
                source = os.path.normpath(
                    os.path.join(os.path.dirname(file_path), source)
                )
            line = self._get_node_line(node)

            for clause in node.named_children:
                if clause.type != "import_clause":
                    continue
                for spec in clause.named_children:
                    imports.extend(self._import_specifiers(spec, source, line))

        return imports

    def _import_specifiers(self, spec, source: str, line: int) -> list[ImportInfo]:
        if spec.type == "identifier":
            # import Foo from "./foo"
            return [
                ImportInfo(
                    source=source,
                    imported="default",
                    local=self._get_node_text(spec),
                    line=line,
                )
            ]

        if spec.type == "namespace_import":
            # import * as foo from "./foo"
            local = None
            for child in spec.named_children:
                if child.type == "identifier":
                    local = self._get_node_text(child)
            return [ImportInfo(source=source, imported="*", local=local, line=line)]

        if spec.type == "named_imports":
            # import { a, b as c } from "./foo"
            results = []
            for item in spec.named_children:
                if item.type != "import_specifier":
                    continue
                name_node = item.child_by_field_name("name")
                alias_node = item.child_by_field_name("alias")
                if name_node is None:
                    continue
                name = self._get_node_text(name_node).strip("\"'")
                results.append(
                    ImportInfo(
                        source=source,
                        imported=name,
                        local=self._get_node_text(alias_node) if alias_node else name,
                        line=line,
                    )
                )
            return results

        return []

    def _string_value(self, node) -> str:
        return self._get_node_text(node).strip("\"'`")

    def extract_exports(self, tree, file_path: str) -> list[ExportInfo]:
        """Extract named and default exports."""
        exports = []
        for node in self._walk_tree(tree.root_node):
            if node.type != "export_statement":
                continue
            line = self._get_node_line(node)

            if any(child.type == "default" for child in node.children):
                exports.append(ExportInfo(name="default", type="default", line=line))
                continue

            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                exports.extend(self._declaration_exports(declaration, line))

            for child in node.named_children:
                if child.type != "export_clause":
                    continue
                for spec in child.named_children:
                    if spec.type != "export_specifier":
                        continue
                    alias_node = spec.child_by_field_name("alias")
                    name_node = alias_node or spec.child_by_field_name("name")
                    if name_node is not None:
                        exports.append(
                            ExportInfo(
                                name=self._get_node_text(name_node).strip("\"'"),
                                type="named",
                                line=line,
                            )
                        )
        return exports

    def _declaration_exports(self, declaration, line: int) -> list[ExportInfo]:
        if declaration.type in ("lexical_declaration", "variable_declaration"):
            results = []
            for declarator in declaration.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is not None and name_node.type == "identifier":
                    results.append(
                        ExportInfo(
                            name=self._get_node_text(name_node),
                            type="variable",
                            line=line,
                        )
                    )
            return results

        name_node = declaration.child_by_field_name("name")
        if name_node is None:
            return []
        if declaration.type in _FUNCTION_DECLARATIONS:
            export_type = "function"
        elif declaration.type in ("class_declaration", "abstract_class_declaration"):
            export_type = "class"
        else:
            # interfaces, type aliases, enums
            export_type = "named"
        return [ExportInfo(name=self._get_node_text(name_node), type=export_type, line=line)]

    def extract_calls(self, tree, file_path: str) -> list[CallInfo]:
        """Every call site by simple name.

        foo() records "foo", obj.method() records "method". Calls through
        other expressions (getHandler()(), handlers[i]()) are skipped.
        """
        calls = []
        for node in self._walk_tree(tree.root_node):
            if node.type != "call_expression":
                continue
            func_node = node.child_by_field_name("function")
            if func_node is None:
                continue

            name: Optional[str] = None
            if func_node.type == "identifier":
                name = self._get_node_text(func_node)
            elif func_node.type == "member_expression":
                prop = func_node.child_by_field_name("property")
                if prop is not None:
                    name = self._get_node_text(prop)

            if name:
                calls.append(CallInfo(name=name, line=self._get_node_line(node)))
        return calls
