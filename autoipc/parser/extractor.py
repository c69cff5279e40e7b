"""Tree-sitter powered extraction of channel, type and import declarations."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..models import (
    CHANNEL_DIRECTIONS,
    CHANNEL_KINDS,
    CallableParam,
    CallableSignature,
    ChannelSpec,
    ImportSpec,
    SpecsCollection,
    TypeSpec,
)
from .custom_types import collect_custom_types, is_builtin_type, node_text

CHANNEL_FUNCTION = "Channel"
SIGNATURE_TAG = "type"
SIGNATURE_PROPERTY = "signature"
LISTENERS_PROPERTY = "listeners"

_TYPE_DECLARATIONS = {
    "interface_declaration": "interface",
    "type_alias_declaration": "type",
}
_PARAMETER_NODES = {"required_parameter", "optional_parameter"}
_PARAMETER_PREFIX_NODES = {
    "decorator",
    "accessibility_modifier",
    "override_modifier",
    "type_annotation",
}


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {"'", '"'}:
        return text[1:-1]
    return text


class SpecsExtractor:
    """Parses schema module text into a :class:`SpecsCollection`.

    Only a fixed call-chain shape is recognized as a channel declaration:
    ``Channel("Name").<Kind>.<Direction>({ signature: type as (...) => T })``.
    Statements that start with ``Channel`` but deviate from it still produce a
    record whose unrecognized fields are ``None``; rejecting them is left to
    the validators.
    """

    def __init__(self) -> None:
        self._language = Language(tree_sitter_typescript.language_typescript())
        self._parser = Parser(self._language)

    def parse(self, contents: str) -> SpecsCollection:
        source_bytes = contents.encode("utf-8")
        tree = self._parser.parse(source_bytes)

        channel_specs: List[ChannelSpec] = []
        type_specs: List[TypeSpec] = []
        import_specs: List[ImportSpec] = []

        for node in tree.root_node.named_children:
            match node.type:
                case "expression_statement":
                    if node_text(node, source_bytes).startswith(CHANNEL_FUNCTION):
                        channel_specs.append(self._parse_channel(node, source_bytes))
                case "import_statement":
                    import_spec = self._parse_import(node, source_bytes)
                    if import_spec is not None:
                        import_specs.append(import_spec)
                case "interface_declaration" | "type_alias_declaration":
                    type_specs.append(self._parse_type_definition(node, source_bytes, False))
                case "export_statement":
                    declaration = node.child_by_field_name("declaration")
                    if declaration is not None and declaration.type in _TYPE_DECLARATIONS:
                        type_specs.append(
                            self._parse_type_definition(declaration, source_bytes, True)
                        )

        return SpecsCollection(
            channel_specs=tuple(channel_specs),
            type_specs=tuple(type_specs),
            import_specs=tuple(import_specs),
        )

    # ------------------------------------------------------------------
    # Channel expressions

    def _parse_channel(self, statement: Node, source_bytes: bytes) -> ChannelSpec:
        fields: Dict[str, object] = {}
        expression = statement.named_children[0] if statement.named_children else None
        if expression is None:
            return ChannelSpec()

        callee = expression
        config_object: Optional[Node] = None
        if expression.type == "call_expression":
            function = expression.child_by_field_name("function")
            if function is not None and function.type == "member_expression":
                callee = function
                config_object = self._first_argument(expression)

        root, properties = self._unwind_member_chain(callee, source_bytes)
        if root is not None:
            name = self._channel_name(root, source_bytes)
            if name is not None:
                fields["name"] = name
        if len(properties) == 2:
            kind, direction = properties
            if kind in CHANNEL_KINDS:
                fields["kind"] = kind
            if direction in CHANNEL_DIRECTIONS:
                fields["direction"] = direction

        if config_object is not None and config_object.type == "object":
            fields.update(self._parse_channel_config(config_object, source_bytes))

        return ChannelSpec(**fields)  # type: ignore[arg-type]

    @staticmethod
    def _first_argument(call: Node) -> Optional[Node]:
        arguments = call.child_by_field_name("arguments")
        if arguments is None or not arguments.named_children:
            return None
        return arguments.named_children[0]

    @staticmethod
    def _unwind_member_chain(node: Node, source_bytes: bytes) -> Tuple[Optional[Node], List[str]]:
        """Return the ``Channel(...)`` call at the root of a member chain and the property names."""
        properties: List[str] = []
        current: Optional[Node] = node
        while current is not None and current.type == "member_expression":
            prop = current.child_by_field_name("property")
            properties.append(node_text(prop, source_bytes) if prop is not None else "")
            current = current.child_by_field_name("object")
        properties.reverse()
        if current is None or current.type != "call_expression":
            return None, properties
        function = current.child_by_field_name("function")
        if function is None or node_text(function, source_bytes) != CHANNEL_FUNCTION:
            return None, properties
        return current, properties

    def _channel_name(self, channel_call: Node, source_bytes: bytes) -> Optional[str]:
        argument = self._first_argument(channel_call)
        if argument is None or argument.type != "string":
            return None
        return _unquote(node_text(argument, source_bytes))

    def _parse_channel_config(self, config_object: Node, source_bytes: bytes) -> Dict[str, object]:
        fields: Dict[str, object] = {}
        for pair in config_object.named_children:
            if pair.type != "pair":
                continue
            key = pair.child_by_field_name("key")
            value = pair.child_by_field_name("value")
            if key is None or value is None:
                continue
            key_text = _unquote(node_text(key, source_bytes))
            if key_text == SIGNATURE_PROPERTY:
                signature = self._parse_signature(value, source_bytes)
                if signature is not None:
                    fields["signature"] = signature
            elif key_text == LISTENERS_PROPERTY and value.type == "array":
                fields["listeners"] = self._parse_listeners(value, source_bytes)
        return fields

    @staticmethod
    def _parse_listeners(array: Node, source_bytes: bytes) -> Tuple[str, ...]:
        listeners: List[str] = []
        for element in array.named_children:
            if element.type == "comment":
                continue
            text = node_text(element, source_bytes)
            listeners.append(_unquote(text) if element.type == "string" else text)
        return tuple(listeners)

    # ------------------------------------------------------------------
    # Signatures

    def _parse_signature(self, value: Node, source_bytes: bytes) -> Optional[CallableSignature]:
        if value.type != "as_expression" or len(value.named_children) < 2:
            return None
        tag = value.named_children[0]
        function_type = value.named_children[-1]
        if node_text(tag, source_bytes) != SIGNATURE_TAG or function_type.type != "function_type":
            return None

        parameters = function_type.child_by_field_name("parameters")
        if parameters is None:
            parameters = next(
                (c for c in function_type.named_children if c.type == "formal_parameters"), None
            )
        params = self._parse_params(parameters, source_bytes) if parameters is not None else ()

        return_node = function_type.child_by_field_name("return_type")
        if return_node is None:
            return_node = self._node_after_arrow(function_type)
        return_type = _collapse(node_text(return_node, source_bytes)) if return_node else ""
        return_type = return_type or "void"

        return CallableSignature(
            definition=_collapse(node_text(function_type, source_bytes)),
            params=params,
            return_type=return_type,
            custom_types=collect_custom_types(function_type, source_bytes),
            is_async=return_type.startswith("Promise"),
        )

    @staticmethod
    def _node_after_arrow(function_type: Node) -> Optional[Node]:
        seen_arrow = False
        for child in function_type.children:
            if seen_arrow and child.is_named:
                return child
            if child.type == "=>":
                seen_arrow = True
        return None

    def _parse_params(self, parameters: Node, source_bytes: bytes) -> Tuple[CallableParam, ...]:
        params: List[CallableParam] = []
        for param in parameters.named_children:
            if param.type not in _PARAMETER_NODES:
                continue
            pattern = param.child_by_field_name("pattern")
            if pattern is None:
                pattern = next(
                    (c for c in param.named_children if c.type not in _PARAMETER_PREFIX_NODES),
                    None,
                )
            if pattern is None:
                continue
            rest = pattern.type == "rest_pattern"
            name = _collapse(node_text(pattern, source_bytes))
            if rest:
                name = name[3:].strip() if name.startswith("...") else name

            annotation = param.child_by_field_name("type")
            if annotation is None:
                annotation = next(
                    (c for c in param.named_children if c.type == "type_annotation"), None
                )
            type_text = "any"
            if annotation is not None and annotation.named_children:
                type_text = _collapse(node_text(annotation.named_children[0], source_bytes))

            params.append(
                CallableParam(
                    name=name,
                    type=type_text,
                    rest=rest,
                    optional=param.type == "optional_parameter" and not rest,
                )
            )
        return tuple(params)

    # ------------------------------------------------------------------
    # Imports and type declarations

    @staticmethod
    def _parse_import(statement: Node, source_bytes: bytes) -> Optional[ImportSpec]:
        source = statement.child_by_field_name("source")
        clause = next((c for c in statement.named_children if c.type == "import_clause"), None)
        if source is None or clause is None:
            return None
        from_path = _unquote(node_text(source, source_bytes))
        statement_is_type_only = any(
            child.type == "type" and not child.is_named for child in statement.children
        )

        for binding in clause.named_children:
            if binding.type == "namespace_import":
                alias = next((c for c in binding.named_children if c.type == "identifier"), None)
                if alias is not None:
                    return ImportSpec(from_path=from_path, namespace=node_text(alias, source_bytes))
            elif binding.type == "named_imports":
                custom_types: List[str] = []
                for specifier in binding.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    name_node = specifier.child_by_field_name("alias")
                    if name_node is None:
                        name_node = specifier.child_by_field_name("name")
                    if name_node is None:
                        continue
                    name = node_text(name_node, source_bytes)
                    specifier_is_type_only = any(
                        child.type == "type" and not child.is_named for child in specifier.children
                    )
                    if (statement_is_type_only or specifier_is_type_only) and not is_builtin_type(name):
                        if name not in custom_types:
                            custom_types.append(name)
                return ImportSpec(from_path=from_path, custom_types=tuple(custom_types))
        return None

    @staticmethod
    def _parse_type_definition(node: Node, source_bytes: bytes, is_exported: bool) -> TypeSpec:
        name_node = node.child_by_field_name("name")
        generics_node = node.child_by_field_name("type_parameters")
        if generics_node is None:
            generics_node = next((c for c in node.named_children if c.type == "type_parameters"), None)
        return TypeSpec(
            name=node_text(name_node, source_bytes) if name_node is not None else "",
            kind=_TYPE_DECLARATIONS[node.type],
            generics=_collapse(node_text(generics_node, source_bytes)) if generics_node else None,
            is_exported=is_exported,
        )


__all__ = ["SpecsExtractor"]
