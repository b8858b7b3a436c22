"""Collect [ProtoContract] types and generate the .proto schema.

protobuf-net does the actual schema work: every marked type is added to a
fresh RuntimeTypeModel (which pulls in referenced types itself) and the model
is asked for its schema text.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from grabproto.constants import CONTRACT_ATTRIBUTE, DEFAULT_PACKAGE, DEFAULT_SYNTAX
from grabproto.errors import DependencyNotFoundError
from grabproto.loader import LibraryLoader, LoadedLibrary

log = logging.getLogger(__name__)

# SchemaOptions.syntax -> ProtoSyntax member
SYNTAX_MEMBERS = {
    'proto2': 'Proto2',
    'proto3': 'Proto3',
}


@dataclass
class SchemaOptions:
    """Schema generation settings."""
    package: str = DEFAULT_PACKAGE
    syntax: str = DEFAULT_SYNTAX


@dataclass
class ProtobufApi:
    """protobuf-net entry points taken from the loaded library."""
    contract_attribute: Any       # System.Type of ProtoContractAttribute
    runtime_type_model: Any       # ProtoBuf.Meta.RuntimeTypeModel
    generation_options: Any       # ProtoBuf.Meta.SchemaGenerationOptions
    proto_syntax: Any             # ProtoBuf.Meta.ProtoSyntax

    @classmethod
    def from_loaded(cls, loaded: LoadedLibrary) -> 'ProtobufApi':
        """Bind to the protobuf-net copy loaded next to the main library."""
        contract_attribute = loaded.protobuf_assembly.GetType(CONTRACT_ATTRIBUTE)
        if contract_attribute is None:
            raise DependencyNotFoundError(
                f"{CONTRACT_ATTRIBUTE} not found in {loaded.protobuf_path}"
            )

        from ProtoBuf.Meta import ProtoSyntax, RuntimeTypeModel, SchemaGenerationOptions

        return cls(
            contract_attribute=contract_attribute,
            runtime_type_model=RuntimeTypeModel,
            generation_options=SchemaGenerationOptions,
            proto_syntax=ProtoSyntax,
        )


def find_contract_types(assembly, attribute_type) -> List[Any]:
    """Types in assembly carrying attribute_type (inherited markers count).

    Order is whatever GetTypes() yields.
    """
    return [
        t for t in assembly.GetTypes()
        if len(t.GetCustomAttributes(attribute_type, True)) > 0
    ]


def build_schema(types: Iterable[Any], api: ProtobufApi,
                 options: Optional[SchemaOptions] = None) -> str:
    """Register types with a fresh model and return its schema text."""
    if options is None:
        options = SchemaOptions()

    model = api.runtime_type_model.Create()
    for t in types:
        # applyDefaultBehaviour=True: referenced types are added by the model
        model.Add(t, True)

    generation = api.generation_options()
    generation.Syntax = getattr(api.proto_syntax, SYNTAX_MEMBERS[options.syntax])
    generation.Package = options.package

    return model.GetSchema(generation)


def describe_error(exc: BaseException) -> Tuple[str, Optional[str]]:
    """(message, nested message) for CLR and Python exceptions alike."""
    message = getattr(exc, 'Message', None) or str(exc) or type(exc).__name__

    inner = getattr(exc, 'InnerException', None)
    if inner is None:
        inner = exc.__cause__ or exc.__context__
    if inner is None:
        return message, None

    inner_message = getattr(inner, 'Message', None) or str(inner) or type(inner).__name__
    return message, inner_message


class SchemaExtractor:
    """Load a Vintage Story installation and extract its protobuf schema.

    Example:
        extractor = SchemaExtractor("/home/me/.config/Vintagestory")
        schema = extractor.generate()   # None on failure
    """

    def __init__(self, base_dir: Union[str, Path, None],
                 options: Optional[SchemaOptions] = None):
        self.base_dir = base_dir
        self.options = options or SchemaOptions()
        self.loader = LibraryLoader(base_dir)
        self.contract_types: List[Any] = []

    def extract(self) -> str:
        """Run load, discovery and generation. Errors propagate."""
        loaded = self.loader.load()
        api = ProtobufApi.from_loaded(loaded)

        self.contract_types = find_contract_types(loaded.assembly, api.contract_attribute)
        log.info("Found %d [ProtoContract] types in %s",
                 len(self.contract_types), loaded.path.name)

        schema = build_schema(self.contract_types, api, self.options)
        log.info("Generated %d lines of proto", len(schema.split('\n')))
        return schema

    def generate(self) -> Optional[str]:
        """extract(), reporting any failure and returning None instead."""
        try:
            return self.extract()
        except Exception as e:
            message, inner = describe_error(e)
            print(f"Error: {message}")
            if inner:
                print(f"Inner: {inner}")
            log.debug("Schema extraction failed:\n%s", traceback.format_exc())
            return None


def generate_schema(base_dir: Union[str, Path, None],
                    package: str = DEFAULT_PACKAGE) -> Optional[str]:
    """Extract the schema from base_dir, or None if anything fails."""
    return SchemaExtractor(base_dir, SchemaOptions(package=package)).generate()
