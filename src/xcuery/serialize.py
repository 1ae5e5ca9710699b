"""Dict, JSON and YAML forms of trees.

A node is stored as a dict of its fields plus its variant name under `TYPE_KEY`, children
recursively, so a whole tree can be restored from the root with `XmlNode.from_json` without
knowing its variant in advance.

"""
from __future__ import annotations

import inspect
from typing import Any, Type, TypeVar, cast

import orjson
import yaml
from mashumaro.mixins.dict import DataClassDictMixin
from mashumaro.types import SerializableType

YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)
YamlDumper = getattr(yaml, "CSafeDumper", yaml.SafeDumper)

TYPE_KEY = "__type"
"""Key holding the node variant name in the serialized form."""

TYPES: dict[str, Type[NodeSerializeMixin]] = {}
"""Serializable node variants by class name."""

T = TypeVar("T", bound="NodeSerializeMixin")


def json_loader(value: bytes | str) -> dict[str, Any]:
    return cast(dict[str, Any], orjson.loads(value))


def json_dumper(value: dict[str, Any], indent: bool = False) -> bytes:
    return orjson.dumps(value, option=orjson.OPT_INDENT_2 if indent else None)


def yaml_loader(value: bytes | str) -> dict[str, Any]:
    return cast(dict[str, Any], yaml.load(value, Loader=YamlLoader) or {})


def yaml_dumper(value: dict[str, Any]) -> str:
    # Keep field order (tag, attrs, children) as declared
    return cast(str, yaml.dump(value, Dumper=YamlDumper, sort_keys=False, allow_unicode=True))


class NodeSerializeMixin(DataClassDictMixin, SerializableType):
    """Serialization of tree nodes.

    Nested nodes go through `_serialize`/`_deserialize`, so a child typed as the base class is
    restored as the variant named in its dict.

    """

    __slots__ = ()

    def __post_serialize__(self, d: dict[str, Any]) -> dict[str, Any]:
        return {TYPE_KEY: self.__class__.__name__, **d}

    def _serialize(self) -> dict[str, Any]:
        return self.to_dict()

    @classmethod
    def _deserialize(cls: Type[T], value: dict[str, Any]) -> T:
        type_name = value.get(TYPE_KEY, cls.__name__)
        clazz = TYPES.get(type_name)

        if clazz is None or not issubclass(clazz, cls):
            raise ValueError(f"Unknown node type <{type_name}> for {cls.__name__}")

        # The type key is not a field and is ignored by from_dict
        return cast(T, clazz.from_dict(value))

    def __init_subclass__(cls, **kwargs: Any):
        known = TYPES.get(cls.__name__)

        # The same name may only be registered again by the same module, which happens when
        # dataclass re-creates a class with __slots__
        if known is not None and inspect.getmodule(cls) is not inspect.getmodule(known):
            raise ValueError(
                f"Node type <{cls.__name__}> is already defined in "
                f"{inspect.getmodule(known)!s}. Please use a different name."
            )

        TYPES[cls.__name__] = cls
        return super().__init_subclass__(**kwargs)

    def as_dict(self) -> dict[str, Any]:
        """Serialize this node and its subtree to a dictionary."""
        return self._serialize()

    @classmethod
    def as_obj(cls: Type[T], value: dict[str, Any]) -> T:
        """Restore a node from a dictionary made by `as_dict`.

        Raises:
            ValueError: If the variant is unknown or not a `cls`.
            mashumaro.exceptions.InvalidFieldValue: If a field value is malformed.

        """
        return cls._deserialize(value)

    def to_jsonb(self, *, indent: bool = False) -> bytes:
        return json_dumper(self.as_dict(), indent=indent)

    def to_json(self, *, indent: bool = False) -> str:
        """Serialize this node to JSON (as a string), indented by 2 spaces if `indent`."""
        return self.to_jsonb(indent=indent).decode(encoding="utf-8")

    @classmethod
    def from_json(cls: Type[T], value: bytes | str) -> T:
        return cls.as_obj(json_loader(value))

    def to_yaml(self) -> str:
        return yaml_dumper(self.as_dict())

    @classmethod
    def from_yaml(cls: Type[T], value: bytes | str) -> T:
        return cls.as_obj(yaml_loader(value))
