"""YAML loading shared by the key-value and Kubernetes parsers."""

from __future__ import annotations

from typing import Any

import yaml

_BOOL_TAG = "tag:yaml.org,2002:bool"
_STR_TAG = "tag:yaml.org,2002:str"


class KeyPreservingLoader(yaml.SafeLoader):
    """``SafeLoader`` that keeps plain mapping keys such as ``on`` or ``no`` as text.

    PyYAML resolves YAML 1.1 booleans (``yes``/``no``/``on``/``off``) in key
    position too, which renames keys and can merge distinct ones.  Values
    are left untouched.
    """

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        # merge keys (<<) are spliced in here, so flatten before retagging
        self.flatten_mapping(node)
        for key_node, _ in node.value:
            if isinstance(key_node, yaml.ScalarNode) and key_node.tag == _BOOL_TAG:
                key_node.tag = _STR_TAG
        return super().construct_mapping(node, deep=deep)


def load_yaml(content: str) -> Any:
    """Decode a single YAML document; raises ``yaml.YAMLError`` on bad input."""
    return yaml.load(content, Loader=KeyPreservingLoader)  # noqa: S506
