"""
Compositions described by YAML configuration files.

compositions:
  norm:
    - builtins:abs
    - {member: real}
  answer:
    - {constant: 42}

Every item of a composition list is one of:
- reference 'package.module:attr.path' to an importable callable,
- {member: name}, member dispatch on the argument,
- {constant: value}, constant producer of the YAML value,
- !member name, !constant value, tagged forms of the two above,
- nested list, a sub-composition (flattened).
"""
from typing import *

import os
import logging
import importlib
import yaml

from ..exceptions import InvocationError
from ..invoke import Member
from ..primitives import constant, Constant
from ..fn import compose, Composed
from .report import report


class CompositionLoader(yaml.SafeLoader):
    """
    Safe YAML loader leaving timestamps as strings.
    Adds tags for the member dispatch and constant items:
        - !member imag
        - !constant 42
    """
    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:timestamp']
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_member(self, node):
        return Member(self.construct_scalar(node))

    def construct_constant(self, node):
        if isinstance(node, yaml.MappingNode):
            return constant(self.construct_mapping(node, deep=True))
        if isinstance(node, yaml.SequenceNode):
            return constant(self.construct_sequence(node, deep=True))
        # resolve the plain scalar type hidden by the explicit tag
        tag = self.resolve(yaml.ScalarNode, node.value, (True, False))
        return constant(self.construct_object(yaml.ScalarNode(tag, node.value)))


CompositionLoader.add_constructor('!member', CompositionLoader.construct_member)
CompositionLoader.add_constructor('!constant', CompositionLoader.construct_constant)


class dotdict(dict):
    """
    Dictionary with item access through attributes: cfg.compositions
    """
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError:
            raise AttributeError(item)


def to_dotdict(cfg: Any):
    """
    Copy of `cfg` with all nested dictionaries replaced by dotdict.
    """
    if isinstance(cfg, dict):
        return dotdict({k: to_dotdict(v) for k, v in cfg.items()})
    if isinstance(cfg, list):
        return list(map(to_dotdict, cfg))
    return cfg


def load_config(path) -> dotdict:
    """
    Load configuration from given file, replace dictionaries by dotdict.
    """
    with open(path) as f:
        cfg = yaml.load(f, Loader=CompositionLoader) or {}
    cfg['_config_root_dir'] = os.path.abspath(os.path.dirname(path))
    return to_dotdict(cfg)


def resolve_callable(ref: str):
    """
    Import object given by the reference 'package.module:attr.path'.
    """
    module_name, sep, attr_path = ref.partition(':')
    if not sep or not module_name or not attr_path:
        raise InvocationError(f"Wrong callable reference '{ref}', expected 'module:attribute'.")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise InvocationError(f"Callable reference '{ref}': {e}")
    for name in attr_path.split('.'):
        try:
            obj = getattr(obj, name)
        except AttributeError:
            raise InvocationError(f"Callable reference '{ref}': missing attribute '{name}'.")
    return obj


def _make_item(item):
    if isinstance(item, str):
        return resolve_callable(item)
    elif isinstance(item, (Member, Constant)):
        return item
    elif isinstance(item, list):
        return make_composition(item)
    elif isinstance(item, dict) and len(item) == 1:
        (key, value), = item.items()
        if key == 'member':
            return Member(value)
        if key == 'constant':
            return constant(value)
    raise InvocationError(f"Unknown composition item: {item!r}")


def make_composition(items: List[Any]) -> Composed:
    return compose(*[_make_item(i) for i in items])


@report
def load_compositions(path) -> dotdict:
    """
    Load the 'compositions' section of the configuration file `path`.
    Return dotdict name -> Composed.
    """
    cfg = load_config(path)
    compositions = dotdict()
    for name, items in (cfg.get('compositions') or {}).items():
        if not isinstance(items, list):
            items = [items]
        compositions[name] = make_composition(items)
        logging.info(f"Composition '{name}': {compositions[name]!r}")
    return compositions
