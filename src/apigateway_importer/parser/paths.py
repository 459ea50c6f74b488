"""Path-tree builder.

Turns the flat ``paths`` map of a document into a nested tree of resource
nodes, one node per path segment:

    {"/": {get}, "/user": {get}, "/user/{id}": {delete}}

becomes

    {"/": (GET), "user": (GET, paths={"{id}": (DELETE)})}
"""

from collections.abc import Mapping

from pydantic import BaseModel

from .base import Operation

ROOT_PATH = "/"


class ResourceNode(BaseModel):
    """One path segment's resource, its verbs, and its child segments."""

    methods: dict[str, Operation] = {}  # uppercase verb -> operation
    paths: dict[str, "ResourceNode"] = {}

    @property
    def has_children(self) -> bool:
        return bool(self.paths)


ResourceTree = dict[str, ResourceNode]


def split_path(key: str) -> list[str]:
    if key == ROOT_PATH:
        return [ROOT_PATH]
    return key[1:].split("/")


def build_tree(paths: Mapping[str, Mapping[str, Operation]]) -> ResourceTree:
    """Build the resource tree; sibling order follows the order of ``paths``."""
    tree: ResourceTree = {}

    for key, operations in paths.items():
        route = tree
        segments = split_path(key)

        for index, part in enumerate(segments):
            node = route.setdefault(part, ResourceNode())
            if index == len(segments) - 1:
                # Later verbs for the same node overwrite earlier ones
                node.methods.update({verb.upper(): op for verb, op in operations.items()})
            else:
                route = node.paths

    return tree
